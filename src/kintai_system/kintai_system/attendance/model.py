from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (user, work_date)."""

    attendance_id: int
    user_id: int
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    break_minutes: int
    total_hours: float
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "user_id": self.user_id,
            "work_date": self.work_date.isoformat(),
            "clock_in": _iso(self.clock_in),
            "clock_out": _iso(self.clock_out),
            "break_minutes": self.break_minutes,
            "total_hours": self.total_hours,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ClockResult:
    """A clock-in or clock-out outcome with the message shown to the employee."""

    record: AttendanceRecord
    message: str


@dataclass(frozen=True)
class AttendanceWithUser:
    """Read-model for the admin daily list."""

    record: AttendanceRecord
    employee_code: str
    full_name: str
    email: str
    dept_id: Optional[int]

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["user"] = {
            "user_id": self.record.user_id,
            "employee_code": self.employee_code,
            "full_name": self.full_name,
            "email": self.email,
            "dept_id": self.dept_id,
        }
        return data


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for exports (optimized for the query)."""

    user_id: int
    employee_code: str
    full_name: str
    dept_name: Optional[str]
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    break_minutes: int
    total_hours: float
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceSummary:
    total_days: int
    present_days: int
    late_days: int
    early_leave_days: int
    absent_days: int
    total_hours: float
    average_hours: float

    def to_dict(self) -> dict:
        return {
            "total_days": self.total_days,
            "present_days": self.present_days,
            "late_days": self.late_days,
            "early_leave_days": self.early_leave_days,
            "absent_days": self.absent_days,
            "total_hours": self.total_hours,
            "average_hours": self.average_hours,
        }
