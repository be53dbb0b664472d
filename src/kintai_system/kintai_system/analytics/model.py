from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TagTotal:
    tag_id: int
    tag_name: str
    total_hours: float
    user_count: int = 0
    entry_count: int = 0


@dataclass(frozen=True)
class UserTotal:
    user_id: int
    full_name: str
    employee_code: str
    total_hours: float
    report_days: int

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "employee_code": self.employee_code,
            "total_hours": self.total_hours,
            "report_days": self.report_days,
        }


@dataclass(frozen=True)
class DepartmentAttendance:
    dept_id: int
    dept_name: str
    employee_count: int
    average_hours: Optional[float]
    total_hours: float
    late_count: int
    absent_count: int

    def to_dict(self) -> dict:
        return {
            "dept_id": self.dept_id,
            "dept_name": self.dept_name,
            "employee_count": self.employee_count,
            "average_hours": self.average_hours,
            "total_hours": self.total_hours,
            "late_count": self.late_count,
            "absent_count": self.absent_count,
        }
