from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow, AttendanceWithUser


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Records in the range, newest first."""

        raise NotImplementedError

    def upsert_clock_in(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: datetime,
        status: AttendanceStatus,
    ) -> None:
        """Create the (user, date) row, or fill clock_in on a row that has none."""

        raise NotImplementedError

    def update_clock_out(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        break_minutes: int,
        total_hours: float,
        status: AttendanceStatus,
    ) -> bool:
        raise NotImplementedError

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        clock_in: Optional[datetime],
        clock_out: Optional[datetime],
        break_minutes: int,
        total_hours: float,
        status: AttendanceStatus,
    ) -> None:
        """Admin-only override."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceWithUser]:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        dept_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
