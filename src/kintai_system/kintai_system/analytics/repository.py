from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DepartmentAttendance, TagTotal, UserTotal


class AnalyticsRepository(Protocol):
    """Read-only aggregation queries; every method is safe to retry."""

    def tag_totals(self, *, start_date: date, end_date: date, user_id: Optional[int] = None) -> Sequence[TagTotal]:
        """Active tags with hours > 0 in the range, most hours first."""

        raise NotImplementedError

    def user_totals(self, *, start_date: date, end_date: date, user_id: Optional[int] = None) -> Sequence[UserTotal]:
        """Employees with hours > 0 in the range, most hours first."""

        raise NotImplementedError

    def department_attendance(self, *, start_date: date, end_date: date) -> Sequence[DepartmentAttendance]:
        raise NotImplementedError
