from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import DailyReport, EffortInput


class DailyReportRepository(Protocol):
    """Reports are always returned with their tag efforts."""

    def get_by_id(self, report_id: int) -> Optional[DailyReport]:
        raise NotImplementedError

    def get_by_user_and_date(self, user_id: int, report_date: date) -> Optional[DailyReport]:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date],
        end_date: Optional[date],
        limit: int,
    ) -> Sequence[DailyReport]:
        raise NotImplementedError

    def create_with_efforts(
        self,
        *,
        user_id: int,
        report_date: date,
        work_content: str,
        notes: str,
        total_hours: Decimal,
        efforts: Sequence[EffortInput],
    ) -> int:
        """Insert the report and its efforts atomically.

        Raises DuplicateError when the user already has a report for the date.
        """

        raise NotImplementedError

    def replace_with_efforts(
        self,
        report_id: int,
        *,
        work_content: str,
        notes: str,
        total_hours: Decimal,
        efforts: Sequence[EffortInput],
    ) -> None:
        """Update the report and swap its whole effort set atomically."""

        raise NotImplementedError
