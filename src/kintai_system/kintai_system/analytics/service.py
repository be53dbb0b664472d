from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional, Sequence

from ..common.datetime_utils import month_range
from ..core.exceptions import ValidationError
from .model import TagTotal
from .repository import AnalyticsRepository


def with_percentages(rows: Sequence[TagTotal]) -> tuple[List[dict], float]:
    """Attach each tag's share of the grand total of the same rows.

    Returns the enriched rows and the grand total. Every percentage is 0
    when the total is 0.
    """
    total = sum(r.total_hours for r in rows)
    enriched = []
    for r in rows:
        enriched.append(
            {
                "tag_id": r.tag_id,
                "tag_name": r.tag_name,
                "total_hours": r.total_hours,
                "user_count": r.user_count,
                "entry_count": r.entry_count,
                "percentage": round(r.total_hours / total * 100, 2) if total > 0 else 0,
            }
        )
    return enriched, round(total, 2)


def _require_range(start: Optional[date], end: Optional[date]) -> tuple[date, date]:
    if start is None or end is None:
        raise ValidationError("start_date and end_date are required")
    if start > end:
        raise ValidationError("start_date must be on or before end_date")
    return start, end


class AnalyticsService:
    def __init__(self, analytics: AnalyticsRepository, *, today: Callable[[], date] | None = None):
        self._analytics = analytics
        self._today = today or date.today

    def employee_effort_summary(self, user_id: int, *, start: Optional[date], end: Optional[date]) -> List[dict]:
        start, end = _require_range(start, end)
        rows = self._analytics.tag_totals(start_date=start, end_date=end, user_id=user_id)
        enriched, _ = with_percentages(rows)
        return [
            {
                "tag_id": r["tag_id"],
                "tag_name": r["tag_name"],
                "total_hours": r["total_hours"],
                "percentage": r["percentage"],
            }
            for r in enriched
        ]

    def admin_tag_efforts_summary(
        self,
        *,
        start: Optional[date],
        end: Optional[date],
        user_id: Optional[int] = None,
    ) -> dict:
        start, end = _require_range(start, end)
        tag_rows = self._analytics.tag_totals(start_date=start, end_date=end, user_id=user_id)
        user_rows = self._analytics.user_totals(start_date=start, end_date=end, user_id=user_id)
        tag_summary, total = with_percentages(tag_rows)
        return {
            "period": {"start_date": start.isoformat(), "end_date": end.isoformat()},
            "tag_summary": tag_summary,
            "user_summary": [u.to_dict() for u in user_rows],
            "total_hours": total,
        }

    def monthly_report(self, *, year: Optional[int] = None, month: Optional[int] = None) -> dict:
        if year is not None and month is not None:
            start, end = month_range(year, month)
        else:
            today = self._today()
            start, end = month_range(today.year, today.month)

        rows = self._analytics.department_attendance(start_date=start, end_date=end)
        return {
            "period": {"start_date": start.isoformat(), "end_date": end.isoformat()},
            "department_summary": [r.to_dict() for r in rows],
        }
