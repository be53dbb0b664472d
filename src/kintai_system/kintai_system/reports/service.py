from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional, Sequence

from ..common.validators import optional_int, optional_text, require_non_empty, require_positive_hours
from ..core.constants import DEFAULT_REPORT_LIST_LIMIT, MAX_DAILY_EFFORT_HOURS
from ..core.exceptions import AuthorizationError, DuplicateError, NotFoundError, ValidationError
from ..tags.repository import TagRepository
from .model import DailyReport, EffortInput
from .repository import DailyReportRepository

logger = logging.getLogger(__name__)


class DailyReportService:
    """Daily work reports and the per-tag hours booked on them.

    Business rules:
    - One report per user and date.
    - Every effort references an existing tag, once, with positive hours.
    - The efforts of one report add up to at most MAX_DAILY_EFFORT_HOURS.
    """

    def __init__(
        self,
        reports: DailyReportRepository,
        tags: TagRepository,
        *,
        max_daily_hours: int = MAX_DAILY_EFFORT_HOURS,
    ):
        self._reports = reports
        self._tags = tags
        self._max_hours = Decimal(max_daily_hours)

    def get(self, user_id: int, report_date: Optional[date]) -> Optional[DailyReport]:
        if report_date is None:
            raise ValidationError("date is required")
        return self._reports.get_by_user_and_date(user_id, report_date)

    def create(
        self,
        user_id: int,
        *,
        report_date: Optional[date],
        work_content: Optional[str],
        notes: Optional[str] = None,
        tag_efforts: Any = None,
    ) -> DailyReport:
        if report_date is None:
            raise ValidationError("date is required")
        content = require_non_empty(work_content, "work_content")
        efforts, total = self._validate_efforts(tag_efforts)

        if self._reports.get_by_user_and_date(user_id, report_date):
            raise DuplicateError("A report for this date already exists")

        report_id = self._reports.create_with_efforts(
            user_id=user_id,
            report_date=report_date,
            work_content=content,
            notes=optional_text(notes, "notes"),
            total_hours=total,
            efforts=efforts,
        )
        logger.info("user %s saved report %s for %s (%s h)", user_id, report_id, report_date.isoformat(), total)
        return self._get(report_id)

    def update(
        self,
        user_id: int,
        report_id: int,
        *,
        work_content: Optional[str],
        notes: Optional[str] = None,
        tag_efforts: Any = None,
    ) -> DailyReport:
        content = require_non_empty(work_content, "work_content")
        efforts, total = self._validate_efforts(tag_efforts)

        existing = self._reports.get_by_id(report_id)
        if not existing:
            raise NotFoundError("Report not found")
        if existing.user_id != user_id:
            raise AuthorizationError("You cannot edit this report")

        self._reports.replace_with_efforts(
            report_id,
            work_content=content,
            notes=optional_text(notes, "notes"),
            total_hours=total,
            efforts=efforts,
        )
        logger.info("user %s updated report %s (%s h)", user_id, report_id, total)
        return self._get(report_id)

    def list(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[DailyReport]:
        limit = DEFAULT_REPORT_LIST_LIMIT if limit is None else limit
        if limit <= 0:
            raise ValidationError("limit must be greater than 0")
        return self._reports.list_for_user(user_id, start_date=start, end_date=end, limit=limit)

    def _get(self, report_id: int) -> DailyReport:
        report = self._reports.get_by_id(report_id)
        if not report:
            raise NotFoundError("Report not found")
        return report

    def _validate_efforts(self, raw: Any) -> tuple[List[EffortInput], Decimal]:
        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise ValidationError("tag_efforts must be a list")

        efforts: List[EffortInput] = []
        seen: set[int] = set()
        for item in raw:
            if not isinstance(item, dict):
                raise ValidationError("Each tag effort must be an object")
            tag_id = optional_int(item.get("tag_id"), "tag_id")
            if tag_id is None:
                raise ValidationError("tag_id is required")
            if tag_id in seen:
                raise ValidationError("Each tag can only be used once per report")
            seen.add(tag_id)
            efforts.append(EffortInput(tag_id=tag_id, hours=require_positive_hours(item.get("hours"))))

        total = sum((e.hours for e in efforts), Decimal("0"))
        if total > self._max_hours:
            raise ValidationError(f"Total effort hours must be {self._max_hours} or less")

        if efforts:
            known = {t.tag_id for t in self._tags.get_many([e.tag_id for e in efforts])}
            missing = sorted(seen - known)
            if missing:
                raise ValidationError(f"Unknown tag id(s): {', '.join(str(m) for m in missing)}")

        return efforts, total
