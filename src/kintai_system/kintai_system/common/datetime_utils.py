from __future__ import annotations

import calendar
from datetime import date, datetime
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_iso_datetime(value: str | None, tz_name: str | None = None) -> datetime | None:
    """Parse an ISO-8601 timestamp into a naive datetime in `tz_name`.

    Timestamps carrying an offset (or a trailing Z) are converted first;
    naive ones are taken to be local wall-clock time already.
    """
    if not value:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid timestamp: {value!r}")
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(tz_name)) if tz_name else parsed.astimezone()
    return parsed.replace(tzinfo=None)


def now_local(tz_name: str | None = None) -> datetime:
    """Current wall-clock time in the configured zone, without tzinfo.

    Note: Wrapped so tests can patch/mock easier.
    """
    if not tz_name:
        return datetime.now()
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def month_range(year: int, month: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def year_range(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def period_range(today: date, *, year: int | None = None, month: int | None = None) -> tuple[date, date]:
    """Month when both are given, whole year for a year alone, else the current month."""
    if year is not None and month is not None:
        return month_range(year, month)
    if year is not None:
        return year_range(year)
    return month_range(today.year, today.month)
