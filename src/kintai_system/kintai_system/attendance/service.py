from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import month_range, period_range
from ..core.constants import DEFAULT_BREAK_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .calculator import StandardWorkTimeCalculator, WorkTimeCalculator
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceReportRow, AttendanceSummary, AttendanceWithUser, ClockResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Clock-in / clock-out state machine plus the read views around it."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        calculator: WorkTimeCalculator | None = None,
        clock: Callable[[], datetime] | None = None,
        default_break_minutes: int = DEFAULT_BREAK_MINUTES,
        timezone: str | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._calculator = calculator or StandardWorkTimeCalculator()
        self._clock = clock or datetime.now
        self._default_break = int(default_break_minutes)
        self.timezone = timezone

    def today(self) -> date:
        return self._clock().date()

    def get_today(self, user_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, self.today())

    def clock_in(self, user_id: int, *, now: datetime | None = None) -> ClockResult:
        now = now or self._clock()
        today = now.date()

        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.clock_in is not None:
            raise ValidationError("You have already clocked in today")

        strategy = self._factory.for_clock_in(now=now, today=today)
        decision = strategy.decide_clock_in(now=now)

        self._attendance.upsert_clock_in(user_id=user_id, work_date=today, clock_in=now, status=decision.status)
        logger.info("user %s clocked in at %s (%s)", user_id, now.isoformat(), decision.status.value)
        return ClockResult(self._reload(user_id, today), decision.message)

    def clock_out(
        self,
        user_id: int,
        *,
        now: datetime | None = None,
        break_minutes: int | None = None,
    ) -> ClockResult:
        now = now or self._clock()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.clock_in is None:
            raise ValidationError("You have not clocked in today")
        if record.clock_out is not None:
            raise ValidationError("You have already clocked out today")
        if break_minutes is not None and break_minutes < 0:
            raise ValidationError("break_minutes must not be negative")

        if break_minutes is None:
            break_minutes = record.break_minutes if record.break_minutes > 0 else self._default_break

        total_hours = self._calculator.total_hours(record.clock_in, now, break_minutes)
        strategy = self._factory.for_clock_out(now=now, today=today, current_status=record.status)
        decision = strategy.decide_clock_out(now=now, current=record.status)

        updated = self._attendance.update_clock_out(
            attendance_id=record.attendance_id,
            clock_out=now,
            break_minutes=break_minutes,
            total_hours=total_hours,
            status=decision.status,
        )
        if not updated:
            # Another request recorded the clock-out first.
            raise ValidationError("You have already clocked out today")

        logger.info("user %s clocked out at %s (%.2f h)", user_id, now.isoformat(), total_hours)
        return ClockResult(self._reload(user_id, today), decision.message)

    def _reload(self, user_id: int, work_date: date) -> AttendanceRecord:
        record = self._attendance.get_for_user_and_date(user_id, work_date)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def get_history(
        self,
        user_id: int,
        *,
        year: int | None = None,
        month: int | None = None,
    ) -> Sequence[AttendanceRecord]:
        if year is not None and month is not None:
            start, end = month_range(year, month)
        else:
            today = self.today()
            start, end = month_range(today.year, today.month)
        return self._attendance.list_for_user(user_id, start_date=start, end_date=end)

    def get_summary(
        self,
        user_id: int,
        *,
        year: int | None = None,
        month: int | None = None,
    ) -> AttendanceSummary:
        start, end = period_range(self.today(), year=year, month=month)
        records = self._attendance.list_for_user(user_id, start_date=start, end_date=end)
        return summarize(records)

    def list_for_date(self, work_date: date | None = None) -> Sequence[AttendanceWithUser]:
        return self._attendance.list_for_date(work_date or self.today())

    def admin_update(
        self,
        attendance_id: int,
        *,
        clock_in: datetime | None = None,
        clock_out: datetime | None = None,
        break_minutes: int | None = None,
        status: str | None = None,
    ) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")

        if status:
            try:
                new_status = AttendanceStatus(status)
            except ValueError:
                raise ValidationError(f"Invalid status: {status!r}")
        else:
            new_status = record.status

        if break_minutes is not None and break_minutes < 0:
            raise ValidationError("break_minutes must not be negative")
        break_minutes = break_minutes or 0

        if clock_in and clock_out and clock_out < clock_in:
            raise ValidationError("clock_out must not be earlier than clock_in")

        total_hours = self._calculator.total_hours(clock_in, clock_out, break_minutes)
        self._attendance.admin_update_record(
            attendance_id=attendance_id,
            clock_in=clock_in,
            clock_out=clock_out,
            break_minutes=break_minutes,
            total_hours=total_hours,
            status=new_status,
        )
        logger.info("attendance %s updated by admin", attendance_id)

        updated = self._attendance.get_by_id(attendance_id)
        if not updated:
            raise NotFoundError("Attendance record not found")
        return updated

    def export_rows(
        self,
        *,
        start: date,
        end: date,
        dept_id: int | None = None,
        user_id: int | None = None,
    ) -> Sequence[AttendanceReportRow]:
        if start > end:
            raise ValidationError("start must be on or before end")
        return self._attendance.get_report_rows(start_date=start, end_date=end, dept_id=dept_id, user_id=user_id)


def summarize(records: Sequence[AttendanceRecord]) -> AttendanceSummary:
    total_days = len(records)
    total_hours = round(sum(r.total_hours for r in records), 2)

    def count(status: AttendanceStatus) -> int:
        return sum(1 for r in records if r.status == status)

    return AttendanceSummary(
        total_days=total_days,
        present_days=count(AttendanceStatus.PRESENT),
        late_days=count(AttendanceStatus.LATE),
        early_leave_days=count(AttendanceStatus.EARLY_LEAVE),
        absent_days=count(AttendanceStatus.ABSENT),
        total_hours=total_hours,
        average_hours=round(total_hours / total_days, 2) if total_days else 0.0,
    )
