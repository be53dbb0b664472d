from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time

from ..core.constants import EARLY_LEAVE_THRESHOLD, LATE_THRESHOLD
from ..core.enums import AttendanceStatus
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    late_threshold: time = LATE_THRESHOLD
    early_leave_threshold: time = EARLY_LEAVE_THRESHOLD

    def for_clock_in(self, *, now: datetime, today: date) -> AttendanceStrategy:
        if now > datetime.combine(today, self.late_threshold):
            return LateStrategy()
        return NormalStrategy()

    def for_clock_out(self, *, now: datetime, today: date, current_status: AttendanceStatus) -> AttendanceStrategy:
        # LATE takes precedence: the record has a single status slot.
        if current_status == AttendanceStatus.LATE:
            return LateStrategy()
        if current_status in (AttendanceStatus.PRESENT, AttendanceStatus.EARLY_LEAVE, AttendanceStatus.ABSENT):
            if now < datetime.combine(today, self.early_leave_threshold):
                return EarlyLeaveStrategy()
            return NormalStrategy()
        raise ValueError(f"Unsupported attendance status: {current_status!r}")
