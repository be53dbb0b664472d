from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class EarlyLeaveStrategy(AttendanceStrategy):
    """Early leave on clock-out (never chosen for a LATE day)."""

    def decide_clock_in(self, *, now: datetime) -> StatusDecision:
        raise ValueError("Early leave only applies to clock-out")

    def decide_clock_out(self, *, now: datetime, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EARLY_LEAVE, message="Clocked out (early leave)")
