from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late clock-in; a late day keeps LATE on clock-out."""

    def decide_clock_in(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, message="Clocked in (late)")

    def decide_clock_out(self, *, now: datetime, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, message="Clocked out")
