from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time clock-in, normal clock-out."""

    def decide_clock_in(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT, message="Clocked in")

    def decide_clock_out(self, *, now: datetime, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current, message="Clocked out")
