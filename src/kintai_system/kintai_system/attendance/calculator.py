from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class WorkTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_minutes(self, clock_in: Optional[datetime], clock_out: Optional[datetime], break_minutes: int) -> int:
        raise NotImplementedError

    def total_hours(self, clock_in: Optional[datetime], clock_out: Optional[datetime], break_minutes: int) -> float:
        return round(self.worked_minutes(clock_in, clock_out, break_minutes) / 60, 2)


class StandardWorkTimeCalculator(WorkTimeCalculator):
    """Standard rule: whole minutes of (out - in) - break_minutes, not below 0."""

    def worked_minutes(self, clock_in: Optional[datetime], clock_out: Optional[datetime], break_minutes: int) -> int:
        if not clock_in or not clock_out:
            return 0
        minutes = int((clock_out - clock_in).total_seconds() // 60)
        minutes -= int(break_minutes or 0)
        return max(minutes, 0)
