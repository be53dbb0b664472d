from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    message: str = ""


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_clock_in(self, *, now: datetime) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_clock_out(self, *, now: datetime, current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
