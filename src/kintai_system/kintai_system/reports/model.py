from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class EffortInput:
    """Validated (tag, hours) pair about to be written."""

    tag_id: int
    hours: Decimal


@dataclass(frozen=True)
class TagEffort:
    tag_effort_id: int
    report_id: int
    tag_id: int
    tag_name: str
    hours: float

    def to_dict(self) -> dict:
        return {
            "tag_effort_id": self.tag_effort_id,
            "report_id": self.report_id,
            "tag_id": self.tag_id,
            "tag_name": self.tag_name,
            "hours": self.hours,
        }


@dataclass(frozen=True)
class DailyReport:
    report_id: int
    user_id: int
    report_date: date
    work_content: str
    notes: str
    total_hours: float
    tag_efforts: Tuple[TagEffort, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "report_id": self.report_id,
            "user_id": self.user_id,
            "report_date": self.report_date.isoformat(),
            "work_content": self.work_content,
            "notes": self.notes,
            "total_hours": self.total_hours,
            "tag_efforts": [e.to_dict() for e in self.tag_efforts],
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
