from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Tag:
    """Work category that daily-report hours are booked against."""

    tag_id: int
    name: str
    notion_id: Optional[str]
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "tag_id": self.tag_id,
            "name": self.name,
            "notion_id": self.notion_id,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class SyncResult:
    new_tags: int
    updated_tags: int
    total_synced: int
    last_sync_at: str

    def to_dict(self) -> dict:
        return {
            "new_tags": self.new_tags,
            "updated_tags": self.updated_tags,
            "total_synced": self.total_synced,
            "last_sync_at": self.last_sync_at,
        }
