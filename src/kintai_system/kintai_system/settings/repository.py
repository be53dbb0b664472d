from __future__ import annotations

from typing import Optional, Protocol


class SettingRepository(Protocol):
    """Key/value application settings (text values)."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def upsert(self, key: str, value: str) -> None:
        raise NotImplementedError
