from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Tag


class TagRepository(Protocol):
    def list_all(self) -> Sequence[Tag]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Tag]:
        raise NotImplementedError

    def search_active(self, query: str, *, limit: int) -> Sequence[Tag]:
        """Case-insensitive substring match on the name."""

        raise NotImplementedError

    def get_by_id(self, tag_id: int) -> Optional[Tag]:
        raise NotImplementedError

    def get_many(self, tag_ids: Sequence[int]) -> Sequence[Tag]:
        raise NotImplementedError

    def get_by_notion_id(self, notion_id: str) -> Optional[Tag]:
        raise NotImplementedError

    def create(self, *, name: str, notion_id: Optional[str] = None, is_active: bool = True) -> int:
        raise NotImplementedError

    def update(self, tag_id: int, *, name: str, is_active: bool) -> None:
        raise NotImplementedError
