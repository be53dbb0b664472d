from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_bool, require_non_empty
from ..core.constants import TAG_SEARCH_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from .model import Tag
from .repository import TagRepository

logger = logging.getLogger(__name__)


class TagService:
    def __init__(self, tags: TagRepository, *, search_limit: int = TAG_SEARCH_LIMIT):
        self._tags = tags
        self._search_limit = int(search_limit)

    def list_all(self) -> Sequence[Tag]:
        return self._tags.list_all()

    def list_active(self) -> Sequence[Tag]:
        return self._tags.list_active()

    def search(self, query: Optional[str]) -> Sequence[Tag]:
        if not query or not query.strip():
            raise ValidationError("Search query (q) is required")
        return self._tags.search_active(query.strip(), limit=self._search_limit)

    def create(self, *, name: Optional[str], is_active: bool = True) -> Tag:
        clean = require_non_empty(name, "Tag name")
        tag_id = self._tags.create(name=clean, is_active=require_bool(is_active, "is_active"))
        logger.info("tag %s created: %s", tag_id, clean)
        return self._get(tag_id)

    def update(self, tag_id: int, *, name: Optional[str] = None, is_active: Optional[bool] = None) -> Tag:
        tag = self._get(tag_id)
        new_name = require_non_empty(name, "Tag name") if name is not None else tag.name
        new_active = require_bool(is_active, "is_active") if is_active is not None else tag.is_active

        self._tags.update(tag_id, name=new_name, is_active=new_active)
        logger.info("tag %s updated", tag_id)
        return self._get(tag_id)

    def _get(self, tag_id: int) -> Tag:
        tag = self._tags.get_by_id(tag_id)
        if not tag:
            raise NotFoundError("Tag not found")
        return tag
