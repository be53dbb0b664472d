from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Callable, Optional

from ..core.constants import LAST_NOTION_SYNC_KEY
from ..core.exceptions import ExternalServiceError
from ..settings.repository import SettingRepository
from .extract import extract_tag_name
from .model import SyncResult
from .notion_client import NotionClient
from .repository import TagRepository

logger = logging.getLogger(__name__)


class TagSyncService:
    """Mirror Notion database pages into the tags table.

    The Notion client is built on first use so the API can start without
    Notion credentials; only the sync endpoints need them.
    """

    def __init__(
        self,
        tags: TagRepository,
        settings: SettingRepository,
        *,
        client_factory: Callable[[], NotionClient],
        clock: Callable[[], datetime] | None = None,
    ):
        self._tags = tags
        self._settings = settings
        self._client_factory = client_factory
        self._client: Optional[NotionClient] = None
        self._clock = clock or datetime.now

    def _notion(self) -> NotionClient:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def sync(self) -> SyncResult:
        try:
            pages = self._notion().query_pages()
        except ExternalServiceError as e:
            logger.error("Notion tag sync aborted: %s", e.message)
            raise ExternalServiceError("Notion tag sync failed") from e

        new_tags = 0
        updated_tags = 0
        total_synced = 0

        for page in pages:
            name = extract_tag_name(page)
            if name is None:
                continue

            notion_id = page.get("id")
            try:
                existing = self._tags.get_by_notion_id(notion_id)
                if existing is None:
                    self._tags.create(name=name, notion_id=notion_id, is_active=True)
                    new_tags += 1
                elif existing.name != name:
                    self._tags.update(existing.tag_id, name=name, is_active=existing.is_active)
                    updated_tags += 1
                total_synced += 1
            except Exception as e:
                # One bad row must not stop the batch.
                logger.warning("tag sync failed for %r (%s): %s", name, notion_id, e)

        result = SyncResult(
            new_tags=new_tags,
            updated_tags=updated_tags,
            total_synced=total_synced,
            last_sync_at=self._clock().isoformat(),
        )
        self._settings.upsert(LAST_NOTION_SYNC_KEY, json.dumps(result.to_dict()))
        logger.info("Notion tag sync done: %d new, %d updated, %d synced", new_tags, updated_tags, total_synced)
        return result

    def get_last_sync(self) -> Optional[dict]:
        raw = self._settings.get(LAST_NOTION_SYNC_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("stored Notion sync result is not valid JSON")
            return None
        return data if isinstance(data, dict) else None

    def notion_info(self) -> dict:
        try:
            database = self._notion().retrieve_database()
        except ExternalServiceError as e:
            logger.warning("Notion connection check failed: %s", e.message)
            return {"connected": False, "database_title": None}

        title_items = database.get("title") or []
        title = "".join(item.get("plain_text", "") for item in title_items) or None
        return {"connected": True, "database_title": title}
