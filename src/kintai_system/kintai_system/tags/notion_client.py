from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from ..core.constants import NOTION_API_VERSION, NOTION_MAX_PAGES, NOTION_PAGE_SIZE, NOTION_TIMEOUT_SECONDS
from ..core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

NOTION_BASE_URL = "https://api.notion.com/v1"


class NotionClient:
    """Thin REST client for one Notion database."""

    def __init__(
        self,
        *,
        api_key: str,
        database_id: str,
        session: Optional[requests.Session] = None,
        base_url: str = NOTION_BASE_URL,
        timeout: float = NOTION_TIMEOUT_SECONDS,
    ):
        if not api_key:
            raise ExternalServiceError("NOTION_API_KEY is not configured")
        if not database_id:
            raise ExternalServiceError("NOTION_DATABASE_ID is not configured")

        self._database_id = database_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Notion-Version": NOTION_API_VERSION,
                "Content-Type": "application/json",
            }
        )

    def _request(self, method: str, path: str, *, json: Optional[dict] = None) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            resp = self._session.request(method, url, json=json, timeout=self._timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Notion API %s %s failed: %s", method, path, e)
            raise ExternalServiceError("Could not fetch data from Notion") from e

    def query_pages(self, *, max_pages: int = NOTION_MAX_PAGES) -> List[Dict[str, Any]]:
        """All pages of the database, one request per batch of NOTION_PAGE_SIZE."""
        pages: List[Dict[str, Any]] = []
        cursor: Optional[str] = None

        while len(pages) < max_pages:
            payload: Dict[str, Any] = {"page_size": min(NOTION_PAGE_SIZE, max_pages - len(pages))}
            if cursor:
                payload["start_cursor"] = cursor

            data = self._request("POST", f"/databases/{self._database_id}/query", json=payload)
            for page in data.get("results") or []:
                pages.append({"id": page.get("id"), "properties": page.get("properties") or {}})

            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                break

        logger.info("fetched %d pages from Notion", len(pages))
        return pages[:max_pages]

    def retrieve_database(self) -> Dict[str, Any]:
        return self._request("GET", f"/databases/{self._database_id}")
