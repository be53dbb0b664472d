from __future__ import annotations

import pytest
import requests

from src.kintai_system.kintai_system.core.exceptions import ExternalServiceError
from src.kintai_system.kintai_system.tags.notion_client import NotionClient


class StubResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class StubSession:
    def __init__(self, responses):
        self.headers = {}
        self.calls = []
        self._responses = list(responses)

    def request(self, method, url, json=None, timeout=None):
        self.calls.append((method, url, json))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _page(page_id):
    return {"id": page_id, "properties": {"Name": {"type": "title", "title": [{"plain_text": page_id}]}}}


def test_query_pages_follows_cursor():
    session = StubSession(
        [
            StubResponse({"results": [_page("a"), _page("b")], "has_more": True, "next_cursor": "c1"}),
            StubResponse({"results": [_page("c")], "has_more": False, "next_cursor": None}),
        ]
    )
    client = NotionClient(api_key="secret", database_id="db1", session=session)

    pages = client.query_pages()

    assert [p["id"] for p in pages] == ["a", "b", "c"]
    assert session.headers["Authorization"] == "Bearer secret"
    assert "Notion-Version" in session.headers
    first, second = session.calls
    assert first[0] == "POST" and first[1].endswith("/databases/db1/query")
    assert "start_cursor" not in first[2]
    assert second[2]["start_cursor"] == "c1"


def test_query_pages_stops_at_max_pages():
    session = StubSession(
        [
            StubResponse({"results": [_page("a"), _page("b")], "has_more": True, "next_cursor": "c1"}),
            StubResponse({"results": [_page("c"), _page("d")], "has_more": True, "next_cursor": "c2"}),
        ]
    )
    client = NotionClient(api_key="secret", database_id="db1", session=session)

    pages = client.query_pages(max_pages=3)

    assert [p["id"] for p in pages] == ["a", "b", "c"]
    assert session.calls[1][2]["page_size"] == 1


@pytest.mark.parametrize(
    "response",
    [StubResponse({"message": "unauthorized"}, status_code=401), requests.ConnectionError("boom")],
)
def test_transport_and_http_errors_become_external_service_error(response):
    client = NotionClient(api_key="secret", database_id="db1", session=StubSession([response]))

    with pytest.raises(ExternalServiceError):
        client.query_pages()


def test_missing_configuration():
    with pytest.raises(ExternalServiceError):
        NotionClient(api_key="", database_id="db1", session=StubSession([]))
    with pytest.raises(ExternalServiceError):
        NotionClient(api_key="secret", database_id="", session=StubSession([]))
