from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Tag
from .repository import TagRepository

_COLUMNS = "tag_id, name, notion_id, is_active, created_at, updated_at"


def _to_tag(r: dict) -> Tag:
    return Tag(
        tag_id=int(r["tag_id"]),
        name=r["name"],
        notion_id=r.get("notion_id"),
        is_active=bool(r.get("is_active")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLTagRepository(TagRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Tag]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tags ORDER BY name ASC")
            return [_to_tag(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[Tag]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tags WHERE is_active=1 ORDER BY name ASC")
            return [_to_tag(r) for r in fetchall(cur)]

    def search_active(self, query: str, *, limit: int) -> Sequence[Tag]:
        like = "%" + query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM tags
                WHERE is_active=1 AND LOWER(name) LIKE %s
                ORDER BY name ASC
                LIMIT %s
                """,
                (like, int(limit)),
            )
            return [_to_tag(r) for r in fetchall(cur)]

    def get_by_id(self, tag_id: int) -> Optional[Tag]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tags WHERE tag_id=%s", (int(tag_id),))
            r = fetchone(cur)
            return _to_tag(r) if r else None

    def get_many(self, tag_ids: Sequence[int]) -> Sequence[Tag]:
        if not tag_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM tags WHERE tag_id IN ({in_clause(tag_ids)})",
                tuple(int(t) for t in tag_ids),
            )
            return [_to_tag(r) for r in fetchall(cur)]

    def get_by_notion_id(self, notion_id: str) -> Optional[Tag]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tags WHERE notion_id=%s", (notion_id,))
            r = fetchone(cur)
            return _to_tag(r) if r else None

    def create(self, *, name: str, notion_id: Optional[str] = None, is_active: bool = True) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO tags(name, notion_id, is_active) VALUES(%s,%s,%s)",
                (name, notion_id, 1 if is_active else 0),
            )
            return int(cur.lastrowid)

    def update(self, tag_id: int, *, name: str, is_active: bool) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tags SET name=%s, is_active=%s WHERE tag_id=%s",
                (name, 1 if is_active else 0, int(tag_id)),
            )
