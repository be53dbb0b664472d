from __future__ import annotations

from typing import Any, Mapping, Optional

# Checked in order before falling back to the first title property.
TITLE_FIELD_NAMES = ("物件名", "物件", "title", "Title", "name", "Name", "プロジェクト名", "プロジェクト")


def _find_title_property(properties: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    for name in TITLE_FIELD_NAMES:
        prop = properties.get(name)
        if isinstance(prop, Mapping) and prop.get("type") == "title":
            return prop

    for prop in properties.values():
        if isinstance(prop, Mapping) and prop.get("type") == "title":
            return prop
    return None


def _title_text(prop: Mapping[str, Any]) -> Optional[str]:
    items = prop.get("title")
    if not isinstance(items, list) or not items:
        return None

    first = items[0]
    if not isinstance(first, Mapping):
        return None
    if isinstance(first.get("plain_text"), str) and first["plain_text"]:
        return first["plain_text"]
    text = first.get("text")
    if not isinstance(text, Mapping) or not isinstance(text.get("content"), str):
        return None
    return text["content"] or None


def extract_tag_name(page: Mapping[str, Any]) -> Optional[str]:
    """Tag name from a Notion page, or None when the title is missing or blank."""
    if not isinstance(page, Mapping):
        return None
    properties = page.get("properties") or {}
    if not isinstance(properties, Mapping):
        return None

    prop = _find_title_property(properties)
    if prop is None:
        return None

    title = _title_text(prop)
    if title is None or not title.strip():
        return None
    return title.strip()
