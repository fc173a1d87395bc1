"""Decoders for the response and push-message shapes that carry entries."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .models import Category, Entry, EntryPage
from .wire import decode_bool, decode_int

__all__ = [
    "decode_categories",
    "decode_entry",
    "decode_entry_page",
    "unwrap_entry_event",
]


def decode_entry(payload: Mapping[str, Any]) -> Entry:
    """Decode one wire entry and classify its display image."""

    entry = Entry.from_wire(payload)
    entry.initialize_image_state()
    return entry


def decode_entry_page(payload: Any) -> EntryPage:
    """Accept either a bare JSON array or a paged ``{"items": [...]}`` object."""

    if isinstance(payload, list):
        items = _decode_entries(payload)
        return EntryPage(
            items=items,
            total=len(items),
            page=1,
            page_size=len(items),
            has_more=False,
        )
    if not isinstance(payload, Mapping):
        return EntryPage(items=[], total=0, page=1, page_size=0)

    items = _decode_entries(payload.get("items") or [])
    return EntryPage(
        items=items,
        total=decode_int(payload.get("total"), default=len(items)),
        page=decode_int(payload.get("page"), default=1),
        page_size=decode_int(payload.get("page_size"), default=len(items)),
        has_more=decode_bool(payload.get("has_more")),
    )


def decode_categories(payload: Any) -> List[Category]:
    if isinstance(payload, Mapping):
        payload = payload.get("categories") or []
    if not isinstance(payload, list):
        return []
    return [Category.from_wire(item) for item in payload if isinstance(item, Mapping)]


def unwrap_entry_event(payload: Any) -> Optional[Entry]:
    """Pull the entry out of a push notification.

    The entry is nested under ``data`` or ``item``; older servers send it as
    the message root.
    """

    if not isinstance(payload, Mapping):
        return None
    for key in ("data", "item"):
        if key in payload:
            nested = payload[key]
            return decode_entry(nested) if isinstance(nested, Mapping) else None
    if "id" in payload:
        return decode_entry(payload)
    return None


def _decode_entries(raw_items: Any) -> List[Entry]:
    if not isinstance(raw_items, list):
        return []
    return [decode_entry(item) for item in raw_items if isinstance(item, Mapping)]
