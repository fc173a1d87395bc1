"""Canonical clipboard entry and category records."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Mapping, Optional
from uuid import uuid4

from .images import DisplayImageState, classify_display_image
from ...infra.events import EventEmitter
from .lifecycle import LifecycleCell, LifecycleFlags
from .timestamps import parse_timestamp
from .wire import decode_bool, decode_int, decode_optional_string, decode_string

__all__ = [
    "Category",
    "ContentType",
    "Entry",
    "EntryPage",
    "utcnow",
]


def utcnow() -> datetime:
    """Return timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


class ContentType(str, Enum):
    """Content kinds the sync service knows about."""

    TEXT = "text"
    URL = "url"
    IMAGE = "image"


EDITABLE_CONTENT_TYPES = frozenset({ContentType.TEXT.value, ContentType.URL.value})

_CELL_LOCK = threading.Lock()


@dataclass(frozen=True)
class Entry:
    """One clipboard history record decoded from the wire.

    Wire fields are frozen. ``display`` and ``lifecycle`` are per-instance
    state objects mutated in place by the classifier and the sync engine.
    """

    id: str
    content_type: str
    created_at: datetime
    content: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    thumbnail: Optional[str] = None
    original_deleted: bool = False
    is_bookmarked: bool = False
    display: DisplayImageState = field(
        default_factory=DisplayImageState, compare=False, repr=False
    )
    lifecycle: LifecycleFlags = field(
        default_factory=LifecycleFlags, compare=False, repr=False
    )
    _cell: Optional[LifecycleCell] = field(
        default=None, init=False, compare=False, repr=False
    )

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "Entry":
        """Decode a wire mapping, coercing every loosely-typed scalar."""

        raw_id = payload.get("id")
        entry_id = decode_string(raw_id) if raw_id is not None else ""
        content_type = decode_string(payload.get("content_type") or "text")
        return cls(
            id=entry_id or str(uuid4()),
            content_type=content_type.strip().lower() or ContentType.TEXT.value,
            created_at=parse_timestamp(payload.get("created_at")),
            content=decode_optional_string(payload.get("content")),
            file_path=decode_optional_string(payload.get("file_path")),
            file_name=decode_optional_string(payload.get("file_name")),
            thumbnail=decode_optional_string(payload.get("thumbnail")),
            original_deleted=decode_bool(payload.get("original_deleted")),
            is_bookmarked=decode_bool(payload.get("is_bookmarked")),
            lifecycle=LifecycleFlags(
                upload_failed=decode_bool(payload.get("upload_failed"))
            ),
        )

    @classmethod
    def new(
        cls,
        *,
        content_type: str = ContentType.TEXT.value,
        content: Optional[str] = None,
        file_path: Optional[str] = None,
        file_name: Optional[str] = None,
        thumbnail: Optional[str] = None,
        entry_id: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> "Entry":
        """Factory for locally captured entries not yet known to the server."""

        return cls(
            id=entry_id or str(uuid4()),
            content_type=content_type,
            created_at=timestamp or utcnow(),
            content=content,
            file_path=file_path,
            file_name=file_name,
            thumbnail=thumbnail,
        )

    @property
    def is_image(self) -> bool:
        return self.content_type == ContentType.IMAGE.value

    @property
    def is_editable(self) -> bool:
        return self.content_type in EDITABLE_CONTENT_TYPES

    def initialize_image_state(self) -> DisplayImageState:
        """Classify the display image once and store it on this entry."""

        state = classify_display_image(self)
        if self.is_image:
            self.display.display_image_data = state.display_image_data
            self.display.is_thumbnail = state.is_thumbnail
        return self.display

    def lifecycle_cell(self, *, emitter: Optional[EventEmitter] = None) -> LifecycleCell:
        """Return the single observable cell for this entry's flags.

        The cell is created on first use; ``emitter`` only applies then.
        """

        with _CELL_LOCK:
            if self._cell is None:
                object.__setattr__(
                    self,
                    "_cell",
                    LifecycleCell(self.id, self.lifecycle, emitter=emitter),
                )
            return self._cell

    def with_text_edit(self, text: str) -> "Entry":
        """Return a copy with edited content; non-text entries are unchanged."""

        if not self.is_editable:
            return self
        return self._copy(content=text)

    def merge_remote(self, remote: "Entry") -> "Entry":
        """Refresh server-owned mutable fields from a newer copy of this entry."""

        merged = self._copy(
            is_bookmarked=remote.is_bookmarked,
            content=remote.content,
        )
        if merged.content != self.content:
            merged.initialize_image_state()
        return merged

    def _copy(self, **changes: Any) -> "Entry":
        return replace(
            self,
            display=replace(self.display),
            lifecycle=replace(self.lifecycle),
            **changes,
        )


@dataclass
class Category:
    """Category (shared folder) an entry can be filed under."""

    id: str
    name: str
    item_count: int = 0
    is_shared: bool = False
    allow_member_edit: bool = False
    is_joined: bool = False
    is_creator: bool = False
    created_at: Optional[str] = None
    is_selected: bool = field(default=False, compare=False)

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "Category":
        raw_id = payload.get("id")
        return cls(
            id=decode_string(raw_id) if raw_id is not None else "",
            name=decode_string(payload.get("name") or ""),
            item_count=decode_int(payload.get("item_count")),
            is_shared=decode_bool(payload.get("is_shared")),
            allow_member_edit=decode_bool(payload.get("allow_member_edit")),
            is_joined=decode_bool(payload.get("is_joined")),
            is_creator=decode_bool(payload.get("is_creator")),
            created_at=decode_optional_string(payload.get("created_at")),
        )


@dataclass
class EntryPage:
    items: List[Entry]
    total: int
    page: int
    page_size: int
    has_more: bool = False
