"""Outbound wire models for entries and categories edited on this device."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_serializer

from ..domain.entries.models import Category, Entry
from ..domain.entries.timestamps import serialize_timestamp

__all__ = [
    "CategoryOut",
    "EntryOut",
    "serialize_category",
    "serialize_entry",
]


class EntryOut(BaseModel):
    id: str
    content_type: str
    content: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    thumbnail: Optional[str] = None
    original_deleted: bool = False
    created_at: datetime
    is_bookmarked: bool = False
    upload_failed: Optional[bool] = Field(
        default=None, description="Local draft echo; omitted for server-bound payloads."
    )

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return serialize_timestamp(value)

    @classmethod
    def from_entry(cls, entry: Entry, *, include_local_state: bool = False) -> "EntryOut":
        return cls(
            id=entry.id,
            content_type=entry.content_type,
            content=entry.content,
            file_path=entry.file_path,
            file_name=entry.file_name,
            thumbnail=entry.thumbnail,
            original_deleted=entry.original_deleted,
            created_at=entry.created_at,
            is_bookmarked=entry.is_bookmarked,
            upload_failed=entry.lifecycle.upload_failed if include_local_state else None,
        )


class CategoryOut(BaseModel):
    id: str
    name: str
    item_count: int = 0
    is_shared: bool = False
    allow_member_edit: bool = False
    is_joined: bool = False
    is_creator: bool = False

    @classmethod
    def from_category(cls, category: Category) -> "CategoryOut":
        return cls(
            id=category.id,
            name=category.name,
            item_count=category.item_count,
            is_shared=category.is_shared,
            allow_member_edit=category.allow_member_edit,
            is_joined=category.is_joined,
            is_creator=category.is_creator,
        )


def serialize_entry(entry: Entry, *, include_local_state: bool = False) -> Dict[str, Any]:
    """Return the JSON-ready dict for ``entry``."""

    model = EntryOut.from_entry(entry, include_local_state=include_local_state)
    exclude = None if include_local_state else {"upload_failed"}
    return model.model_dump(mode="json", exclude=exclude)


def serialize_category(category: Category) -> Dict[str, Any]:
    return CategoryOut.from_category(category).model_dump(mode="json")
