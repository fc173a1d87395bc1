"""Tests for canonical entry and category records."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import pytest

from client.app.domain.entries.models import Category, ContentType, Entry
from client.app.domain.entries.timestamps import SENTINEL_INSTANT

pytestmark = [pytest.mark.models]


def _wire_entry(**overrides):
    payload = {
        "id": 1024,
        "content_type": "text",
        "content": "hello",
        "file_path": None,
        "file_name": None,
        "thumbnail": None,
        "original_deleted": 0,
        "created_at": "2025-12-27T03:14:00",
        "is_bookmarked": "1",
    }
    payload.update(overrides)
    return payload


def test_from_wire_coerces_loose_scalars():
    entry = Entry.from_wire(_wire_entry())

    assert entry.id == "1024"
    assert entry.content_type == ContentType.TEXT.value
    assert entry.content == "hello"
    assert entry.original_deleted is False
    assert entry.is_bookmarked is True
    assert entry.created_at == datetime(2025, 12, 27, 3, 14, tzinfo=timezone.utc)


def test_from_wire_stringifies_non_string_content():
    entry = Entry.from_wire(_wire_entry(content=12345))

    assert entry.content == "12345"


def test_from_wire_generates_id_when_missing():
    entry = Entry.from_wire(_wire_entry(id=None))
    blank = Entry.from_wire(_wire_entry(id=""))

    assert UUID(entry.id)
    assert UUID(blank.id)


def test_from_wire_defaults_content_type_and_bad_dates():
    payload = _wire_entry(created_at="garbage")
    payload.pop("content_type")

    entry = Entry.from_wire(payload)

    assert entry.content_type == "text"
    assert entry.created_at == SENTINEL_INSTANT


def test_from_wire_reads_local_upload_echo():
    entry = Entry.from_wire(_wire_entry(upload_failed=True))

    assert entry.lifecycle.upload_failed is True
    assert entry.lifecycle.is_uploading is False
    assert entry.lifecycle.is_downloading_original is False


def test_state_objects_are_not_shared_between_instances():
    first = Entry.from_wire(_wire_entry())
    second = Entry.from_wire(_wire_entry())

    first.lifecycle.is_uploading = True

    assert second.lifecycle.is_uploading is False
    assert first.display is not second.display


def test_wire_fields_are_frozen():
    entry = Entry.from_wire(_wire_entry())

    with pytest.raises(AttributeError):
        entry.content = "changed"  # type: ignore[misc]


def test_text_edit_returns_copy_with_independent_state():
    entry = Entry.from_wire(_wire_entry())
    entry.lifecycle.upload_failed = True

    edited = entry.with_text_edit("updated")

    assert edited.content == "updated"
    assert entry.content == "hello"
    assert edited.lifecycle.upload_failed is True
    edited.lifecycle.upload_failed = False
    assert entry.lifecycle.upload_failed is True


def test_text_edit_ignored_for_images():
    entry = Entry.from_wire(_wire_entry(content_type="image", content=None))

    assert entry.with_text_edit("nope") is entry


def test_merge_remote_refreshes_bookmark_and_content():
    local = Entry.from_wire(_wire_entry())
    remote = Entry.from_wire(_wire_entry(content="from server", is_bookmarked=False))

    merged = local.merge_remote(remote)

    assert merged.content == "from server"
    assert merged.is_bookmarked is False
    assert merged.id == local.id


def test_merge_remote_reclassifies_image_preview():
    preview = "data:image/png;base64," + "A" * 128
    local = Entry.from_wire(_wire_entry(content_type="image", content=None))
    local.initialize_image_state()
    remote = Entry.from_wire(_wire_entry(content_type="image", content=preview))

    merged = local.merge_remote(remote)

    assert merged.display.display_image_data == preview
    assert merged.display.is_thumbnail is True
    assert local.display.display_image_data is None


def test_merge_remote_keeps_display_when_content_unchanged():
    local = Entry.from_wire(
        _wire_entry(content_type="image", content="/uploads/thumb_1.png")
    )
    local.initialize_image_state()
    local.display.display_image_data = "/cache/orig_1024.png"
    local.display.is_thumbnail = False
    remote = Entry.from_wire(
        _wire_entry(content_type="image", content="/uploads/thumb_1.png")
    )

    merged = local.merge_remote(remote)

    assert merged.display.display_image_data == "/cache/orig_1024.png"
    assert merged.display.is_thumbnail is False


def test_lifecycle_cell_is_shared_per_entry():
    entry = Entry.new(content="hello")
    seen = []

    entry.lifecycle_cell().subscribe(lambda name, value: seen.append((name, value)))
    entry.lifecycle_cell().begin_upload()

    assert entry.lifecycle_cell() is entry.lifecycle_cell()
    assert seen == [("is_uploading", True)]


def test_copies_get_their_own_lifecycle_cell():
    entry = Entry.new(content="hello")
    cell = entry.lifecycle_cell()

    edited = entry.with_text_edit("bye")

    assert edited.lifecycle_cell() is not cell
    assert edited.lifecycle_cell().flags is edited.lifecycle


def test_new_entry_defaults():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    entry = Entry.new(content_type="url", content="https://example.com", timestamp=now)

    assert UUID(entry.id)
    assert entry.created_at == now
    assert entry.is_editable is True
    assert entry.is_image is False


def test_category_from_wire_is_lenient():
    category = Category.from_wire(
        {
            "id": 7,
            "name": "Work",
            "item_count": "12",
            "is_shared": 1,
            "allow_member_edit": "false",
            "is_joined": True,
            "is_creator": "TRUE",
        }
    )

    assert category.id == "7"
    assert category.name == "Work"
    assert category.item_count == 12
    assert category.is_shared is True
    assert category.allow_member_edit is False
    assert category.is_joined is True
    assert category.is_creator is True
    assert category.is_selected is False
    assert category.created_at is None
