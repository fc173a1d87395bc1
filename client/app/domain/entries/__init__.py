"""Clipboard entry normalization and image resolution."""

from .images import (
    DisplayImageState,
    classify_display_image,
    needs_original_download,
    promote_original,
)
from .lifecycle import LifecycleCell, LifecycleFlags
from .models import Category, ContentType, Entry, EntryPage
from .payloads import (
    decode_categories,
    decode_entry,
    decode_entry_page,
    unwrap_entry_event,
)
from .presentation import relative_time_label
from .resolver import (
    ImageResolution,
    ImageResolutionError,
    ImageResolver,
    ReferenceKind,
    classify_reference,
)
from .timestamps import (
    SENTINEL_INSTANT,
    is_sentinel,
    parse_timestamp,
    serialize_timestamp,
)
from .wire import decode_bool, decode_string, is_base64_like

__all__ = [
    "Category",
    "ContentType",
    "DisplayImageState",
    "Entry",
    "EntryPage",
    "ImageResolution",
    "ImageResolutionError",
    "ImageResolver",
    "LifecycleCell",
    "LifecycleFlags",
    "ReferenceKind",
    "SENTINEL_INSTANT",
    "classify_display_image",
    "classify_reference",
    "decode_bool",
    "decode_categories",
    "decode_entry",
    "decode_entry_page",
    "decode_string",
    "is_base64_like",
    "is_sentinel",
    "needs_original_download",
    "parse_timestamp",
    "promote_original",
    "relative_time_label",
    "serialize_timestamp",
    "unwrap_entry_event",
]
