"""Display-image classification for image entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .wire import is_base64_like

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .models import Entry

ORIGINAL_MARKERS = ("orig_", "original")

__all__ = [
    "DisplayImageState",
    "classify_display_image",
    "is_local_path",
    "needs_original_download",
    "promote_original",
]


@dataclass
class DisplayImageState:
    """Which image reference an entry shows and whether it is a preview."""

    display_image_data: Optional[str] = None
    is_thumbnail: bool = False

    @property
    def has_preview(self) -> bool:
        return bool(self.display_image_data)


def is_local_path(reference: str) -> bool:
    """True for Windows drive paths and absolute POSIX paths."""

    return ":\\" in reference or reference.startswith("/")


def classify_display_image(entry: "Entry") -> DisplayImageState:
    """Pick the reference to display for ``entry``.

    Inline base64 in ``content`` wins and is always a thumbnail. Otherwise the
    ``thumbnail`` field is shown; it only counts as a thumbnail when it is
    embedded data rather than a path to (or marker of) the full original.
    """

    if not entry.is_image:
        return DisplayImageState()

    content = entry.content
    if content and is_base64_like(content):
        return DisplayImageState(display_image_data=content, is_thumbnail=True)

    thumbnail = entry.thumbnail
    if thumbnail:
        is_original = any(marker in thumbnail for marker in ORIGINAL_MARKERS)
        return DisplayImageState(
            display_image_data=thumbnail,
            is_thumbnail=(
                not is_local_path(thumbnail)
                and not is_original
                and is_base64_like(thumbnail)
            ),
        )

    return DisplayImageState()


def needs_original_download(entry: "Entry") -> bool:
    """True when only a thumbnail is shown and the original is still fetchable."""

    return (
        entry.is_image
        and entry.display.is_thumbnail
        and not entry.original_deleted
        and not entry.lifecycle.is_downloading_original
    )


def promote_original(entry: "Entry", reference: str) -> None:
    """Show the full-resolution ``reference`` in place of the thumbnail."""

    if not reference:
        return
    entry.display.display_image_data = reference
    entry.display.is_thumbnail = False
