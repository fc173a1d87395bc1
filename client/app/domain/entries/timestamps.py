"""Timestamp normalization for wire ``created_at`` values.

Servers and local caches emit ISO-8601 with or without an offset, with
``T`` or a space between date and time, at second, millisecond or
microsecond precision. Everything is normalized to an aware UTC datetime;
a value without an offset is taken to be UTC already.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from ...infra.logging import get_logger

logger = get_logger(__name__)

SENTINEL_INSTANT = datetime.min.replace(tzinfo=timezone.utc)

# ``%f`` accepts one to six digits, so the microsecond patterns also cover
# millisecond precision.
EXACT_FORMATS: Sequence[str] = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S",
)

_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")

__all__ = [
    "EXACT_FORMATS",
    "SENTINEL_INSTANT",
    "is_sentinel",
    "parse_timestamp",
    "serialize_timestamp",
]


def parse_timestamp(text: Any) -> datetime:
    """Return ``text`` as an aware UTC datetime, or ``SENTINEL_INSTANT``."""

    if not isinstance(text, str) or not text.strip():
        return SENTINEL_INSTANT

    candidate = text.strip()
    parsed = _parse_iso(candidate)
    if parsed is None:
        parsed = _parse_exact(_LONG_FRACTION.sub(r"\1", candidate))
    if parsed is None:
        logger.warning("timestamp_parse_failed", extra={"raw_timestamp": text[:64]})
        return SENTINEL_INSTANT
    return parsed


def serialize_timestamp(instant: datetime) -> str:
    """Render ``instant`` as offset-qualified ISO-8601 in UTC."""

    return _as_utc(instant).isoformat()


def is_sentinel(instant: datetime) -> bool:
    return _as_utc(instant) == SENTINEL_INSTANT


def _parse_iso(candidate: str) -> Optional[datetime]:
    iso_text = candidate
    if iso_text[-1:] in ("Z", "z"):
        iso_text = f"{iso_text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(iso_text)
    except ValueError:
        return None
    return _to_utc(parsed)


def _parse_exact(candidate: str) -> Optional[datetime]:
    for fmt in EXACT_FORMATS:
        try:
            parsed = datetime.strptime(candidate, fmt)
        except ValueError:
            continue
        return _to_utc(parsed)
    return None


def _to_utc(parsed: datetime) -> Optional[datetime]:
    try:
        return _as_utc(parsed)
    except OverflowError:
        # An offset pushed the instant outside the representable range.
        return None


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)
