"""Lenient scalar decoding for clipboard wire payloads.

The sync service is not consistent about scalar shapes: ids arrive as JSON
numbers or strings, flags as booleans, ``0``/``1`` or ``"true"``. These
helpers coerce such values into one canonical Python type and never raise.
"""

from __future__ import annotations

import json
import math
from typing import Any, Optional

BASE64_LENGTH_THRESHOLD = 100
DATA_IMAGE_PREFIX = "data:image"

__all__ = [
    "BASE64_LENGTH_THRESHOLD",
    "DATA_IMAGE_PREFIX",
    "decode_bool",
    "decode_int",
    "decode_optional_string",
    "decode_string",
    "is_base64_like",
]


def decode_string(value: Any) -> str:
    """Return ``value`` as text, keeping numbers and booleans canonical."""

    if isinstance(value, str):
        return value
    # bool is an int subclass; check it first.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return str(value)


def decode_optional_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    return decode_string(value)


def decode_bool(value: Any) -> bool:
    """Interpret booleans, numbers and boolean-ish strings as a flag."""

    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip()
        lowered = text.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        if text == "1":
            return True
        return False
    return False


def decode_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def is_base64_like(value: Optional[str]) -> bool:
    """Heuristic: data URIs and long strings are treated as embedded images.

    Filesystem paths and URLs are usually shorter than the threshold; a very
    long path would be misread as base64, which is accepted.
    """

    if not value:
        return False
    if value[: len(DATA_IMAGE_PREFIX)].lower() == DATA_IMAGE_PREFIX:
        return True
    return len(value) > BASE64_LENGTH_THRESHOLD


def _format_float(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)
