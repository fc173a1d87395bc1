"""Logging helpers shared by client modules.

Modules log snake_case event names and attach structured fields through
``extra={...}``. ``configure_logging`` renders those fields as ``key=value``
pairs after the event name so they stay visible on a plain stream handler.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any, Mapping, Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DEFAULT_LEVEL = "INFO"

# Attributes present on every LogRecord; anything else arrived via ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class StructuredExtraFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields to the rendered message."""

    def format(self, record: logging.LogRecord) -> str:
        rendered = super().format(record)
        fields = _extra_fields(record)
        if not fields:
            return rendered
        suffix = " ".join(f"{key}={value!r}" for key, value in sorted(fields.items()))
        return f"{rendered} | {suffix}"


class _ClientHandler(logging.StreamHandler):
    """Marker subclass so repeated configuration does not stack handlers."""


def get_logger(name: str) -> logging.Logger:
    """Return the module logger for ``name``."""

    return logging.getLogger(name)


def configure_logging(
    config: Optional[Mapping[str, Any]] = None,
    *,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Attach the structured stream handler to the ``client`` logger tree."""

    config = config or {}
    level_name = str(config.get("level", DEFAULT_LEVEL)).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger("client")
    root.setLevel(level)
    for handler in root.handlers:
        if isinstance(handler, _ClientHandler):
            handler.setLevel(level)
            if stream is not None:
                handler.setStream(stream)
            return handler

    handler = _ClientHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(StructuredExtraFormatter(LOG_FORMAT))
    root.addHandler(handler)
    return handler


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }
