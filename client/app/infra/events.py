"""Entry change-notification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Protocol

from .logging import get_logger

logger = get_logger(__name__)


class EventEmitter(Protocol):  # pragma: no cover - interface only
    """Abstract publisher for entry state changes."""

    def emit(self, topic: str, payload: Dict[str, Any]) -> None:
        """Publish an event to interested UI layers."""


@dataclass
class LoggingEventEmitter(EventEmitter):
    """Default emitter that logs entry changes at debug level.

    The owning entry id is lifted out of the payload so records for one
    entry can be filtered without parsing the payload.
    """

    topic_prefix: str = "clipsync"

    def emit(self, topic: str, payload: Dict[str, Any]) -> None:
        details = {key: value for key, value in payload.items() if key != "entry_id"}
        logger.debug(
            "entry_event",
            extra={
                "topic": f"{self.topic_prefix}.{topic}",
                "entry_id": payload.get("entry_id"),
                "details": details,
            },
        )


_singleton: LoggingEventEmitter | None = None


def get_event_emitter() -> EventEmitter:
    """Return the process-wide entry event emitter."""

    global _singleton
    if _singleton is None:
        _singleton = LoggingEventEmitter()
    return _singleton
