"""Transient upload/download flags and their observable wrapper.

The sync engine is the only writer of these flags; UI bindings read them and
subscribe through :class:`LifecycleCell`. The flags are independent booleans:
nothing here prevents ``is_uploading`` and ``upload_failed`` from both being
true, callers keep them exclusive by convention.
"""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass, fields
from typing import Any, Callable, Dict, List, Optional

from ...infra.events import EventEmitter, get_event_emitter
from ...infra.logging import get_logger

logger = get_logger(__name__)

LIFECYCLE_TOPIC = "entry.lifecycle_changed"

LifecycleListener = Callable[[str, bool], None]

__all__ = [
    "LIFECYCLE_TOPIC",
    "LifecycleCell",
    "LifecycleFlags",
    "LifecycleListener",
]


@dataclass
class LifecycleFlags:
    is_uploading: bool = False
    upload_failed: bool = False
    is_downloading_original: bool = False

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)


_FLAG_NAMES = frozenset(item.name for item in fields(LifecycleFlags))


class LifecycleCell:
    """Observable view over one entry's :class:`LifecycleFlags`."""

    def __init__(
        self,
        entry_id: str,
        flags: LifecycleFlags,
        *,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        self.entry_id = entry_id
        self._flags = flags
        self._emitter = emitter or get_event_emitter()
        self._listeners: List[LifecycleListener] = []
        self._lock = threading.Lock()

    @property
    def flags(self) -> LifecycleFlags:
        return self._flags

    def get(self, name: str) -> bool:
        _require_flag(name)
        return getattr(self._flags, name)

    def set(self, name: str, value: bool) -> bool:
        """Write one flag; returns True when the stored value changed."""

        _require_flag(name)
        value = bool(value)
        with self._lock:
            if getattr(self._flags, name) == value:
                return False
            setattr(self._flags, name, value)
            listeners = list(self._listeners)
        for listener in listeners:
            self._notify(listener, name, value)
        self._emitter.emit(
            LIFECYCLE_TOPIC,
            {"entry_id": self.entry_id, "field": name, "value": value},
        )
        return True

    def subscribe(self, listener: LifecycleListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, listener: LifecycleListener, name: str, value: bool) -> None:
        try:
            listener(name, value)
        except Exception as exc:
            logger.warning(
                "lifecycle_listener_failed",
                extra={
                    "entry_id": self.entry_id,
                    "field": name,
                    "value": value,
                    "error": repr(exc),
                },
            )

    def begin_upload(self) -> None:
        self.set("is_uploading", True)
        self.set("upload_failed", False)

    def finish_upload(self, *, success: bool) -> None:
        self.set("is_uploading", False)
        self.set("upload_failed", not success)

    def begin_original_download(self) -> None:
        self.set("is_downloading_original", True)

    def finish_original_download(self) -> None:
        self.set("is_downloading_original", False)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return self._flags.as_dict()


def _require_flag(name: str) -> None:
    if name not in _FLAG_NAMES:
        raise ValueError(f"unknown lifecycle flag: {name}")
