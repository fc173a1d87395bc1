"""Short relative-time labels for entry timestamps."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional

__all__ = ["relative_time_label"]


def relative_time_label(
    instant: datetime,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """Render ``instant`` relative to ``now``; call again on every render."""

    instant = _aware(instant)
    current = _aware(now) if now is not None else datetime.now(timezone.utc)
    seconds = (current - instant).total_seconds()

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{int(seconds // 60)} mins ago"
    if seconds < 86400:
        return f"{int(seconds // 3600)} hours ago"
    if seconds < 7 * 86400:
        return f"{int(seconds // 86400)} days ago"

    try:
        local = instant.astimezone(tz)
    except (OverflowError, ValueError):
        # Sentinel instants sit at datetime.min and cannot move west of UTC.
        local = instant
    # Formatted by hand: strftime drops the zero padding of year 1 on glibc.
    return (
        f"{local.year:04d}/{local.month:02d}/{local.day:02d} "
        f"{local.hour:02d}:{local.minute:02d}"
    )


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
