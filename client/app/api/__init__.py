"""Wire-facing schemas for outbound entry payloads."""

from .schemas import CategoryOut, EntryOut, serialize_category, serialize_entry

__all__ = ["CategoryOut", "EntryOut", "serialize_category", "serialize_entry"]
