"""Tests for timestamp normalization and round-tripping."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from client.app.domain.entries import timestamps
from client.app.domain.entries.timestamps import (
    SENTINEL_INSTANT,
    is_sentinel,
    parse_timestamp,
    serialize_timestamp,
)
from tests.helpers.logging import RecordingLogger, assert_extra_contains, find_log

pytestmark = [pytest.mark.timestamps]

EXPECTED = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)


def test_missing_offset_is_treated_as_utc():
    assert parse_timestamp("2024-01-15T10:30:00.123456Z") == EXPECTED
    assert parse_timestamp("2024-01-15T10:30:00.123456") == EXPECTED


def test_offsets_are_converted_to_utc():
    parsed = parse_timestamp("2024-01-15T18:30:00.123456+08:00")

    assert parsed == EXPECTED
    assert parsed.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-01-15 10:30:00", datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)),
        (
            "2024-01-15 10:30:00.250",
            datetime(2024, 1, 15, 10, 30, 0, 250000, tzinfo=timezone.utc),
        ),
        (
            "2024-01-15T10:30:00.123+00:00",
            datetime(2024, 1, 15, 10, 30, 0, 123000, tzinfo=timezone.utc),
        ),
        ("2024-01-15T10:30:00+0100", datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)),
        ("  2024-01-15T10:30:00Z  ", datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)),
    ],
)
def test_supported_shapes(raw, expected):
    assert parse_timestamp(raw) == expected


def test_tick_precision_fraction_is_truncated():
    parsed = parse_timestamp("2024-01-15T10:30:00.1234567Z")

    assert parsed == EXPECTED.replace(microsecond=123456)


@pytest.mark.parametrize("raw", ["not-a-date", "", None, 1705314600, "2024-13-45T99:99:99"])
def test_unparsable_values_return_sentinel(raw):
    assert parse_timestamp(raw) == SENTINEL_INSTANT
    assert is_sentinel(parse_timestamp(raw))


def test_parse_failure_is_logged(monkeypatch):
    recorder = RecordingLogger()
    monkeypatch.setattr(timestamps, "logger", recorder)

    parse_timestamp("yesterday-ish")

    record = find_log(recorder.records, level="warning", message="timestamp_parse_failed")
    assert_extra_contains(record, raw_timestamp="yesterday-ish")


def test_serialize_is_offset_qualified():
    assert serialize_timestamp(EXPECTED) == "2024-01-15T10:30:00.123456+00:00"
    naive = datetime(2024, 1, 15, 10, 30)
    assert serialize_timestamp(naive) == "2024-01-15T10:30:00+00:00"


@pytest.mark.parametrize(
    "raw",
    [
        "2024-01-15T10:30:00.123456Z",
        "2024-01-15T10:30:00",
        "2024-01-15 10:30:00.5",
        "2023-06-01T23:59:59-07:00",
        "2024-02-29T00:00:00.001+05:30",
    ],
)
def test_serialized_value_reparses_to_same_instant(raw):
    parsed = parse_timestamp(raw)

    assert not is_sentinel(parsed)
    assert parse_timestamp(serialize_timestamp(parsed)) == parsed
