"""Tests for relative time labels."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import pytest

from client.app.domain.entries.presentation import relative_time_label
from client.app.domain.entries.timestamps import SENTINEL_INSTANT

pytestmark = [pytest.mark.presentation]

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=30), "Just now"),
        (timedelta(seconds=59), "Just now"),
        (timedelta(seconds=-120), "Just now"),
        (timedelta(minutes=1), "1 mins ago"),
        (timedelta(minutes=5, seconds=40), "5 mins ago"),
        (timedelta(hours=3, minutes=59), "3 hours ago"),
        (timedelta(hours=23, minutes=59), "23 hours ago"),
        (timedelta(days=1), "1 days ago"),
        (timedelta(days=6, hours=23), "6 days ago"),
    ],
)
def test_relative_buckets(delta, expected):
    assert relative_time_label(NOW - delta, now=NOW) == expected


def test_older_than_a_week_is_absolute_local_time():
    label = relative_time_label(NOW - timedelta(days=8), now=NOW)

    assert re.fullmatch(r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}", label)


def test_absolute_label_uses_requested_zone():
    tz = timezone(timedelta(hours=8))

    label = relative_time_label(NOW - timedelta(days=8), now=NOW, tz=tz)

    assert label == "2026/03/02 20:00"


def test_naive_instants_are_utc():
    naive = (NOW - timedelta(minutes=10)).replace(tzinfo=None)

    assert relative_time_label(naive, now=NOW) == "10 mins ago"


def test_sentinel_renders_without_error():
    label = relative_time_label(SENTINEL_INSTANT, now=NOW, tz=timezone(timedelta(hours=-5)))

    assert label == "0001/01/01 00:00"


def test_label_is_recomputed_per_call():
    instant = NOW - timedelta(seconds=50)

    assert relative_time_label(instant, now=NOW) == "Just now"
    assert relative_time_label(instant, now=NOW + timedelta(minutes=2)) == "2 mins ago"
