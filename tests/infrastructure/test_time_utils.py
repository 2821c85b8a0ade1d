"""Tests for time utility functions."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from freezegun import freeze_time

from transfer_mcp.infrastructure.time_utils import (
    TAIPEI_TZ,
    format_query_date,
    minutes_since_midnight,
    normalize_query_date,
    now_taipei,
    to_taipei,
)


@freeze_time("2026-10-19 16:30:00")  # UTC
def test_now_taipei_is_utc_plus_eight() -> None:
    now = now_taipei()
    assert now.tzinfo is not None
    assert (now.day, now.hour, now.minute) == (20, 0, 30)


def test_format_query_date() -> None:
    assert format_query_date(datetime(2026, 2, 4, 7, 0, tzinfo=TAIPEI_TZ)) == "2026/02/04"


def test_minutes_since_midnight() -> None:
    assert minutes_since_midnight(datetime(2026, 10, 19, 7, 45, 59)) == 465
    assert minutes_since_midnight(datetime(2026, 10, 19, 0, 0)) == 0


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2026/10/19", "2026/10/19"),
        ("2026-10-19", "2026/10/19"),
        ("2026/1/5", "2026/01/05"),
        (" 2026/10/19 ", "2026/10/19"),
    ],
)
def test_normalize_query_date(text: str, expected: str) -> None:
    assert normalize_query_date(text) == expected


@pytest.mark.parametrize("text", ["", "19.10.2026", "2026/13/01", "2026/02/30", "tomorrow"])
def test_normalize_query_date_invalid_raises(text: str) -> None:
    with pytest.raises(ValueError):
        normalize_query_date(text)


def test_to_taipei_converts_aware_datetime() -> None:
    converted = to_taipei(datetime(2026, 10, 18, 23, 12, tzinfo=timezone.utc))
    assert format_query_date(converted) == "2026/10/19"
    assert minutes_since_midnight(converted) == 7 * 60 + 12


def test_to_taipei_treats_naive_as_local() -> None:
    converted = to_taipei(datetime(2026, 10, 19, 7, 12))
    assert converted.tzinfo is TAIPEI_TZ
    assert converted.hour == 7
