from __future__ import annotations

import logging
import re
from typing import Iterable

from transfer_mcp.domain.entities import FlatRow, StationTime, TrainLeg, TransferRecord
from transfer_mcp.domain.value_objects import Direction

logger = logging.getLogger(__name__)

MIN_ROW_FIELDS = 9

_HOURS_RE = re.compile(r"(\d+)\s*時")
_MINUTES_RE = re.compile(r"(\d+)\s*分")
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})")


def parse_train_number(text: str | None) -> str | None:
    """Strip all whitespace from a train number cell; empty → None."""
    if text is None:
        return None
    return re.sub(r"\s", "", text) or None


def parse_station_time(text: str | None) -> StationTime:
    """Split "08:00 新竹" into time and station.

    The first whitespace-separated token is the time; the rest, joined with
    single spaces, is the station. Missing or blank text gives an empty
    StationTime.
    """
    if not text or not text.strip():
        return StationTime()
    time, *station = text.split()
    return StationTime(time=time, station=" ".join(station))


def parse_duration(text: str | None) -> int | None:
    """Return minutes from "1時30分", "45分", "2時" or "52 分鐘".

    Returns None (not 0) when neither an hour nor a minute component is found.
    """
    if not text:
        return None
    hours = _HOURS_RE.search(text)
    minutes = _MINUTES_RE.search(text)
    if hours is None and minutes is None:
        return None
    total = 0
    if hours:
        total += int(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))
    return total


def parse_clock(text: str | None) -> int | None:
    """Convert "HH:MM" to minutes since midnight; None when unparseable."""
    if not text:
        return None
    match = _CLOCK_RE.match(text.strip())
    if match is None:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def _parse_leg(fields: FlatRow) -> TrainLeg:
    train_number, start, end, duration = fields
    return TrainLeg(
        train_number=parse_train_number(train_number),
        start=parse_station_time(start),
        end=parse_station_time(end),
        duration_minutes=parse_duration(duration),
    )


def normalize(row: FlatRow, direction: Direction, date: str) -> TransferRecord | None:
    """Map one reconstructed row to a TransferRecord, or None for short rows.

    Columns 0-3 are the first leg, 4-7 the second leg. The total duration is
    always the row's last column, since continuation rows may be longer than 9.
    """
    direction = Direction(direction)
    if len(row) < MIN_ROW_FIELDS:
        logger.debug("Skipping %s row with %d fields", direction.value, len(row))
        return None
    return TransferRecord(
        direction=direction,
        leg_a=_parse_leg(tuple(row[0:4])),
        leg_b=_parse_leg(tuple(row[4:8])),
        total_duration_minutes=parse_duration(row[-1]),
        date=date,
    )


def normalize_rows(
    rows: Iterable[FlatRow], direction: Direction, date: str
) -> list[TransferRecord]:
    """Normalize every row, dropping the malformed ones."""
    records = (normalize(row, direction, date) for row in rows)
    return [r for r in records if r is not None]
