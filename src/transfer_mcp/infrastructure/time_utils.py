from __future__ import annotations

import re
from datetime import datetime
from zoneinfo import ZoneInfo

TAIPEI_TZ: ZoneInfo = ZoneInfo("Asia/Taipei")

_QUERY_DATE_RE = re.compile(r"^(\d{4})[/-](\d{1,2})[/-](\d{1,2})$")


def now_taipei() -> datetime:
    """Return the current moment as a timezone-aware datetime in Asia/Taipei."""
    return datetime.now(tz=TAIPEI_TZ)


def format_query_date(dt: datetime) -> str:
    """Return date string in YYYY/MM/DD format (for the queryDate form field)."""
    return dt.strftime("%Y/%m/%d")


def minutes_since_midnight(dt: datetime) -> int:
    """Minutes elapsed since local midnight, seconds truncated."""
    return dt.hour * 60 + dt.minute


def normalize_query_date(s: str) -> str:
    """Accept "2026/10/19" or "2026-10-19" and return "2026/10/19".

    Raises ValueError on empty input or an impossible calendar date.
    """
    if not s or not s.strip():
        raise ValueError("Empty query date")
    match = _QUERY_DATE_RE.match(s.strip())
    if match is None:
        raise ValueError(f"Invalid query date {s!r}, expected YYYY/MM/DD")
    year, month, day = (int(g) for g in match.groups())
    try:
        return format_query_date(datetime(year, month, day))
    except ValueError:
        raise ValueError(f"Invalid query date {s!r}, expected YYYY/MM/DD")


def to_taipei(dt: datetime) -> datetime:
    """Convert an aware datetime to Asia/Taipei; naive input is taken as Taipei local time."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=TAIPEI_TZ)
    return dt.astimezone(TAIPEI_TZ)
