from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from transfer_mcp.domain.classifier import classify, scroll_target
from transfer_mcp.domain.entities import (
    ClassifiedTransfer,
    RouteConfig,
    ThresholdConfig,
    TransferRecord,
)
from transfer_mcp.domain.reconstruction import reconstruct
from transfer_mcp.domain.services import normalize_rows
from transfer_mcp.domain.value_objects import Direction, FeasibilityTier
from transfer_mcp.infrastructure.cache import TTLCache
from transfer_mcp.infrastructure.html_table import extract_rows
from transfer_mcp.infrastructure.time_utils import (
    format_query_date,
    minutes_since_midnight,
    normalize_query_date,
    now_taipei,
    to_taipei,
)
from transfer_mcp.infrastructure.tra_client import TraClient

logger = logging.getLogger(__name__)

TTL_TIMETABLE = 1800  # seconds


@dataclass(frozen=True)
class TransferBoard:
    """One refresh of one direction: tiered options plus the row to scroll to."""

    direction: Direction
    date: str
    now_minutes: int
    transfers: list[ClassifiedTransfer]
    scroll_to: int | None


class TransferService:
    """Orchestrates fetching, table reconstruction, caching and classification."""

    def __init__(
        self,
        client: TraClient,
        cache: TTLCache,
        routes: dict[Direction, RouteConfig],
        thresholds: dict[Direction, ThresholdConfig],
    ) -> None:
        self._client = client
        self._cache = cache
        self._routes = routes
        self._thresholds = thresholds

    async def get_transfers(
        self,
        direction: Direction,
        query_date: str | None = None,  # None → today in Asia/Taipei
    ) -> list[TransferRecord]:
        """Return the parsed transfer records for one direction and date.

        Steps:
        1. Look up the cache by (direction, stations, date).
        2. Fetch the search result page from railway.gov.tw.
        3. Extract raw rows (raises TimetableFormatError when the table is missing).
        4. Reconstruct rowspans and normalize rows into TransferRecords.
        5. Cache and return. Nothing is cached when any step raises.
        """
        direction = Direction(direction)
        date = (
            normalize_query_date(query_date)
            if query_date is not None
            else format_query_date(now_taipei())
        )
        route = self._routes[direction]
        cache_key = "&".join(
            [
                f"transferType={direction.value}",
                f"startStation={route.start_station}",
                f"endStation={route.end_station}",
                f"transferStation={route.transfer_station}",
                f"queryDate={date}",
            ]
        )

        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache hit: %s", cache_key)
            return list(cached)
        logger.debug("Cache miss: %s", cache_key)

        html = await self._client.fetch_timetable(direction, route, date)
        raw_rows = extract_rows(html)
        records = normalize_rows(reconstruct(raw_rows, direction), direction, date)
        logger.info(
            "Parsed %d %s transfer options from %d rows",
            len(records),
            direction.value,
            len(raw_rows),
        )

        self._cache.set(cache_key, tuple(records), ttl=TTL_TIMETABLE)
        return list(records)

    async def get_board(
        self,
        direction: Direction,
        now: datetime | None = None,  # None → now_taipei()
        query_date: str | None = None,
    ) -> TransferBoard:
        """Fetch (or reuse) records and classify them against the current time.

        Only a board for today is classified against the clock. A future date
        has nothing departed yet; on a past date every option is gone.
        """
        direction = Direction(direction)
        effective_now = to_taipei(now if now is not None else now_taipei())
        today = format_query_date(effective_now)
        date = normalize_query_date(query_date) if query_date is not None else today
        records = await self.get_transfers(direction, date)
        now_minutes = minutes_since_midnight(effective_now)

        # YYYY/MM/DD compares in calendar order
        if date < today:
            transfers = [ClassifiedTransfer(r, FeasibilityTier.DISABLED) for r in records]
        else:
            clock = now_minutes if date == today else -1
            transfers = classify(records, clock, self._thresholds[direction])
        return TransferBoard(
            direction=direction,
            date=date,
            now_minutes=now_minutes,
            transfers=transfers,
            scroll_to=scroll_target(transfers),
        )

    async def get_boards(
        self,
        now: datetime | None = None,
        query_date: str | None = None,
    ) -> dict[Direction, TransferBoard | BaseException]:
        """Build both direction boards concurrently.

        Each direction runs its own pipeline; a failure in one is returned in its
        slot instead of cancelling the other.
        """
        effective_now = to_taipei(now if now is not None else now_taipei())
        directions = list(Direction)
        results = await asyncio.gather(
            *(self.get_board(d, effective_now, query_date) for d in directions),
            return_exceptions=True,
        )
        return dict(zip(directions, results))
