from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from transfer_mcp.domain.entities import ClassifiedTransfer, ThresholdConfig, TransferRecord
from transfer_mcp.domain.services import parse_clock
from transfer_mcp.domain.value_objects import FeasibilityTier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Context:
    depart: int | None  # first leg departure, minutes since midnight
    arrive: int | None  # second leg arrival
    last_depart: int | None  # first leg departure of the last option
    now: int
    cfg: ThresholdConfig


def _departed(ctx: _Context) -> bool:
    return ctx.depart is not None and ctx.depart <= ctx.now


def _urgent_within(ctx: _Context, slack: int) -> bool:
    """Departure, last option or latest arrival is within its threshold plus slack."""
    cfg = ctx.cfg
    deadline = ctx.now + cfg.depart_early_minutes
    if cfg.depart_early_minutes >= 0:
        if ctx.depart is not None and ctx.depart - slack <= deadline:
            return True
        if ctx.last_depart is not None and ctx.last_depart - slack <= deadline:
            return True
    if cfg.last_arrival_minutes >= 0 and cfg.arrive_early_minutes >= 0:
        latest = cfg.last_arrival_minutes - cfg.arrive_early_minutes
        if ctx.arrive is not None and ctx.arrive + slack >= latest:
            return True
    return False


def _extreme(ctx: _Context) -> bool:
    return _urgent_within(ctx, 0)


def _acceptable(ctx: _Context) -> bool:
    return _urgent_within(ctx, ctx.cfg.step_minutes)


# Evaluated in order; the first predicate that holds decides the tier.
TIER_RULES: tuple[tuple[FeasibilityTier, Callable[[_Context], bool]], ...] = (
    (FeasibilityTier.DISABLED, _departed),
    (FeasibilityTier.EXTREME, _extreme),
    (FeasibilityTier.ACCEPTABLE, _acceptable),
)


def _tier(ctx: _Context) -> FeasibilityTier:
    for tier, rule in TIER_RULES:
        if rule(ctx):
            return tier
    return FeasibilityTier.AMPLE


def _departure(record: TransferRecord) -> int | None:
    return parse_clock(record.first_leg.start.time)


def is_sorted_by_departure(records: Sequence[TransferRecord]) -> bool:
    """True when first-leg departures never decrease (unparseable times are ignored)."""
    times = [t for t in map(_departure, records) if t is not None]
    return all(a <= b for a, b in zip(times, times[1:]))


def classify(
    records: Sequence[TransferRecord], now_minutes: int, cfg: ThresholdConfig
) -> list[ClassifiedTransfer]:
    """Assign a FeasibilityTier to every record, preserving input order.

    The last record's departure stands in for "last chance of the day", which
    only holds when records are sorted by departure. An unsorted input is
    logged and classified anyway.
    """
    if not records:
        return []
    if not is_sorted_by_departure(records):
        logger.warning(
            "Transfer records are not sorted by departure; last-option threshold may misfire"
        )
    last_depart = _departure(records[-1])
    result = []
    for record in records:
        ctx = _Context(
            depart=_departure(record),
            arrive=parse_clock(record.second_leg.end.time),
            last_depart=last_depart,
            now=now_minutes,
            cfg=cfg,
        )
        result.append(ClassifiedTransfer(record=record, tier=_tier(ctx)))
    return result


def scroll_target(classified: Sequence[ClassifiedTransfer]) -> int | None:
    """Index of the option to bring into view.

    The first ACCEPTABLE or AMPLE option; failing that the first EXTREME one.
    """
    for wanted in (
        (FeasibilityTier.ACCEPTABLE, FeasibilityTier.AMPLE),
        (FeasibilityTier.EXTREME,),
    ):
        for index, item in enumerate(classified):
            if item.tier in wanted:
                return index
    return None
