"""Rebuild self-contained leg-pair rows from an itinerary table with rowspans.

The upstream table shares one leg across several transfer options by giving
its cells a rowspan. Every output row replays the shared cells so that no row
depends on another.

The fold state is immutable; each direction is a MergeStrategy that turns
(state, row) into the next state.
"""
from __future__ import annotations

from functools import reduce
from typing import Iterable, NamedTuple, Protocol

from transfer_mcp.domain.entities import FlatRow, RawRow
from transfer_mcp.domain.value_objects import Direction


class CarryState(NamedTuple):
    carry_count: int = 0  # rows still owed the carried values
    carry_values: tuple[str, ...] = ()
    output_rows: tuple[FlatRow, ...] = ()


class MergeStrategy(Protocol):
    def step(self, state: CarryState, row: RawRow) -> CarryState: ...


class FirstLegMerge:
    """TRA2THSR: the shared first leg spans downward as the leading columns."""

    def step(self, state: CarryState, row: RawRow) -> CarryState:
        count, carried = state.carry_count, state.carry_values
        out: list[str] = []
        if count > 0:
            out.extend(carried)
            count -= 1
        else:
            carried = ()

        for cell in row:
            out.append(cell.content)
            if cell.span > 1:
                count = cell.span - 1
                carried = (*carried, cell.content)

        return CarryState(count, carried, (*state.output_rows, tuple(out)))


class SecondLegMerge:
    """THSR2TRA: the shared second leg sits mid-row, before the total duration.

    Continuation rows hold their own first leg and total duration only, so the
    carried cells are spliced back in ahead of the trailing column.
    """

    def step(self, state: CarryState, row: RawRow) -> CarryState:
        count, carried = state.carry_count, state.carry_values
        if count <= 0:
            carried = ()

        out: list[str] = []
        introduced_span = False
        for cell in row:
            out.append(cell.content)
            if cell.span > 1:
                count = cell.span - 1
                carried = (*carried, cell.content)
                introduced_span = True

        if not introduced_span and count > 0:
            total = [out.pop()] if out else []
            out.extend(carried)
            out.extend(total)
            count -= 1

        return CarryState(count, carried, (*state.output_rows, tuple(out)))


STRATEGIES: dict[Direction, MergeStrategy] = {
    Direction.TRA2THSR: FirstLegMerge(),
    Direction.THSR2TRA: SecondLegMerge(),
}


def strategy_for(direction: Direction) -> MergeStrategy:
    return STRATEGIES[Direction(direction)]


def reconstruct(rows: Iterable[RawRow], direction: Direction) -> list[FlatRow]:
    """Expand spanning cells so every row carries all of its own fields.

    Header rows must already be removed. An empty input yields an empty list.
    Rows are folded in order; the carry state never outlives this call.
    """
    strategy = strategy_for(direction)
    final = reduce(strategy.step, rows, CarryState())
    return list(final.output_rows)
