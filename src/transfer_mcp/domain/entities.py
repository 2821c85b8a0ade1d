from __future__ import annotations

from dataclasses import dataclass

from transfer_mcp.domain.value_objects import Direction, FeasibilityTier


@dataclass(frozen=True)
class Cell:
    """One <td> of the itinerary table: tag-stripped text plus its rowspan."""

    content: str
    span: int = 1


# Left-to-right cells of one <tr>, and one fully reconstructed leg pair.
RawRow = tuple[Cell, ...]
FlatRow = tuple[str, ...]


@dataclass(frozen=True)
class StationTime:
    """A "HH:MM Station" table field split into its parts."""

    time: str | None = None  # "HH:MM" as printed, not validated
    station: str | None = None


@dataclass(frozen=True)
class TrainLeg:
    """One train segment of a transfer option."""

    train_number: str | None
    start: StationTime
    end: StationTime
    duration_minutes: int | None  # None when the duration text was unparseable


@dataclass(frozen=True)
class TransferRecord:
    """A reconstructed leg pair: leg_a is ridden first, leg_b second."""

    direction: Direction
    leg_a: TrainLeg
    leg_b: TrainLeg
    total_duration_minutes: int | None  # from the row's last column, includes transfer time
    date: str  # YYYY/MM/DD query date

    @property
    def first_leg(self) -> TrainLeg:
        return self.leg_a

    @property
    def second_leg(self) -> TrainLeg:
        return self.leg_b

    @property
    def tra(self) -> TrainLeg:
        return self.leg_a if self.direction is Direction.TRA2THSR else self.leg_b

    @property
    def thsr(self) -> TrainLeg:
        return self.leg_b if self.direction is Direction.TRA2THSR else self.leg_a


@dataclass(frozen=True)
class ThresholdConfig:
    """Per-direction timing thresholds in minutes; -1 disables a threshold."""

    depart_early_minutes: int = -1
    arrive_early_minutes: int = -1
    last_arrival_minutes: int = -1  # minutes since midnight
    step_minutes: int = 0

    def __post_init__(self) -> None:
        if self.step_minutes < 0:
            raise ValueError("step_minutes must be >= 0")


@dataclass(frozen=True)
class RouteConfig:
    """Station codes posted to the upstream transfer search form."""

    start_station: str  # e.g. "1190-北新竹"
    end_station: str  # e.g. "1000"
    transfer_station: str  # e.g. "1194"


@dataclass(frozen=True)
class ClassifiedTransfer:
    """A transfer record together with the tier computed for one refresh."""

    record: TransferRecord
    tier: FeasibilityTier
