from __future__ import annotations

from enum import Enum, IntEnum


class Direction(str, Enum):
    """Transfer direction of a paired itinerary.

    The value is the leg order: TRA2THSR rides the TRA (rail) train first and
    the THSR (high-speed) train second; THSR2TRA is the reverse.
    Using (str, Enum) for Python 3.10 compatibility (StrEnum requires 3.11+).
    """

    TRA2THSR = "TRA2THSR"  # first-to-second
    THSR2TRA = "THSR2TRA"  # second-to-first

    @property
    def first(self) -> str:
        return "TRA" if self is Direction.TRA2THSR else "THSR"

    @property
    def second(self) -> str:
        return "THSR" if self is Direction.TRA2THSR else "TRA"


class FeasibilityTier(IntEnum):
    """How catchable a transfer option is right now, ordered by urgency.

    Compare with < / > to rank urgency: AMPLE < ACCEPTABLE < EXTREME < DISABLED.
    """

    AMPLE = 0  # safely catchable
    ACCEPTABLE = 1  # becomes urgent within one step
    EXTREME = 2  # urgent now
    DISABLED = 3  # already departed

    @property
    def label(self) -> str:
        return self.name.lower()
