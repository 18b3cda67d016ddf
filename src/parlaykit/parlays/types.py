"""Dataclasses for leg and parlay slip modeling."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class LegSource(str, Enum):
    """Where a leg came from.

    ``STACK`` legs are pre-vetted alternate lines with heavy juice; ``EDGE``
    legs are standard lines priced at real market odds.
    """

    STACK = "stack"
    EDGE = "edge"


class RiskTier(str, Enum):
    LOCK = "lock"
    STEADY = "steady"
    SWING = "swing"

    @property
    def label(self) -> str:
        return self.value.upper()


@dataclass(frozen=True)
class HitRate:
    over: int
    total: int
    pct: float


@dataclass(frozen=True)
class OpponentDefense:
    rank: int | None = None


@dataclass(frozen=True)
class Leg:
    player_name: str
    team: str
    opponent: str
    stat_type: str
    prediction: str
    alt_line: float
    alt_odds: int
    parlay_edge: float
    source: LegSource
    bookmaker: str | None = None
    l10_avg: float = 0.0
    # read-only copy; left out of the hash so legs stay hashable
    hit_rates: Mapping[str, HitRate] = field(default_factory=dict, hash=False)
    opponent_defense: OpponentDefense | None = None
    green_score: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "hit_rates", MappingProxyType(dict(self.hit_rates)))

    @property
    def is_over(self) -> bool:
        return self.prediction == "Over"

    @property
    def is_placeable(self) -> bool:
        """A leg can go on a slip only with a positive edge and a sportsbook."""

        return self.parlay_edge > 0 and bool(self.bookmaker)


@dataclass(frozen=True)
class ParlaySlip:
    name: str
    risk: RiskTier
    bookmaker: str
    legs: tuple[Leg, ...]
    combined_odds: int
    total_edge: float


@dataclass(frozen=True)
class BookmakerAvailability:
    name: str
    leg_count: int
    can_build: bool
