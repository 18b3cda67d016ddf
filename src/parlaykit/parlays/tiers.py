"""Risk tier eligibility and pick ordering.

Each tier is an ordered tuple of relaxation steps. The selector walks the
steps in order and stops at the first one that yields enough distinct legs;
if none does, the loosest step is used and the build fails on count.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from parlaykit.parlays.types import Leg, LegSource, RiskTier

# Steady tier: edges closer than this are treated as equal and ranked by green score.
STEADY_EDGE_TIE_EPSILON = 0.01

LegPredicate = Callable[[Leg], bool]


@dataclass(frozen=True)
class RelaxationStep:
    name: str
    predicate: LegPredicate

    def apply(self, legs: Iterable[Leg]) -> list[Leg]:
        return [leg for leg in legs if self.predicate(leg)]


def _stack(leg: Leg) -> bool:
    return leg.source is LegSource.STACK


LOCK_STEPS: tuple[RelaxationStep, ...] = (
    RelaxationStep(
        "odds<=-500,edge>=5%",
        lambda leg: _stack(leg) and leg.alt_odds <= -500 and leg.parlay_edge >= 0.05,
    ),
    RelaxationStep(
        "odds<=-450,edge>=3%",
        lambda leg: _stack(leg) and leg.alt_odds <= -450 and leg.parlay_edge >= 0.03,
    ),
    RelaxationStep("edge>=2%", lambda leg: _stack(leg) and leg.parlay_edge >= 0.02),
    RelaxationStep("all stack", _stack),
)

STEADY_STEPS: tuple[RelaxationStep, ...] = (
    RelaxationStep("edge>=2%", lambda leg: _stack(leg) and leg.parlay_edge >= 0.02),
    RelaxationStep("all stack", _stack),
)

SWING_STEPS: tuple[RelaxationStep, ...] = (
    RelaxationStep("all legs", lambda leg: True),
)

TIER_STEPS: dict[RiskTier, tuple[RelaxationStep, ...]] = {
    RiskTier.LOCK: LOCK_STEPS,
    RiskTier.STEADY: STEADY_STEPS,
    RiskTier.SWING: SWING_STEPS,
}


def dedupe_key(leg: Leg) -> tuple[str, str, str]:
    return leg.player_name, leg.stat_type, leg.prediction


def dedupe(legs: Iterable[Leg]) -> list[Leg]:
    """Keep the first leg for each player/stat/direction."""

    seen: set[tuple[str, str, str]] = set()
    unique: list[Leg] = []
    for leg in legs:
        key = dedupe_key(leg)
        if key in seen:
            continue
        seen.add(key)
        unique.append(leg)
    return unique


def distinct_count(legs: Iterable[Leg]) -> int:
    return len({dedupe_key(leg) for leg in legs})


def eligible_legs(legs: Sequence[Leg], leg_count: int, tier: RiskTier) -> list[Leg]:
    """Apply the tier's relaxation steps until ``leg_count`` distinct legs qualify."""

    candidates: list[Leg] = []
    for step in TIER_STEPS[tier]:
        candidates = step.apply(legs)
        if distinct_count(candidates) >= leg_count:
            break
    return candidates


def _steady_compare(a: Leg, b: Leg) -> int:
    """Edge descending; edges inside the tie window rank by green score.

    The tie window is not transitive, so legs chained by near-equal edges
    can order differently for different input orders. For a given pool the
    result is still deterministic.
    """

    diff = b.parlay_edge - a.parlay_edge
    if abs(diff) < STEADY_EDGE_TIE_EPSILON:
        return (b.green_score or 0) - (a.green_score or 0)
    return 1 if diff > 0 else -1


def sort_for_tier(legs: Sequence[Leg], tier: RiskTier) -> list[Leg]:
    """Order eligible legs by pick priority for ``tier``."""

    if tier is RiskTier.LOCK:
        return sorted(legs, key=lambda leg: leg.parlay_edge, reverse=True)
    if tier is RiskTier.STEADY:
        return sorted(legs, key=functools.cmp_to_key(_steady_compare))
    if tier is RiskTier.SWING:
        edge_legs = sorted(
            (leg for leg in legs if leg.source is LegSource.EDGE),
            key=lambda leg: leg.parlay_edge,
            reverse=True,
        )
        # lightest juice first
        stack_legs = sorted(
            (leg for leg in legs if leg.source is LegSource.STACK),
            key=lambda leg: (leg.alt_odds, leg.parlay_edge),
            reverse=True,
        )
        return edge_legs + stack_legs
    raise ValueError(f"Unknown risk tier {tier!r}")
