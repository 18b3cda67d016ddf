"""Parlay construction logic."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from parlaykit.parlays.tiers import dedupe, eligible_legs, sort_for_tier
from parlaykit.parlays.types import BookmakerAvailability, Leg, ParlaySlip, RiskTier

logger = logging.getLogger(__name__)


def american_to_decimal(odds: int) -> float:
    return 1 + (100 / abs(odds)) if odds <= -100 else 1 + (odds / 100)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def decimal_to_american(decimal: float) -> int:
    if decimal >= 2:
        return _round_half_up((decimal - 1) * 100)
    return _round_half_up(-100 / (decimal - 1))


def combine_decimal(legs: Iterable[Leg]) -> float:
    decimal = 1.0
    for leg in legs:
        decimal *= american_to_decimal(leg.alt_odds)
    return decimal


def combine_odds(legs: Sequence[Leg]) -> int:
    """Combined American odds for a slip; 0 for an empty slip."""

    if not legs:
        return 0
    return decimal_to_american(combine_decimal(legs))


def placeable_legs(pool: Iterable[Leg], bookmaker: str | None = None) -> list[Leg]:
    """Legs with a positive edge and a sportsbook, optionally for one book."""

    return [
        leg
        for leg in pool
        if leg.is_placeable and (bookmaker is None or leg.bookmaker == bookmaker)
    ]


def pick_legs(ordered: Sequence[Leg], leg_count: int) -> list[Leg] | None:
    """Greedy pick with at most one leg per player, then fill with repeats."""

    picked: list[int] = []
    used_players: set[str] = set()
    for idx, leg in enumerate(ordered):
        if len(picked) >= leg_count:
            break
        if leg.player_name in used_players:
            continue
        picked.append(idx)
        used_players.add(leg.player_name)

    if len(picked) < leg_count:
        for idx in range(len(ordered)):
            if len(picked) >= leg_count:
                break
            if idx not in picked:
                picked.append(idx)

    if len(picked) < leg_count:
        return None
    return [ordered[idx] for idx in picked]


def _select(legs: Sequence[Leg], leg_count: int, risk_tier: RiskTier) -> list[Leg] | None:
    if leg_count < 1:
        return None
    eligible = eligible_legs(legs, leg_count, risk_tier)
    ordered = dedupe(sort_for_tier(eligible, risk_tier))
    if len(ordered) < leg_count:
        return None
    return pick_legs(ordered, leg_count)


def build_parlay(
    pool: Iterable[Leg],
    bookmaker: str,
    leg_count: int,
    risk_tier: RiskTier | str,
) -> ParlaySlip | None:
    """Build a ``leg_count``-leg slip from one sportsbook, or ``None`` when
    not enough legs qualify for the tier."""

    tier = RiskTier(risk_tier)
    picked = _select(placeable_legs(pool, bookmaker), leg_count, tier)
    if picked is None:
        logger.info(
            "Not enough qualifying legs for %s %d-leg %s parlay",
            bookmaker,
            leg_count,
            tier.value,
        )
        return None
    total_edge = sum(leg.parlay_edge for leg in picked) / len(picked)
    return ParlaySlip(
        name=f"{tier.label} PARLAY",
        risk=tier,
        bookmaker=bookmaker,
        legs=tuple(picked),
        combined_odds=combine_odds(picked),
        total_edge=total_edge,
    )


def scan_bookmaker_availability(
    pool: Iterable[Leg],
    leg_count: int,
    risk_tier: RiskTier | str,
) -> list[BookmakerAvailability]:
    """Report, per sportsbook, whether a slip can be built right now.

    Buildable books come first, then books with more legs.
    """

    tier = RiskTier(risk_tier)
    by_book: dict[str, list[Leg]] = {}
    for leg in placeable_legs(pool):
        if leg.bookmaker:
            by_book.setdefault(leg.bookmaker, []).append(leg)

    results = [
        BookmakerAvailability(
            name=name,
            leg_count=len(legs),
            can_build=_select(legs, leg_count, tier) is not None,
        )
        for name, legs in by_book.items()
    ]
    results.sort(key=lambda item: (not item.can_build, -item.leg_count))
    return results
