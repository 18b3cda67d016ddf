"""Risk tier eligibility tests."""

from __future__ import annotations

import itertools
from dataclasses import replace

from parlaykit.parlays import tiers
from parlaykit.parlays.types import Leg, LegSource, RiskTier


def _leg(player: str, odds: int, edge: float, source: LegSource = LegSource.STACK) -> Leg:
    return Leg(
        player_name=player,
        team="Denver Nuggets",
        opponent="Phoenix Suns",
        stat_type="rebounds",
        prediction="Over",
        alt_line=8.5,
        alt_odds=odds,
        parlay_edge=edge,
        source=source,
        bookmaker="FanDuel",
    )


def _grid() -> list[Leg]:
    odds = (-650, -520, -500, -470, -450, -420, -300, 110)
    edges = (0.0, 0.01, 0.02, 0.03, 0.04, 0.05, 0.08)
    return [
        _leg(f"P{idx}", o, e)
        for idx, (o, e) in enumerate(itertools.product(odds, edges))
    ]


def test_lock_steps_only_relax() -> None:
    pool = _grid()
    for strict, loose in zip(tiers.LOCK_STEPS, tiers.LOCK_STEPS[1:]):
        strict_ids = {id(leg) for leg in strict.apply(pool)}
        loose_ids = {id(leg) for leg in loose.apply(pool)}
        assert strict_ids <= loose_ids
        assert strict_ids != loose_ids


def test_steady_steps_only_relax() -> None:
    pool = _grid()
    strict, loose = tiers.STEADY_STEPS
    assert {id(leg) for leg in strict.apply(pool)} <= {id(leg) for leg in loose.apply(pool)}


def test_lock_stops_at_first_sufficient_step() -> None:
    pool = [
        _leg("A", -550, 0.06),
        _leg("B", -460, 0.035),
        _leg("C", -455, 0.031),
        _leg("D", -300, 0.2),
    ]
    eligible = tiers.eligible_legs(pool, 3, RiskTier.LOCK)
    assert [leg.player_name for leg in eligible] == ["A", "B", "C"]


def test_lock_falls_back_to_all_stack_legs() -> None:
    pool = [
        _leg("A", -300, 0.01),
        _leg("B", -200, 0.0),
        _leg("E", -110, 0.2, LegSource.EDGE),
    ]
    eligible = tiers.eligible_legs(pool, 2, RiskTier.LOCK)
    assert [leg.player_name for leg in eligible] == ["A", "B"]


def test_insufficient_tier_returns_loosest_set() -> None:
    pool = [_leg("A", -550, 0.06)]
    assert [leg.player_name for leg in tiers.eligible_legs(pool, 3, RiskTier.STEADY)] == ["A"]


def test_swing_admits_every_source() -> None:
    pool = [_leg("A", -550, 0.06), _leg("E", 105, 0.02, LegSource.EDGE)]
    assert len(tiers.eligible_legs(pool, 2, RiskTier.SWING)) == 2


def test_dedupe_keeps_first_occurrence() -> None:
    first = _leg("A", -550, 0.06)
    second = _leg("A", -600, 0.05)
    other = _leg("B", -500, 0.04)
    assert tiers.dedupe([first, second, other]) == [first, other]
    assert tiers.distinct_count([first, second, other]) == 2


def test_steady_orders_by_edge_outside_tie_window() -> None:
    a = replace(_leg("A", -500, 0.05), green_score=1)
    b = replace(_leg("B", -500, 0.035), green_score=5)
    ordered = tiers.sort_for_tier([a, b], RiskTier.STEADY)
    assert [leg.player_name for leg in ordered] == ["A", "B"]


def test_lock_first_step_is_inclusive() -> None:
    strict = tiers.LOCK_STEPS[0]
    assert strict.predicate(_leg("A", -500, 0.05))
    assert not strict.predicate(_leg("A", -499, 0.05))
    assert not strict.predicate(_leg("A", -500, 0.049))
    pool = [_leg(p, -500, 0.05) for p in "ABC"] + [_leg("D", -460, 0.04)]
    eligible = tiers.eligible_legs(pool, 3, RiskTier.LOCK)
    assert [leg.player_name for leg in eligible] == ["A", "B", "C"]


def test_lock_second_step_is_inclusive() -> None:
    pool = [
        _leg("A", -500, 0.05),
        _leg("B", -450, 0.03),
        _leg("C", -450, 0.03),
        _leg("D", -300, 0.5),
    ]
    assert not tiers.LOCK_STEPS[1].predicate(_leg("X", -449, 0.03))
    eligible = tiers.eligible_legs(pool, 3, RiskTier.LOCK)
    assert [leg.player_name for leg in eligible] == ["A", "B", "C"]


def test_lock_edge_floor_is_inclusive() -> None:
    pool = [_leg("A", -300, 0.02), _leg("B", -200, 0.02), _leg("C", -200, 0.0)]
    eligible = tiers.eligible_legs(pool, 2, RiskTier.LOCK)
    assert [leg.player_name for leg in eligible] == ["A", "B"]


def test_steady_edge_floor_is_inclusive() -> None:
    pool = [_leg("A", -200, 0.02), _leg("B", 110, 0.02), _leg("C", -200, 0.01)]
    eligible = tiers.eligible_legs(pool, 2, RiskTier.STEADY)
    assert [leg.player_name for leg in eligible] == ["A", "B"]


def test_steady_tie_window_is_exclusive() -> None:
    a = replace(_leg("A", -500, 0.02), green_score=1)
    b = replace(_leg("B", -500, 0.01), green_score=5)
    assert [leg.player_name for leg in tiers.sort_for_tier([a, b], RiskTier.STEADY)] == ["A", "B"]
    inside = replace(b, parlay_edge=0.015)
    assert [leg.player_name for leg in tiers.sort_for_tier([a, inside], RiskTier.STEADY)] == ["B", "A"]


def test_steady_order_is_repeatable_for_chained_ties() -> None:
    pool = [
        replace(_leg("A", -500, 0.050), green_score=1),
        replace(_leg("B", -500, 0.043), green_score=3),
        replace(_leg("C", -500, 0.036), green_score=5),
    ]
    first = tiers.sort_for_tier(pool, RiskTier.STEADY)
    assert tiers.sort_for_tier(pool, RiskTier.STEADY) == first
    assert sorted(leg.player_name for leg in first) == ["A", "B", "C"]
