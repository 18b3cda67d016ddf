"""Flatten cached game payloads into a uniform pool of parlay legs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from parlaykit.data.schemas import (
    GamePayload,
    HitRateSchema,
    OpponentDefenseSchema,
    StackLegSchema,
    TopPropSchema,
    implied_probability,
    normalize_prediction,
)
from parlaykit.parlays.types import HitRate, Leg, LegSource, OpponentDefense

logger = logging.getLogger(__name__)


def _hit_rates(raw: Mapping[str, HitRateSchema | None] | None) -> dict[str, HitRate]:
    if not raw:
        return {}
    return {
        window: HitRate(over=rate.over, total=rate.total, pct=rate.pct)
        for window, rate in raw.items()
        if rate is not None
    }


def _defense(raw: OpponentDefenseSchema | None) -> OpponentDefense | None:
    return OpponentDefense(rank=raw.rank) if raw else None


def _stack_leg(game: GamePayload, raw: Any) -> Leg | None:
    try:
        data = StackLegSchema.model_validate(raw)
    except ValidationError as exc:
        logger.debug("Dropping malformed stack leg: %s", exc)
        return None
    prediction = normalize_prediction(data.prediction)
    if not data.player_name or not data.stat_type or not prediction or not data.alt_odds:
        return None
    return Leg(
        player_name=data.player_name,
        team=data.team,
        opponent=data.opponent or game.opponent_of(data.team),
        stat_type=data.stat_type,
        prediction=prediction,
        alt_line=data.alt_line,
        alt_odds=data.alt_odds,
        parlay_edge=data.parlay_edge or 0.0,
        source=LegSource.STACK,
        bookmaker=data.bookmaker or None,
        l10_avg=data.l10_avg or 0.0,
        hit_rates=_hit_rates(data.hit_rates),
        opponent_defense=_defense(data.opponent_defense),
        green_score=data.green_score,
    )


def _edge_leg(game: GamePayload, raw: Any) -> Leg | None:
    try:
        data = TopPropSchema.model_validate(raw)
    except ValidationError as exc:
        logger.debug("Dropping malformed top prop: %s", exc)
        return None
    prediction = normalize_prediction(data.prediction)
    if not data.player_name or not data.stat_type or not prediction:
        return None
    odds, bookmaker, actual_prob = data.side(prediction)
    if not odds:
        return None
    return Leg(
        player_name=data.player_name,
        team=data.team,
        opponent=data.opponent or game.opponent_of(data.team),
        stat_type=data.stat_type,
        prediction=prediction,
        alt_line=data.line,
        alt_odds=odds,
        parlay_edge=actual_prob - implied_probability(odds),
        source=LegSource.EDGE,
        bookmaker=bookmaker or None,
        l10_avg=data.l10_avg or 0.0,
        hit_rates=_hit_rates(data.hit_rates),
        opponent_defense=_defense(data.opponent_defense),
        green_score=data.green_score,
    )


def build_leg_pool(games: Iterable[Mapping[str, Any] | GamePayload]) -> list[Leg]:
    """Return every usable leg across ``games``, best edge first.

    Malformed games or records are skipped; partial data never aborts the pool.
    """

    legs: list[Leg] = []
    for raw_game in games:
        try:
            game = (
                raw_game
                if isinstance(raw_game, GamePayload)
                else GamePayload.model_validate(raw_game)
            )
        except ValidationError as exc:
            logger.debug("Dropping malformed game payload: %s", exc)
            continue
        props = game.props
        stack_legs = props.parlay_stack.legs if props.parlay_stack else []
        for raw in stack_legs:
            leg = _stack_leg(game, raw)
            if leg:
                legs.append(leg)
        for raw in props.top_props:
            leg = _edge_leg(game, raw)
            if leg:
                legs.append(leg)

    # sorted() is stable, so equal edges keep insertion order
    pool = sorted(legs, key=lambda leg: leg.parlay_edge, reverse=True)
    logger.info("Built leg pool with %d legs", len(pool))
    return pool
