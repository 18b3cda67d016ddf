"""Pydantic schemas for the parlaykit API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from parlaykit.config import get_settings
from parlaykit.parlays.types import BookmakerAvailability, Leg, ParlaySlip, RiskTier


class HitRateOut(BaseModel):
    over: int
    total: int
    pct: float


class LegOut(BaseModel):
    player_name: str
    team: str
    opponent: str
    stat_type: str
    prediction: str
    alt_line: float
    alt_odds: int
    bookmaker: str | None
    l10_avg: float
    hit_rates: dict[str, HitRateOut] = Field(default_factory=dict)
    opponent_rank: int | None = None
    green_score: int | None = None
    parlay_edge: float
    source: str

    @classmethod
    def from_leg(cls, leg: Leg) -> "LegOut":
        return cls(
            player_name=leg.player_name,
            team=leg.team,
            opponent=leg.opponent,
            stat_type=leg.stat_type,
            prediction=leg.prediction,
            alt_line=leg.alt_line,
            alt_odds=leg.alt_odds,
            bookmaker=leg.bookmaker,
            l10_avg=leg.l10_avg,
            hit_rates={
                window: HitRateOut(over=rate.over, total=rate.total, pct=rate.pct)
                for window, rate in leg.hit_rates.items()
            },
            opponent_rank=leg.opponent_defense.rank if leg.opponent_defense else None,
            green_score=leg.green_score,
            parlay_edge=leg.parlay_edge,
            source=leg.source.value,
        )


class GamesRequest(BaseModel):
    games: list[dict[str, Any]] = Field(default_factory=list)


class AvailabilityRequest(GamesRequest):
    leg_count: int = Field(default_factory=lambda: get_settings().default_leg_count, ge=2, le=6)
    risk_tier: RiskTier = Field(default_factory=lambda: RiskTier(get_settings().default_risk_tier))


class GenerateParlayRequest(AvailabilityRequest):
    bookmaker: str


class AvailabilityOut(BaseModel):
    name: str
    leg_count: int
    can_build: bool

    @classmethod
    def from_availability(cls, item: BookmakerAvailability) -> "AvailabilityOut":
        return cls(name=item.name, leg_count=item.leg_count, can_build=item.can_build)


class ParlaySlipResponse(BaseModel):
    name: str
    risk: RiskTier
    bookmaker: str
    legs: list[LegOut]
    combined_odds: int
    total_edge: float
    summary: str
    headshots: dict[str, str | None] = Field(default_factory=dict)

    @classmethod
    def from_slip(
        cls,
        slip: ParlaySlip,
        summary: str,
        headshots: dict[str, str | None] | None = None,
    ) -> "ParlaySlipResponse":
        return cls(
            name=slip.name,
            risk=slip.risk,
            bookmaker=slip.bookmaker,
            legs=[LegOut.from_leg(leg) for leg in slip.legs],
            combined_odds=slip.combined_odds,
            total_edge=slip.total_edge,
            summary=summary,
            headshots=headshots or {},
        )


class BookmakerLinkResponse(BaseModel):
    bookmaker: str
    web_url: str
    app_url: str | None = None
