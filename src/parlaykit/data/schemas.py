"""Pydantic schemas for cached game prediction payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def implied_probability(odds: int) -> float:
    """Convert American odds into the bookmaker's implied probability."""

    if odds < 0:
        return abs(odds) / (abs(odds) + 100.0)
    return 100.0 / (odds + 100.0)


def normalize_prediction(value: str | None) -> str | None:
    """Map free-form directions ("over", "OVER", "Under") onto Over/Under."""

    if not value:
        return None
    lowered = value.strip().lower()
    if lowered == "over":
        return "Over"
    if lowered == "under":
        return "Under"
    return None


class PayloadModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class HitRateSchema(PayloadModel):
    over: int = 0
    total: int = 0
    pct: float = 0.0


class OpponentDefenseSchema(PayloadModel):
    rank: int | None = None


class StackLegSchema(PayloadModel):
    """Alternate-line leg emitted by the parlay stack pipeline."""

    player_name: str = Field(default="", alias="playerName")
    team: str = ""
    opponent: str | None = None
    stat_type: str = Field(default="", alias="statType")
    prediction: str | None = None
    alt_line: float = Field(alias="altLine")
    alt_odds: int = Field(alias="altOdds")
    bookmaker: str | None = None
    l10_avg: float | None = Field(default=None, alias="l10Avg")
    hit_rates: dict[str, HitRateSchema | None] | None = Field(default=None, alias="hitRates")
    opponent_defense: OpponentDefenseSchema | None = Field(default=None, alias="opponentDefense")
    green_score: int | None = Field(default=None, alias="greenScore", ge=0, le=5)
    parlay_edge: float | None = Field(default=None, alias="parlayEdge")


class TopPropSchema(PayloadModel):
    """Standard-line prop with two-sided market odds and model probabilities."""

    player_name: str = Field(default="", alias="playerName")
    team: str = ""
    opponent: str | None = None
    stat_type: str = Field(default="", alias="statType")
    line: float
    prediction: str | None = None
    probability_over: float | None = Field(default=None, alias="probabilityOver")
    probability_under: float | None = Field(default=None, alias="probabilityUnder")
    odds_over: int | None = Field(default=None, alias="oddsOver")
    odds_under: int | None = Field(default=None, alias="oddsUnder")
    bookmaker_over: str | None = Field(default=None, alias="bookmakerOver")
    bookmaker_under: str | None = Field(default=None, alias="bookmakerUnder")
    l10_avg: float | None = Field(default=None, alias="l10Avg")
    hit_rates: dict[str, HitRateSchema | None] | None = Field(default=None, alias="hitRates")
    opponent_defense: OpponentDefenseSchema | None = Field(default=None, alias="opponentDefense")
    green_score: int | None = Field(default=None, alias="greenScore", ge=0, le=5)

    def side(self, prediction: str) -> tuple[int | None, str | None, float]:
        """Return (odds, bookmaker, model probability) for the predicted side."""

        if prediction == "Over":
            return self.odds_over, self.bookmaker_over, self.probability_over or 0.0
        return self.odds_under, self.bookmaker_under, self.probability_under or 0.0


class TeamsSchema(PayloadModel):
    home: str | None = None
    away: str | None = None


class ParlayStackSchema(PayloadModel):
    legs: list[Any] = Field(default_factory=list)


class MLPlayerPropsSchema(PayloadModel):
    teams: TeamsSchema | None = None
    parlay_stack: ParlayStackSchema | None = Field(default=None, alias="parlayStack")
    top_props: list[Any] = Field(default_factory=list, alias="topProps")


class AnalysisSchema(PayloadModel):
    ml_player_props: MLPlayerPropsSchema | None = Field(default=None, alias="mlPlayerProps")


class GamePayload(PayloadModel):
    """One cached game. Stack legs and top props are kept raw so that each
    record can be validated, and dropped, on its own."""

    team1: str | None = None
    team2: str | None = None
    analysis: AnalysisSchema | None = None

    @property
    def props(self) -> MLPlayerPropsSchema:
        if self.analysis and self.analysis.ml_player_props:
            return self.analysis.ml_player_props
        return MLPlayerPropsSchema()

    @property
    def teams(self) -> tuple[str, str]:
        teams = self.props.teams or TeamsSchema()
        return self.team1 or teams.home or "", self.team2 or teams.away or ""

    def opponent_of(self, team: str) -> str:
        home, away = self.teams
        return away if team == home else home
