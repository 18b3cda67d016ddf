"""FastAPI surface over the parlay builder core."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware

from parlaykit import __version__
from parlaykit.api.schemas import (
    AvailabilityOut,
    AvailabilityRequest,
    BookmakerLinkResponse,
    GamesRequest,
    GenerateParlayRequest,
    LegOut,
    ParlaySlipResponse,
)
from parlaykit.bookmakers.links import resolve_bookmaker_link
from parlaykit.config import get_settings
from parlaykit.enrichment.headshots import EspnHeadshotLookup, HeadshotEnricher, MetadataCache
from parlaykit.formatting import format_slip
from parlaykit.parlays.engine import build_parlay, scan_bookmaker_availability
from parlaykit.parlays.pool import build_leg_pool

logger = logging.getLogger(__name__)
settings = get_settings()

NOT_ENOUGH_LEGS = (
    "Not enough qualifying legs for this configuration. "
    "Try fewer legs, another risk tier, or another sportsbook."
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    lookup = EspnHeadshotLookup()
    app.state.enricher = HeadshotEnricher(MetadataCache(), lookup)
    try:
        yield
    finally:
        await app.state.enricher.drain()
        await lookup.aclose()


app = FastAPI(
    title="parlaykit API",
    version=__version__,
    description="Leg pools, sportsbook availability and tiered parlay slips.",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_enricher(request: Request) -> HeadshotEnricher:
    return request.app.state.enricher


EnricherDep = Annotated[HeadshotEnricher, Depends(get_enricher)]
SportQuery = Annotated[str | None, Query()]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
def version() -> dict[str, Any]:
    return {"name": "parlaykit", "version": __version__}


@app.post("/pool", response_model=list[LegOut])
def leg_pool(payload: GamesRequest) -> list[LegOut]:
    return [LegOut.from_leg(leg) for leg in build_leg_pool(payload.games)]


@app.post("/bookmakers/availability", response_model=list[AvailabilityOut])
def bookmaker_availability(payload: AvailabilityRequest) -> list[AvailabilityOut]:
    pool = build_leg_pool(payload.games)
    return [
        AvailabilityOut.from_availability(item)
        for item in scan_bookmaker_availability(pool, payload.leg_count, payload.risk_tier)
    ]


@app.post("/parlays/generate", response_model=ParlaySlipResponse)
async def generate_parlay(
    payload: GenerateParlayRequest,
    enricher: EnricherDep,
) -> ParlaySlipResponse:
    pool = build_leg_pool(payload.games)
    slip = build_parlay(pool, payload.bookmaker, payload.leg_count, payload.risk_tier)
    if slip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_ENOUGH_LEGS)

    ticket = enricher.begin(slip)
    logger.info(
        "Generated %s for %s at %+d",
        slip.name,
        slip.bookmaker,
        slip.combined_odds,
    )
    return ParlaySlipResponse.from_slip(slip, format_slip(slip), enricher.headshots_for(ticket))


@app.get("/bookmakers/{name}/link", response_model=BookmakerLinkResponse)
def bookmaker_link(name: str, sport: SportQuery = None) -> BookmakerLinkResponse:
    link = resolve_bookmaker_link(name, sport or settings.default_sport)
    if link is None:
        raise HTTPException(status_code=404, detail=f"Unknown sportsbook '{name}'")
    return BookmakerLinkResponse(bookmaker=link.bookmaker, web_url=link.web_url, app_url=link.app_url)
