"""Best-effort player headshot enrichment for generated slips.

Lookups run as fire-and-forget asyncio tasks, one per distinct player, and
populate an explicit in-memory cache. A failed lookup only means the slip
renders without a headshot.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from parlaykit.config import Settings, get_settings
from parlaykit.parlays.types import ParlaySlip

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_player_key(player_name: str) -> str:
    return _NON_ALNUM.sub("_", player_name.strip().lower()).strip("_")


@dataclass(frozen=True)
class PlayerMetadata:
    headshot_url: str | None = None
    position: str | None = None


class MetadataCache:
    """Player metadata keyed by normalized name, scoped to one UI session."""

    def __init__(self) -> None:
        self._entries: dict[str, PlayerMetadata] = {}

    def get(self, player_name: str) -> PlayerMetadata | None:
        return self._entries.get(normalize_player_key(player_name))

    def set(self, player_name: str, metadata: PlayerMetadata) -> None:
        self._entries[normalize_player_key(player_name)] = metadata

    def __contains__(self, player_name: object) -> bool:
        return isinstance(player_name, str) and normalize_player_key(player_name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class MetadataLookup(Protocol):
    async def fetch(self, player_name: str) -> PlayerMetadata | None: ...


def _retry_log(retry_state: RetryCallState) -> None:  # pragma: no cover - logging helper
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.info("Headshot lookup retry attempt %d due to %s", retry_state.attempt_number, exception)


class EspnHeadshotLookup:
    """Resolve headshots through ESPN's public player search."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client or httpx.AsyncClient(timeout=self.settings.headshot_timeout_seconds)

    async def __aenter__(self) -> "EspnHeadshotLookup":  # pragma: no cover - context sugar
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _search(self, player_name: str) -> dict[str, Any]:
        params = {
            "query": player_name,
            "type": "player",
            "sport": self.settings.espn_sport,
            "league": self.settings.espn_league,
            "limit": 1,
        }
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.settings.headshot_retry_attempts),
            wait=wait_fixed(0.5),
            retry=retry_if_exception_type(httpx.TransportError),
            after=_retry_log,
            reraise=True,
        ):
            with attempt:
                response = await self._client.get(self.settings.espn_search_url, params=params)
                response.raise_for_status()
                return response.json()
        return {}  # pragma: no cover - AsyncRetrying always returns or raises

    async def fetch(self, player_name: str) -> PlayerMetadata | None:
        payload = await self._search(player_name)
        items = payload.get("items") or []
        if not items:
            return None
        item = items[0]
        position = item.get("position")
        if isinstance(position, dict):
            position = position.get("abbreviation") or position.get("name")
        return PlayerMetadata(
            headshot_url=(item.get("headshot") or {}).get("href"),
            position=position,
        )


@dataclass(frozen=True)
class EnrichmentTicket:
    generation: int
    player_names: tuple[str, ...]


class HeadshotEnricher:
    """Schedules lookups for slip players and hands back cached headshots."""

    def __init__(self, cache: MetadataCache, lookup: MetadataLookup) -> None:
        self.cache = cache
        self.lookup = lookup
        self._in_flight: dict[str, asyncio.Task[None]] = {}
        self._generation = 0

    async def _resolve(self, key: str, player_name: str) -> None:
        try:
            metadata = await self.lookup.fetch(player_name)
        except Exception as exc:
            logger.warning("Headshot lookup failed for %s: %s", player_name, exc)
            return
        finally:
            self._in_flight.pop(key, None)
        if metadata is not None:
            self.cache.set(player_name, metadata)

    def schedule(self, player_names: Iterable[str]) -> list[asyncio.Task[None]]:
        """Start lookups for names that are neither cached nor in flight.

        Must be called from a running event loop.
        """

        tasks: list[asyncio.Task[None]] = []
        for name in player_names:
            key = normalize_player_key(name)
            if not key or name in self.cache or key in self._in_flight:
                continue
            task = asyncio.create_task(self._resolve(key, name))
            self._in_flight[key] = task
            tasks.append(task)
        return tasks

    def begin(self, slip: ParlaySlip) -> EnrichmentTicket:
        """Mark ``slip`` as the one on screen and start its lookups."""

        self._generation += 1
        names = tuple(dict.fromkeys(leg.player_name for leg in slip.legs))
        self.schedule(names)
        return EnrichmentTicket(generation=self._generation, player_names=names)

    def is_current(self, ticket: EnrichmentTicket) -> bool:
        return ticket.generation == self._generation

    def headshots_for(self, ticket: EnrichmentTicket) -> dict[str, str | None]:
        """Cached headshots for the ticket's players; empty once superseded."""

        if not self.is_current(ticket):
            return {}
        headshots: dict[str, str | None] = {}
        for name in ticket.player_names:
            metadata = self.cache.get(name)
            headshots[name] = metadata.headshot_url if metadata else None
        return headshots

    async def drain(self) -> None:
        """Wait for every in-flight lookup to settle."""

        if self._in_flight:
            await asyncio.gather(*list(self._in_flight.values()), return_exceptions=True)
