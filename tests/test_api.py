"""HTTP surface tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from parlaykit.api.server import app, get_enricher
from parlaykit.enrichment.headshots import HeadshotEnricher, MetadataCache, PlayerMetadata

from test_leg_pool import GAME


class StaticLookup:
    async def fetch(self, player_name: str) -> PlayerMetadata | None:
        return PlayerMetadata(headshot_url=f"https://img.test/{player_name}.png")


@pytest.fixture()
def client() -> Iterator[TestClient]:
    cache = MetadataCache()
    cache.set("Jayson Tatum", PlayerMetadata(headshot_url="https://img.test/tatum.png"))
    enricher = HeadshotEnricher(cache, StaticLookup())
    app.dependency_overrides[get_enricher] = lambda: enricher
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_pool_endpoint(client: TestClient) -> None:
    response = client.post("/pool", json={"games": [GAME]})
    assert response.status_code == 200
    legs = response.json()
    assert [leg["player_name"] for leg in legs][:2] == ["Jaylen Brown", "Jayson Tatum"]
    assert legs[0]["source"] == "edge"


def test_availability_endpoint(client: TestClient) -> None:
    response = client.post(
        "/bookmakers/availability",
        json={"games": [GAME], "leg_count": 2, "risk_tier": "swing"},
    )
    assert response.status_code == 200
    assert response.json() == [
        {"name": "DraftKings", "leg_count": 2, "can_build": True},
        {"name": "FanDuel", "leg_count": 1, "can_build": False},
    ]


def test_generate_endpoint(client: TestClient) -> None:
    response = client.post(
        "/parlays/generate",
        json={"games": [GAME], "bookmaker": "DraftKings", "leg_count": 2, "risk_tier": "swing"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "SWING PARLAY"
    assert [leg["player_name"] for leg in body["legs"]] == ["Jaylen Brown", "Jayson Tatum"]
    assert body["combined_odds"] == 126
    assert body["headshots"]["Jayson Tatum"] == "https://img.test/tatum.png"
    assert "Jaylen Brown" in body["headshots"]
    assert body["summary"].startswith("SWING PARLAY | DraftKings | 2 legs")


def test_generate_not_enough_legs(client: TestClient) -> None:
    response = client.post(
        "/parlays/generate",
        json={"games": [GAME], "bookmaker": "DraftKings", "leg_count": 2, "risk_tier": "steady"},
    )
    assert response.status_code == 404
    assert "Not enough qualifying legs" in response.json()["detail"]


def test_leg_count_is_bounded(client: TestClient) -> None:
    response = client.post(
        "/parlays/generate",
        json={"games": [GAME], "bookmaker": "DraftKings", "leg_count": 7, "risk_tier": "lock"},
    )
    assert response.status_code == 422


def test_bookmaker_link_endpoint(client: TestClient) -> None:
    response = client.get("/bookmakers/FanDuel/link", params={"sport": "basketball_nba"})
    assert response.status_code == 200
    assert response.json() == {
        "bookmaker": "FanDuel",
        "web_url": "https://sportsbook.fanduel.com/navigation/nba",
        "app_url": "fanduel://",
    }
    assert client.get("/bookmakers/shadybook/link").status_code == 404
