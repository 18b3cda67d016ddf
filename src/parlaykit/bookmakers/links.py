"""Sportsbook link resolution for generated slips."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import httpx

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class BookmakerLinkConfig:
    key: str
    display_name: str
    web_url: str
    # Sport-specific paths appended to web_url
    sport_paths: dict[str, str] = field(default_factory=dict)
    app_scheme: str | None = None
    affiliate_params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BookmakerLink:
    bookmaker: str
    web_url: str
    app_url: str | None = None


def _paths(prefix_nba: str, prefix_nfl: str, prefix_soccer: str) -> dict[str, str]:
    return {"nba": prefix_nba, "nfl": prefix_nfl, "soccer": prefix_soccer}


BOOKMAKER_CONFIGS: tuple[BookmakerLinkConfig, ...] = (
    BookmakerLinkConfig(
        "draftkings",
        "DraftKings",
        "https://sportsbook.draftkings.com",
        _paths("/leagues/basketball/nba", "/leagues/football/nfl", "/leagues/soccer"),
        "draftkings://",
    ),
    BookmakerLinkConfig(
        "fanduel",
        "FanDuel",
        "https://sportsbook.fanduel.com",
        _paths("/navigation/nba", "/navigation/nfl", "/navigation/soccer"),
        "fanduel://",
    ),
    BookmakerLinkConfig(
        "betmgm",
        "BetMGM",
        "https://sports.betmgm.com",
        _paths("/sports/basketball", "/sports/football", "/sports/soccer"),
        "betmgm://",
    ),
    BookmakerLinkConfig(
        "pinnacle",
        "Pinnacle",
        "https://www.pinnacle.com",
        _paths("/en/basketball/nba", "/en/football/nfl", "/en/soccer"),
    ),
    BookmakerLinkConfig(
        "caesars",
        "Caesars",
        "https://www.caesars.com/sportsbook-and-casino",
        _paths("/sport/basketball/nba", "/sport/football/nfl", "/sport/soccer"),
        "caesarssportsbook://",
    ),
    BookmakerLinkConfig(
        "betrivers",
        "BetRivers",
        "https://www.betrivers.com",
        _paths("/sports/basketball/nba", "/sports/football/nfl", "/sports/soccer"),
        "betrivers://",
    ),
    BookmakerLinkConfig(
        "bovada",
        "Bovada",
        "https://www.bovada.lv",
        _paths("/sports/basketball/nba", "/sports/football/nfl", "/sports/soccer"),
    ),
    BookmakerLinkConfig(
        "betus",
        "BetUS",
        "https://www.betus.com.pa",
        _paths("/sportsbook/basketball/nba", "/sportsbook/football/nfl", "/sportsbook/soccer"),
    ),
    BookmakerLinkConfig(
        "mybookieag",
        "MyBookie.ag",
        "https://www.mybookie.ag",
        _paths("/sportsbook/nba", "/sportsbook/nfl", "/sportsbook/soccer"),
    ),
    BookmakerLinkConfig(
        "espnbet",
        "ESPN BET",
        "https://espnbet.com",
        _paths(
            "/sport/basketball/organization/nba",
            "/sport/football/organization/nfl",
            "/sport/soccer",
        ),
        "espnbet://",
    ),
    BookmakerLinkConfig(
        "fanatics",
        "Fanatics",
        "https://sportsbook.fanatics.com",
        _paths("/sports/basketball/nba", "/sports/football/nfl", "/sports/soccer"),
        "fanaticssportsbook://",
    ),
    BookmakerLinkConfig(
        "ballybet",
        "Bally Bet",
        "https://www.ballybet.com",
        _paths("/sports/basketball", "/sports/football", "/sports/soccer"),
        "ballybet://",
    ),
    BookmakerLinkConfig(
        "hardrockbet",
        "Hard Rock Bet",
        "https://www.hardrockbet.com",
        _paths("/sports/basketball", "/sports/football", "/sports/soccer"),
        "hardrockbet://",
    ),
    BookmakerLinkConfig("lowvig", "LowVig.ag", "https://www.lowvig.ag"),
    BookmakerLinkConfig(
        "betonlineag",
        "BetOnline.ag",
        "https://www.betonline.ag",
        _paths("/sportsbook/basketball/nba", "/sportsbook/football/nfl", "/sportsbook/soccer"),
    ),
)

_BY_KEY = {config.key: config for config in BOOKMAKER_CONFIGS}
_BY_DISPLAY_NAME = {config.display_name: config for config in BOOKMAKER_CONFIGS}


def normalize_bookmaker_key(name: str) -> str:
    return _NON_ALNUM.sub("", name.lower())


def get_bookmaker_config(key_or_name: str | None) -> BookmakerLinkConfig | None:
    """Resolve a config from a key ("draftkings") or display name ("DraftKings")."""

    if not key_or_name:
        return None
    config = _BY_KEY.get(key_or_name) or _BY_DISPLAY_NAME.get(key_or_name)
    if config:
        return config
    normalized = normalize_bookmaker_key(key_or_name)
    for config in BOOKMAKER_CONFIGS:
        if normalized in (
            normalize_bookmaker_key(config.key),
            normalize_bookmaker_key(config.display_name),
        ):
            return config
    return None


def normalize_sport(sport: str | None) -> str:
    """Collapse feed sport keys ("basketball_nba", "soccer_epl") to nba/nfl/soccer."""

    key = (sport or "").lower()
    if "soccer" in key or "epl" in key or "premier" in key:
        return "soccer"
    if "nba" in key or "basketball" in key:
        return "nba"
    if "nfl" in key or "football" in key:
        return "nfl"
    return key


def build_bookmaker_url(config: BookmakerLinkConfig, sport: str | None = None) -> str:
    url = httpx.URL(config.web_url + config.sport_paths.get(normalize_sport(sport), ""))
    if config.affiliate_params:
        url = url.copy_merge_params(config.affiliate_params)
    return str(url)


def resolve_bookmaker_link(key_or_name: str | None, sport: str | None = None) -> BookmakerLink | None:
    config = get_bookmaker_config(key_or_name)
    if not config:
        return None
    return BookmakerLink(
        bookmaker=config.display_name,
        web_url=build_bookmaker_url(config, sport),
        app_url=config.app_scheme,
    )
