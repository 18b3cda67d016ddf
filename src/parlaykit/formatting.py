"""Display helpers for legs and slips."""

from __future__ import annotations

from parlaykit.parlays.types import Leg, ParlaySlip

TEAM_ABBREVIATIONS: dict[str, str] = {
    "Atlanta Hawks": "ATL",
    "Boston Celtics": "BOS",
    "Brooklyn Nets": "BKN",
    "Charlotte Hornets": "CHA",
    "Chicago Bulls": "CHI",
    "Cleveland Cavaliers": "CLE",
    "Dallas Mavericks": "DAL",
    "Denver Nuggets": "DEN",
    "Detroit Pistons": "DET",
    "Golden State Warriors": "GSW",
    "Houston Rockets": "HOU",
    "Indiana Pacers": "IND",
    "LA Clippers": "LAC",
    "Los Angeles Clippers": "LAC",
    "Los Angeles Lakers": "LAL",
    "LA Lakers": "LAL",
    "Memphis Grizzlies": "MEM",
    "Miami Heat": "MIA",
    "Milwaukee Bucks": "MIL",
    "Minnesota Timberwolves": "MIN",
    "New Orleans Pelicans": "NOP",
    "New York Knicks": "NYK",
    "Oklahoma City Thunder": "OKC",
    "Orlando Magic": "ORL",
    "Philadelphia 76ers": "PHI",
    "Phoenix Suns": "PHX",
    "Portland Trail Blazers": "POR",
    "Sacramento Kings": "SAC",
    "San Antonio Spurs": "SAS",
    "Toronto Raptors": "TOR",
    "Utah Jazz": "UTA",
    "Washington Wizards": "WAS",
}

STAT_ABBREVIATIONS: dict[str, str] = {
    "points": "PTS",
    "rebounds": "REB",
    "assists": "AST",
    "steals": "STL",
    "blocks": "BLK",
    "turnovers": "TO",
    "three_pointers_made": "3PT",
    "threepointersmade": "3PT",
    "threes": "3PT",
    "points+rebounds": "PTS+REB",
    "points+assists": "PTS+AST",
    "rebounds+assists": "REB+AST",
    "points+rebounds+assists": "PRA",
    "blocks+steals": "BLK+STL",
    "pts_rebs_asts": "PRA",
}


def team_abbreviation(team_name: str | None) -> str:
    if not team_name:
        return "TBD"
    return TEAM_ABBREVIATIONS.get(team_name, team_name[:3].upper())


def format_stat_type(stat_type: str) -> str:
    known = STAT_ABBREVIATIONS.get(stat_type.lower())
    if known:
        return known
    return stat_type.replace("_", "+").upper()


def format_odds(odds: int) -> str:
    return f"+{odds}" if odds > 0 else str(odds)


def hit_count(leg: Leg, window: str = "l10") -> tuple[int, int] | None:
    """Hits in the predicted direction over ``window`` as (hits, games)."""

    rate = leg.hit_rates.get(window)
    if rate is None:
        return None
    hits = rate.over if leg.is_over else rate.total - rate.over
    return hits, rate.total


def format_leg(leg: Leg) -> str:
    direction = "O" if leg.is_over else "U"
    text = (
        f"{leg.player_name} {format_stat_type(leg.stat_type)} {direction} {leg.alt_line:g} "
        f"@ {format_odds(leg.alt_odds)} "
        f"({team_abbreviation(leg.team)} vs {team_abbreviation(leg.opponent)})"
    )
    hits = hit_count(leg)
    if hits:
        text += f" {hits[0]}/{hits[1]} L10"
    return text


def format_slip(slip: ParlaySlip) -> str:
    lines = [f"{slip.name} | {slip.bookmaker} | {len(slip.legs)} legs"]
    for idx, leg in enumerate(slip.legs, start=1):
        lines.append(f"{idx}. {format_leg(leg)}")
    lines.append(f"Combined: {format_odds(slip.combined_odds)}")
    lines.append(f"Avg edge: {slip.total_edge:+.1%}")
    return "\n".join(lines)
