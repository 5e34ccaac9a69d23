"""Sample football-data.org v4 responses for tests.

Shapes follow the provider's /competitions/{code}/standings and
/competitions/{code}/matches endpoints, trimmed to the fields we read.
"""

from typing import Dict, List, Optional

COMPETITIONS = {
    "PL": "Premier League",
    "SA": "Serie A",
    "PD": "Primera Division",
}


def standing_row(
    position: int,
    team_id: int,
    name: str,
    won: int,
    draw: int,
    lost: int,
    goals_for: int,
    goals_against: int,
    form: Optional[str] = "W,W,D,L,W",
) -> Dict:
    return {
        "position": position,
        "team": {
            "id": team_id,
            "name": name,
            "shortName": name.split()[0],
            "crest": f"https://crests.football-data.org/{team_id}.png",
        },
        "playedGames": won + draw + lost,
        "form": form,
        "won": won,
        "draw": draw,
        "lost": lost,
        "points": won * 3 + draw,
        "goalsFor": goals_for,
        "goalsAgainst": goals_against,
        "goalDifference": goals_for - goals_against,
    }


def standings_payload(code: str, rows: List[Dict]) -> Dict:
    return {
        "competition": {"id": 2021, "name": COMPETITIONS.get(code, code), "code": code},
        "season": {"id": 2287, "startDate": "2025-08-15", "endDate": "2026-05-24"},
        "standings": [
            {"stage": "REGULAR_SEASON", "type": "HOME", "table": rows[:1]},
            {"stage": "REGULAR_SEASON", "type": "TOTAL", "table": rows},
        ],
    }


def match(
    match_id: int,
    code: str,
    home_id: int,
    home_name: str,
    away_id: int,
    away_name: str,
    utc_date: str = "2025-01-04T15:00:00Z",
    venue: Optional[str] = None,
) -> Dict:
    return {
        "id": match_id,
        "utcDate": utc_date,
        "status": "SCHEDULED",
        "matchday": 20,
        "competition": {"id": 2021, "name": COMPETITIONS.get(code, code), "code": code},
        "homeTeam": {"id": home_id, "name": home_name, "crest": f"https://crests.football-data.org/{home_id}.png"},
        "awayTeam": {"id": away_id, "name": away_name, "crest": f"https://crests.football-data.org/{away_id}.png"},
        "venue": venue,
    }


def matches_payload(code: str, matches: List[Dict]) -> Dict:
    return {
        "filters": {"status": ["SCHEDULED"]},
        "resultSet": {"count": len(matches)},
        "competition": {"id": 2021, "name": COMPETITIONS.get(code, code), "code": code},
        "matches": matches,
    }


def premier_league_standings() -> Dict:
    return standings_payload("PL", [
        standing_row(1, 64, "Liverpool FC", 15, 3, 2, 45, 15, "W,W,D,W,W"),
        standing_row(2, 57, "Arsenal FC", 12, 5, 3, 38, 18, "W,D,W,L,W"),
        standing_row(3, 65, "Manchester City FC", 11, 4, 5, 40, 25, "L,W,W,D,W"),
        standing_row(4, 73, "Tottenham Hotspur FC", 5, 5, 10, 10, 30, "L,L,L,L,L"),
    ])


def serie_a_standings() -> Dict:
    return standings_payload("SA", [
        standing_row(1, 108, "FC Internazionale Milano", 14, 4, 2, 44, 14, "W,W,W,D,W"),
        standing_row(2, 98, "AC Milan", 11, 5, 4, 33, 20, "D,W,L,W,W"),
    ])


def premier_league_matches() -> Dict:
    return matches_payload("PL", [
        match(1001, "PL", 64, "Liverpool FC", 57, "Arsenal FC", "2025-01-05T16:30:00Z", "Anfield"),
        match(1002, "PL", 65, "Manchester City FC", 73, "Tottenham Hotspur FC", "2025-01-04T12:30:00Z"),
    ])


def serie_a_matches() -> Dict:
    # Same provider id as a Premier League fixture on purpose
    return matches_payload("SA", [
        match(1001, "SA", 108, "FC Internazionale Milano", 98, "AC Milan", "2025-01-04T19:45:00Z"),
    ])
