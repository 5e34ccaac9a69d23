"""Typed records for provider payloads, decoded field by field."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from predicta.constants import FORM_RESULTS, UNKNOWN_FORM, competition_code

SCHEMA_VERSION = "football-data/v4"

UNKNOWN_TEAM = "Unknown Team"


class SchemaValidationError(ValueError):
    pass


@dataclass(frozen=True)
class StandingRow:
    position: int
    team_id: Optional[int]
    team_name: str
    crest: Optional[str]
    played_games: int
    won: int
    draw: int
    lost: int
    goals_for: int
    goals_against: int
    points: int
    form: str


@dataclass(frozen=True)
class RawFixture:
    provider_id: int
    kickoff: datetime
    status: str
    competition_name: str
    competition_code: str
    home_team_id: int
    home_team_name: str
    home_crest: Optional[str]
    away_team_id: int
    away_team_name: str
    away_crest: Optional[str]
    venue: Optional[str]


def _as_dict(value: Any) -> Dict:
    return value if isinstance(value, dict) else {}


def _as_int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _as_optional_str(value: Any) -> Optional[str]:
    text = _as_str(value)
    return text or None


def normalize_form(value: Any) -> str:
    """Reduce a provider form value ("W,D,L" or "WDL") to bare W/D/L letters."""
    if not value:
        return UNKNOWN_FORM
    letters = [char for char in str(value).upper() if char in FORM_RESULTS]
    return "".join(letters) or UNKNOWN_FORM


def parse_kickoff(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def decode_standing_row(payload: Any) -> StandingRow:
    """Decode one table row; missing fields fall back to neutral values."""
    row = _as_dict(payload)
    team = _as_dict(row.get("team"))
    won = _as_int(row.get("won"))
    draw = _as_int(row.get("draw"))
    lost = _as_int(row.get("lost"))
    return StandingRow(
        position=_as_int(row.get("position")),
        team_id=_as_optional_int(team.get("id")),
        team_name=_as_str(team.get("name") or team.get("shortName"), UNKNOWN_TEAM),
        crest=_as_optional_str(team.get("crest")),
        # W+D+L is the played count; the provider field is only a cross-check
        played_games=won + draw + lost,
        won=won,
        draw=draw,
        lost=lost,
        goals_for=max(0, _as_int(row.get("goalsFor"))),
        goals_against=max(0, _as_int(row.get("goalsAgainst"))),
        points=_as_int(row.get("points"), won * 3 + draw),
        form=normalize_form(row.get("form")),
    )


def decode_standings_table(payload: Any) -> List[StandingRow]:
    """Pick the overall table out of a standings response and decode it."""
    standings = _as_dict(payload).get("standings")
    if not isinstance(standings, list) or not standings:
        return []
    tables = [_as_dict(item) for item in standings]
    chosen = next((item for item in tables if item.get("type") == "TOTAL"), tables[0])
    table = chosen.get("table")
    if not isinstance(table, list):
        return []
    rows = [decode_standing_row(item) for item in table]
    return [row for row in rows if row.team_id is not None]


def decode_fixture(payload: Any, default_competition: Optional[str] = None) -> RawFixture:
    """Decode one match; raises SchemaValidationError when it cannot identify the game."""
    match = _as_dict(payload)
    home = _as_dict(match.get("homeTeam"))
    away = _as_dict(match.get("awayTeam"))
    competition = _as_dict(match.get("competition"))

    provider_id = _as_optional_int(match.get("id"))
    home_id = _as_optional_int(home.get("id"))
    away_id = _as_optional_int(away.get("id"))
    kickoff = parse_kickoff(match.get("utcDate"))

    missing = []
    if provider_id is None:
        missing.append("id")
    if home_id is None:
        missing.append("homeTeam.id")
    if away_id is None:
        missing.append("awayTeam.id")
    if kickoff is None:
        missing.append("utcDate")
    if missing:
        raise SchemaValidationError(f"fixture {provider_id} missing fields: {', '.join(missing)}")

    code = competition_code(competition.get("code")) or competition_code(default_competition) or ""
    return RawFixture(
        provider_id=provider_id,
        kickoff=kickoff,
        status=_as_str(match.get("status"), "SCHEDULED"),
        competition_name=_as_str(competition.get("name"), code),
        competition_code=code,
        home_team_id=home_id,
        home_team_name=_as_str(home.get("name") or home.get("shortName"), UNKNOWN_TEAM),
        home_crest=_as_optional_str(home.get("crest")),
        away_team_id=away_id,
        away_team_name=_as_str(away.get("name") or away.get("shortName"), UNKNOWN_TEAM),
        away_crest=_as_optional_str(away.get("crest")),
        venue=_as_optional_str(match.get("venue")),
    )
