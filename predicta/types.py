"""Domain records shared by ingestion, aggregation and prediction."""

from dataclasses import dataclass, asdict, fields
from datetime import datetime
from typing import Any, Dict, Optional

from predicta.constants import UNKNOWN_FORM


@dataclass(frozen=True)
class TeamStatistics:
    """Season-aggregate figures for one team in one competition.

    ``form`` holds W/D/L results with the most recent last, or
    ``UNKNOWN_FORM`` when the provider has none.
    """

    name: str
    competition: str
    form: str = UNKNOWN_FORM
    goals_scored: int = 0
    goals_conceded: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    average_possession: float = 50.0
    shots_per_game: float = 10.0
    shots_on_target_per_game: float = 3.5
    pass_accuracy: float = 80.0
    tackles_per_game: float = 15.0
    fouls_per_game: float = 10.0
    corners_per_game: float = 5.0
    logo: Optional[str] = None
    team_id: Optional[int] = None
    position: Optional[int] = None
    estimated: bool = False

    @property
    def matches_played(self) -> int:
        return self.wins + self.draws + self.losses

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "TeamStatistics":
        known = {f.name for f in fields(cls)}
        data = {key: value for key, value in payload.items() if key in known}
        data.setdefault("name", "Unknown Team")
        data.setdefault("competition", "")
        return cls(**data)


@dataclass(frozen=True)
class Match:
    """One upcoming fixture with both teams resolved."""

    id: str
    provider_id: int
    competition: str
    competition_code: str
    home_team: TeamStatistics
    away_team: TeamStatistics
    kickoff: datetime
    venue: Optional[str] = None

    def __post_init__(self) -> None:
        home, away = self.home_team, self.away_team
        same_id = home.team_id is not None and home.team_id == away.team_id
        if same_id or (home.team_id is None and home.name == away.name):
            raise ValueError(f"Match {self.id} has the same team on both sides: {home.name}")

    @property
    def title(self) -> str:
        return f"{self.home_team.name} vs {self.away_team.name}"
