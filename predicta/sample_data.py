"""Built-in fixtures shown when the provider cannot be reached."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional
import math

from predicta.constants import competition_name
from predicta.normalization.ids import make_match_id
from predicta.types import Match, TeamStatistics

SAMPLE_SEASON_GAMES = 20

# (competition code, home, home strength, away, away strength, days out, kickoff hour UTC)
SAMPLE_FIXTURES = [
    ("PL", "Manchester City", 0.85, "Arsenal", 0.78, 1, 17),
    ("PD", "Real Madrid", 0.82, "Barcelona", 0.80, 1, 20),
    ("SA", "Inter Milan", 0.75, "AC Milan", 0.70, 2, 18),
    ("BL1", "Bayern Munich", 0.88, "Borussia Dortmund", 0.72, 2, 16),
]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _sample_form(strength: float) -> str:
    wins = _round_half_up(5 * strength)
    draws = min(1, 5 - wins)
    return "L" * (5 - wins - draws) + "D" * draws + "W" * wins


def generate_team(name: str, competition: str, strength: float) -> TeamStatistics:
    """Plausible season figures for a team of the given 0..1 strength.

    The same arguments always produce the same team.
    """
    strength = max(0.0, min(1.0, strength))
    played = SAMPLE_SEASON_GAMES
    wins = _round_half_up(played * strength * 0.75)
    draws = min(played - wins, _round_half_up(played * 0.2))
    losses = played - wins - draws
    shots = 8 + 10 * strength

    return TeamStatistics(
        name=name,
        competition=competition,
        form=_sample_form(strength),
        goals_scored=_round_half_up(played * (0.8 + 1.6 * strength)),
        goals_conceded=_round_half_up(played * (2.0 - 1.5 * strength)),
        wins=wins,
        draws=draws,
        losses=losses,
        average_possession=round(40 + 20 * strength, 1),
        shots_per_game=round(shots, 1),
        shots_on_target_per_game=round(shots * 0.35, 1),
        pass_accuracy=round(72 + 16 * strength, 1),
        corners_per_game=round(3.5 + 4 * strength, 1),
    )


def sample_matches(now: Optional[datetime] = None) -> List[Match]:
    now = now or datetime.now(timezone.utc)
    start = now.replace(minute=0, second=0, microsecond=0)

    matches = []
    for index, (code, home, home_strength, away, away_strength, days, hour) in enumerate(SAMPLE_FIXTURES, 1):
        competition = competition_name(code)
        matches.append(
            Match(
                id=make_match_id(code, index),
                provider_id=index,
                competition=competition,
                competition_code=code,
                home_team=generate_team(home, competition, home_strength),
                away_team=generate_team(away, competition, away_strength),
                kickoff=(start + timedelta(days=days)).replace(hour=hour),
            )
        )
    return matches
