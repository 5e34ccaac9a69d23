"""Goal and corner market probabilities."""

from dataclasses import dataclass, asdict
from typing import Dict, Tuple

from predicta.types import TeamStatistics

# Rate used for a side with no completed matches
DEFAULT_GOALS_PER_GAME = 1.5

# (probability threshold, confidence threshold) per market
RECOMMENDATION_THRESHOLDS: Dict[str, Tuple[float, float]] = {
    "over_1_5_goals": (65.0, 65.0),
    "over_2_5_goals": (60.0, 65.0),
    "over_3_5_goals": (55.0, 70.0),
    "btts": (60.0, 65.0),
    "corners_over_6_5": (65.0, 65.0),
    "corners_over_8_5": (60.0, 65.0),
    "corners_over_10_5": (55.0, 70.0),
}


@dataclass(frozen=True)
class MarketProbability:
    probability: float
    recommended: bool


@dataclass(frozen=True)
class BettingMarkets:
    over_1_5_goals: MarketProbability
    over_2_5_goals: MarketProbability
    over_3_5_goals: MarketProbability
    btts: MarketProbability
    corners_over_6_5: MarketProbability
    corners_over_8_5: MarketProbability
    corners_over_10_5: MarketProbability

    def to_dict(self) -> Dict[str, Dict]:
        return asdict(self)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _ramp(value: float, line: float, span: float, floor: float, gain: float, low: float, high: float) -> float:
    """``floor`` below the line, rising by ``gain`` over ``span`` past it, then clamped."""
    probability = floor
    if value >= line:
        probability = floor + gain * min(1.0, (value - line) / span)
    return _clamp(probability, low, high)


def _rates(team: TeamStatistics) -> Tuple[float, float]:
    played = team.matches_played
    if played <= 0:
        return DEFAULT_GOALS_PER_GAME, DEFAULT_GOALS_PER_GAME
    return team.goals_scored / played, team.goals_conceded / played


def expected_total_goals(home: TeamStatistics, away: TeamStatistics) -> float:
    home_scored, home_conceded = _rates(home)
    away_scored, away_conceded = _rates(away)
    expected_home = (home_scored + away_conceded) / 2
    expected_away = (away_scored + home_conceded) / 2
    return expected_home + expected_away


def btts_probability(home: TeamStatistics, away: TeamStatistics) -> float:
    home_scored, home_conceded = _rates(home)
    away_scored, away_conceded = _rates(away)

    attack = (min(1.0, home_scored / 2) + min(1.0, away_scored / 2)) / 2
    weakness = (min(1.0, home_conceded / 2) + min(1.0, away_conceded / 2)) / 2
    probability = 35 + attack * 25 + weakness * 25
    if home_scored > 1.0 and away_scored > 1.0:
        probability += 5
    if home_conceded < 0.6 or away_conceded < 0.6:
        probability -= 10
    return _clamp(probability, 20, 90)


def _market(name: str, probability: float, confidence: float) -> MarketProbability:
    rounded = round(probability, 1)
    probability_min, confidence_min = RECOMMENDATION_THRESHOLDS[name]
    return MarketProbability(
        probability=rounded,
        recommended=rounded >= probability_min and confidence >= confidence_min,
    )


def betting_markets(home: TeamStatistics, away: TeamStatistics, confidence: float) -> BettingMarkets:
    goals = expected_total_goals(home, away)
    corners = home.corners_per_game + away.corners_per_game

    return BettingMarkets(
        over_1_5_goals=_market("over_1_5_goals", _ramp(goals, 1.5, 2.0, 30, 65, 25, 95), confidence),
        over_2_5_goals=_market("over_2_5_goals", _ramp(goals, 2.5, 2.0, 20, 70, 15, 90), confidence),
        over_3_5_goals=_market("over_3_5_goals", _ramp(goals, 3.5, 2.0, 15, 70, 10, 85), confidence),
        btts=_market("btts", btts_probability(home, away), confidence),
        corners_over_6_5=_market("corners_over_6_5", _ramp(corners, 6.5, 6.0, 25, 70, 20, 95), confidence),
        corners_over_8_5=_market("corners_over_8_5", _ramp(corners, 8.5, 5.5, 20, 70, 15, 90), confidence),
        corners_over_10_5=_market("corners_over_10_5", _ramp(corners, 10.5, 5.0, 15, 70, 10, 85), confidence),
    )
