"""Deterministic match outcome model.

Every function here is pure: the same two ``TeamStatistics`` always give the
same prediction, and no input built by ingestion makes them raise.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import logging
import math

from predicta.constants import FORM_WINDOW, UNKNOWN_FORM
from predicta.models.markets import BettingMarkets, betting_markets
from predicta.types import Match, TeamStatistics

logger = logging.getLogger(__name__)

HOME_ADVANTAGE = 1.08
MIN_STRENGTH = 0.2
MAX_STRENGTH = 0.95
DRAW_BASE = 28.0
DRAW_MIN = 12.0
DRAW_MAX = 28.0
MAX_PREDICTED_GOALS = 4
DEFAULT_SCORE_RATE = 1.2
MAX_CONFIDENCE = 95
MATURE_SAMPLE = 10
MAX_INSIGHTS = 3

_FORM_VALUES = {"W": 1.0, "D": 0.5, "L": 0.0}


@dataclass(frozen=True)
class PredictionResult:
    home_win: float
    draw: float
    away_win: float
    predicted_home_score: int
    predicted_away_score: int
    confidence: int
    insights: List[str] = field(default_factory=list)
    markets: Optional[BettingMarkets] = None

    @property
    def predicted_score(self) -> Tuple[int, int]:
        return self.predicted_home_score, self.predicted_away_score

    def to_dict(self) -> Dict:
        payload = {
            "home_win": self.home_win,
            "draw": self.draw,
            "away_win": self.away_win,
            "predicted_home_score": self.predicted_home_score,
            "predicted_away_score": self.predicted_away_score,
            "confidence": self.confidence,
            "insights": list(self.insights),
        }
        if self.markets is not None:
            payload["markets"] = self.markets.to_dict()
        return payload


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value, low, high):
    return max(low, min(high, value))


def _form_results(form: str) -> str:
    if not form or form == UNKNOWN_FORM:
        return ""
    return "".join(result for result in form.upper() if result in _FORM_VALUES)[-FORM_WINDOW:]


def form_points(form: str) -> float:
    """W=1, D=0.5, L=0 over the last five results; 2.5 when form is unknown."""
    results = _form_results(form)
    if not results:
        return 2.5
    return sum(_FORM_VALUES[result] for result in results)


def form_ratio(form: str) -> float:
    results = _form_results(form)
    if not results:
        return 0.5
    return form_points(results) / len(results)


def team_strength(team: TeamStatistics) -> float:
    """Weighted 0.2..0.95 rating from points, goal difference, form, attack and defense."""
    played = team.matches_played
    if played <= 0:
        return 0.5

    points_ratio = (team.wins * 3 + team.draws) / (played * 3)
    goal_diff_score = _clamp(((team.goals_scored - team.goals_conceded) / played + 2) / 4, 0.0, 1.0)
    attack = min(1.0, (team.goals_scored / played) / 2.5)
    defense = max(0.0, 1 - (team.goals_conceded / played) / 2)

    strength = (
        points_ratio * 0.30
        + goal_diff_score * 0.20
        + form_ratio(team.form) * 0.20
        + attack * 0.15
        + defense * 0.15
    )
    return _clamp(strength, MIN_STRENGTH, MAX_STRENGTH)


def win_probabilities(home: TeamStatistics, away: TeamStatistics) -> Tuple[float, float, float]:
    """Home win, draw and away win percentages, one decimal, summing to 100."""
    home_strength = team_strength(home)
    away_strength = team_strength(away)
    adjusted_home = home_strength * HOME_ADVANTAGE
    total = adjusted_home + away_strength

    draw = DRAW_BASE - abs(home_strength - away_strength) * 40
    if abs(form_points(home.form) - form_points(away.form)) < 1:
        draw += 3
    draw = _clamp(draw, DRAW_MIN, DRAW_MAX)

    remaining = 100.0 - draw
    home_win = round(remaining * adjusted_home / total, 1)
    away_win = round(remaining * away_strength / total, 1)
    draw = round(draw, 1)

    # Push the rounding residue onto the larger side
    residual = round(100.0 - (home_win + draw + away_win), 1)
    if residual:
        if home_win >= away_win:
            home_win = round(home_win + residual, 1)
        else:
            away_win = round(away_win + residual, 1)
    return home_win, draw, away_win


def _score_rates(team: TeamStatistics) -> Tuple[float, float]:
    played = team.matches_played
    if played <= 0:
        return DEFAULT_SCORE_RATE, DEFAULT_SCORE_RATE
    return team.goals_scored / played, team.goals_conceded / played


def predict_score(home: TeamStatistics, away: TeamStatistics) -> Tuple[int, int]:
    home_scored, home_conceded = _score_rates(home)
    away_scored, away_conceded = _score_rates(away)

    expected_home = (home_scored + away_conceded) / 2 * 1.1
    expected_away = (away_scored + home_conceded) / 2 * 0.95
    return (
        _clamp(_round_half_up(expected_home), 0, MAX_PREDICTED_GOALS),
        _clamp(_round_half_up(expected_away), 0, MAX_PREDICTED_GOALS),
    )


def confidence(home: TeamStatistics, away: TeamStatistics) -> int:
    difference = abs(team_strength(home) - team_strength(away))
    quality = 1.0 if min(home.matches_played, away.matches_played) >= MATURE_SAMPLE else 0.85
    value = _round_half_up((50 + difference * 80) * quality)
    return _clamp(value, 0, MAX_CONFIDENCE)


def match_insights(home: TeamStatistics, away: TeamStatistics) -> List[str]:
    """Up to three one-line observations, checked in a fixed order."""
    insights: List[str] = []

    if home.form != UNKNOWN_FORM and away.form != UNKNOWN_FORM:
        home_form = form_points(home.form)
        away_form = form_points(away.form)
        if home_form >= 4 and away_form <= 2:
            insights.append(f"{home.name} in excellent form ({home.form})")
        elif away_form >= 4 and home_form <= 2:
            insights.append(f"{away.name} in excellent form ({away.form})")
        elif abs(home_form - away_form) < 0.5:
            insights.append("Both teams in similar form")

    teams = [team for team in (home, away) if team.matches_played > 0]
    for team in teams:
        scored = team.goals_scored / team.matches_played
        if scored >= 2.0:
            insights.append(f"{team.name} averaging {scored:.1f} goals per game")
    for team in teams:
        conceded = team.goals_conceded / team.matches_played
        if conceded < 0.8:
            insights.append(f"{team.name} has strong defense ({conceded:.1f} conceded/game)")
    for team in teams:
        win_rate = team.wins / team.matches_played * 100
        if win_rate >= 60:
            insights.append(f"{team.name} winning {win_rate:.0f}% of matches")

    return insights[:MAX_INSIGHTS]


def predict(home: TeamStatistics, away: TeamStatistics) -> PredictionResult:
    home_win, draw, away_win = win_probabilities(home, away)
    home_score, away_score = predict_score(home, away)
    match_confidence = confidence(home, away)
    return PredictionResult(
        home_win=home_win,
        draw=draw,
        away_win=away_win,
        predicted_home_score=home_score,
        predicted_away_score=away_score,
        confidence=match_confidence,
        insights=match_insights(home, away),
        markets=betting_markets(home, away, match_confidence),
    )


class PredictionModel:
    def predict(self, matches: Sequence[Match]) -> List[PredictionResult]:
        results = []
        for match in matches:
            result = predict(match.home_team, match.away_team)
            logger.debug(
                "%s: %.1f/%.1f/%.1f, %d-%d, confidence %d",
                match.title,
                result.home_win,
                result.draw,
                result.away_win,
                result.predicted_home_score,
                result.predicted_away_score,
                result.confidence,
            )
            results.append(result)
        return results
