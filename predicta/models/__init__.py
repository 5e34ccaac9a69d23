"""Match prediction models."""

from predicta.models.markets import BettingMarkets, MarketProbability, betting_markets
from predicta.models.prediction import (
    PredictionModel,
    PredictionResult,
    confidence,
    form_points,
    match_insights,
    predict,
    predict_score,
    team_strength,
    win_probabilities,
)

__all__ = [
    "BettingMarkets",
    "MarketProbability",
    "PredictionModel",
    "PredictionResult",
    "betting_markets",
    "confidence",
    "form_points",
    "match_insights",
    "predict",
    "predict_score",
    "team_strength",
    "win_probabilities",
]
