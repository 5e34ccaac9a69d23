"""Tabular prediction output."""

from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd

from predicta.models.prediction import PredictionResult
from predicta.types import Match

COLUMNS = [
    "match_id",
    "kickoff",
    "competition",
    "home_team",
    "away_team",
    "home_win",
    "draw",
    "away_win",
    "predicted_score",
    "confidence",
    "over_2_5",
    "btts",
    "recommended",
    "estimated_teams",
    "insights",
]

_MARKET_LABELS = {
    "over_1_5_goals": "Over 1.5",
    "over_2_5_goals": "Over 2.5",
    "over_3_5_goals": "Over 3.5",
    "btts": "BTTS",
    "corners_over_6_5": "Corners 6.5",
    "corners_over_8_5": "Corners 8.5",
    "corners_over_10_5": "Corners 10.5",
}


def prediction_rows(matches: Sequence[Match], predictions: Sequence[PredictionResult]) -> List[Dict]:
    """Flatten matches and their predictions, paired by position."""
    if len(matches) != len(predictions):
        raise ValueError(f"{len(matches)} matches but {len(predictions)} predictions")

    rows = []
    for match, prediction in zip(matches, predictions):
        markets = prediction.markets
        recommended = []
        if markets is not None:
            recommended = [
                label for key, label in _MARKET_LABELS.items()
                if getattr(markets, key).recommended
            ]
        estimated = [team.name for team in (match.home_team, match.away_team) if team.estimated]
        rows.append({
            "match_id": match.id,
            "kickoff": match.kickoff.isoformat(),
            "competition": match.competition,
            "home_team": match.home_team.name,
            "away_team": match.away_team.name,
            "home_win": prediction.home_win,
            "draw": prediction.draw,
            "away_win": prediction.away_win,
            "predicted_score": f"{prediction.predicted_home_score}-{prediction.predicted_away_score}",
            "confidence": prediction.confidence,
            "over_2_5": markets.over_2_5_goals.probability if markets else None,
            "btts": markets.btts.probability if markets else None,
            "recommended": "; ".join(recommended),
            "estimated_teams": "; ".join(estimated),
            "insights": " | ".join(prediction.insights),
        })
    return rows


def predictions_frame(rows: List[Dict]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=COLUMNS)


def write_predictions_csv(rows: List[Dict], output_path: str) -> Path:
    """Write prediction rows to CSV."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    predictions_frame(rows).to_csv(path, index=False)
    return path


def format_table(rows: List[Dict]) -> str:
    if not rows:
        return "No matches."
    columns = [
        "kickoff", "home_team", "away_team", "home_win", "draw", "away_win",
        "predicted_score", "confidence", "recommended",
    ]
    frame = predictions_frame(rows)[columns]
    return frame.to_string(index=False)
