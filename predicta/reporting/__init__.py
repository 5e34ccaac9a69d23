"""Prediction reporting."""

from predicta.reporting.csv_output import (
    format_table,
    prediction_rows,
    predictions_frame,
    write_predictions_csv,
)

__all__ = [
    "format_table",
    "prediction_rows",
    "predictions_frame",
    "write_predictions_csv",
]
