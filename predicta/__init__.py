"""Football fixture aggregation and match prediction."""

__all__ = [
    "aggregator",
    "cli",
    "config",
    "constants",
    "exceptions",
    "ingestion",
    "models",
    "normalization",
    "ops",
    "reporting",
    "sample_data",
    "storage",
    "types",
]

__version__ = "0.1.0"
