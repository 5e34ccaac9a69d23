"""Provider access and ingestion."""

from predicta.ingestion.client import FootballDataClient
from predicta.ingestion.fixtures import fetch_upcoming_fixtures
from predicta.ingestion.standings import derive_team_statistics, fetch_standings
from predicta.ingestion.teams import TeamStatisticsResolver, estimate_team_statistics

__all__ = [
    "FootballDataClient",
    "TeamStatisticsResolver",
    "derive_team_statistics",
    "estimate_team_statistics",
    "fetch_standings",
    "fetch_upcoming_fixtures",
]
