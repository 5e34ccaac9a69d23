"""Team statistics lookup backed by the standings cache."""

from typing import Callable, Dict, List, Optional
import asyncio
import logging
import time

from predicta.constants import competition_name
from predicta.exceptions import PredictaError
from predicta.ingestion.standings import fetch_standings
from predicta.normalization.ids import make_standings_marker_key, make_team_cache_key
from predicta.storage import CacheStore
from predicta.types import TeamStatistics

logger = logging.getLogger(__name__)


def estimate_team_statistics(
    team_id: Optional[int],
    competition: str,
    name: Optional[str] = None,
    logo: Optional[str] = None,
) -> TeamStatistics:
    """Neutral mid-table profile used when no standings row exists.

    Nine games at 3-3-3 with twelve goals each way, so every ratio the
    prediction model computes lands in the middle of its range.
    """
    return TeamStatistics(
        name=name or f"Team {team_id}",
        competition=competition,
        goals_scored=12,
        goals_conceded=12,
        wins=3,
        draws=3,
        losses=3,
        logo=logo,
        team_id=team_id,
        estimated=True,
    )


class TeamStatisticsResolver:
    """
    Resolve ``TeamStatistics`` for a team in a competition.

    Lookups hit the long-TTL cache first. A miss loads the whole standings
    table for that competition once (concurrent misses share one request),
    and a team still missing afterwards gets the neutral estimate. Resolution
    never raises for upstream problems.

    Args:
        client: Provider client exposing ``get_standings``
        queue: ``RequestQueue`` all provider calls go through
        cache: Long-TTL cache for team statistics and standings markers
        failure_cooldown: Seconds to wait before retrying a competition
            whose standings request failed
    """

    def __init__(
        self,
        client,
        queue,
        cache: CacheStore,
        failure_cooldown: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.queue = queue
        self.cache = cache
        self.failure_cooldown = failure_cooldown
        self._clock = clock
        self._locks: Dict[str, asyncio.Lock] = {}
        self._failures: Dict[str, float] = {}

    def cached(self, team_id: int, competition_code: str) -> Optional[TeamStatistics]:
        payload = self.cache.get(make_team_cache_key(competition_code, team_id))
        if payload is None:
            return None
        if isinstance(payload, TeamStatistics):
            return payload
        return TeamStatistics.from_dict(payload)

    async def prefetch(self, competition_code: str, errors: Optional[List[str]] = None) -> int:
        """Make sure the standings for a competition are cached.

        Returns the number of teams in the cached table, 0 when the load
        failed. Failure messages are appended to ``errors`` when given.
        """
        return await self._ensure_standings(competition_code, errors)

    async def resolve(
        self,
        team_id: int,
        competition_code: str,
        name: Optional[str] = None,
        logo: Optional[str] = None,
    ) -> TeamStatistics:
        stats = self.cached(team_id, competition_code)
        if stats is not None:
            logger.debug("Team cache hit for %s in %s.", team_id, competition_code)
            return stats

        await self._ensure_standings(competition_code)

        stats = self.cached(team_id, competition_code)
        if stats is not None:
            return stats

        logger.warning(
            "No standings row for %s (%s) in %s; using estimated statistics.",
            name or team_id,
            team_id,
            competition_code,
        )
        return estimate_team_statistics(team_id, competition_name(competition_code), name=name, logo=logo)

    async def _ensure_standings(self, competition_code: str, errors: Optional[List[str]] = None) -> int:
        marker_key = make_standings_marker_key(competition_code)
        lock = self._locks.setdefault(competition_code, asyncio.Lock())
        async with lock:
            marker = self.cache.get(marker_key)
            if marker is not None:
                return int(marker.get("teams", 0)) if isinstance(marker, dict) else 0

            failed_at = self._failures.get(competition_code)
            if failed_at is not None and self._clock() - failed_at < self.failure_cooldown:
                logger.debug("Skipping standings for %s after a recent failure.", competition_code)
                return 0

            try:
                teams = await fetch_standings(self.client, self.queue, self.cache, competition_code)
            except (PredictaError, asyncio.TimeoutError) as exc:
                self._failures[competition_code] = self._clock()
                message = f"standings {competition_code}: {str(exc) or type(exc).__name__}"
                logger.warning("Failed to load standings for %s: %s", competition_code, exc)
                if errors is not None:
                    errors.append(message)
                return 0

            self._failures.pop(competition_code, None)
            return len(teams)
