"""Upcoming match aggregation across tracked competitions."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from predicta.config import Config
from predicta.constants import competition_code as to_competition_code
from predicta.ingestion.client import FootballDataClient
from predicta.ingestion.fixtures import fetch_upcoming_fixtures
from predicta.ingestion.teams import TeamStatisticsResolver
from predicta.normalization.ids import make_match_id
from predicta.normalization.schema import SchemaValidationError, decode_fixture
from predicta.ops.metrics import MetricsRecorder, get_metrics_recorder
from predicta.ops.request_queue import RequestQueue
from predicta.storage import CacheStore, TTLCache
from predicta.types import Match

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_PARTIAL = "partial"
STATUS_ERROR = "error"


@dataclass
class AggregateResult:
    """Outcome of one aggregation run."""
    matches: List[Match]
    errors: List[str] = field(default_factory=list)
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def status(self) -> str:
        if not self.errors:
            return STATUS_OK
        if self.matches:
            return STATUS_PARTIAL
        return STATUS_ERROR


class MatchAggregator:
    """
    Collect upcoming matches for every tracked competition.

    Competitions are processed one after another: standings first, then
    fixtures, then team resolution per fixture. One bad fixture or one
    failing competition never aborts the run.
    """

    def __init__(
        self,
        client,
        queue: RequestQueue,
        fixture_cache: CacheStore,
        team_cache: CacheStore,
        competitions: Sequence[str],
        days_ahead: int = 7,
        metrics: Optional[MetricsRecorder] = None,
    ):
        self.client = client
        self.queue = queue
        self.fixture_cache = fixture_cache
        self.team_cache = team_cache
        self.competitions = [to_competition_code(code) for code in competitions if code]
        self.days_ahead = days_ahead
        self.metrics = metrics or get_metrics_recorder()
        self.resolver = TeamStatisticsResolver(client, queue, team_cache)

    async def fetch_all_upcoming(self, today: Optional[date] = None) -> AggregateResult:
        errors: List[str] = []

        for code in self.competitions:
            await self.resolver.prefetch(code, errors=errors)

        fixtures: List[Tuple[str, Dict[str, Any]]] = []
        for code in self.competitions:
            raw = await fetch_upcoming_fixtures(
                self.client,
                self.queue,
                self.fixture_cache,
                code,
                days_ahead=self.days_ahead,
                today=today,
                errors=errors,
            )
            fixtures.extend((code, item) for item in raw)

        matches: List[Match] = []
        seen = set()
        for code, payload in fixtures:
            match = await self._build_match(code, payload)
            if match is None:
                continue
            if match.id in seen:
                logger.info("Dropping duplicate fixture %s.", match.id)
                continue
            seen.add(match.id)
            matches.append(match)

        matches.sort(key=lambda match: (match.kickoff, match.id))
        result = AggregateResult(matches=matches, errors=errors)
        logger.info(
            "Aggregated %d matches from %d competitions (status=%s, %d errors).",
            len(matches),
            len(self.competitions),
            result.status,
            len(errors),
        )
        return result

    async def _build_match(self, code: str, payload: Dict[str, Any]) -> Optional[Match]:
        try:
            fixture = decode_fixture(payload, default_competition=code)
        except SchemaValidationError as exc:
            logger.warning("Skipping fixture in %s: %s", code, exc)
            self.metrics.increment("aggregator.fixtures_dropped")
            return None

        # Standings were cached under the competition being aggregated
        home = await self.resolver.resolve(
            fixture.home_team_id, code, name=fixture.home_team_name, logo=fixture.home_crest
        )
        away = await self.resolver.resolve(
            fixture.away_team_id, code, name=fixture.away_team_name, logo=fixture.away_crest
        )

        try:
            return Match(
                id=make_match_id(fixture.competition_code or code, fixture.provider_id),
                provider_id=fixture.provider_id,
                competition=fixture.competition_name,
                competition_code=fixture.competition_code or code,
                home_team=home,
                away_team=away,
                kickoff=fixture.kickoff,
                venue=fixture.venue,
            )
        except ValueError as exc:
            logger.warning("Skipping fixture %s: %s", fixture.provider_id, exc)
            self.metrics.increment("aggregator.fixtures_dropped")
            return None

    def cache_stats(self) -> Dict[str, Any]:
        return {
            "team_cache_size": self.team_cache.size(),
            "fixture_cache_size": self.fixture_cache.size(),
            "queue_length": self.queue.queue_length(),
            "request_delay": self.queue.request_delay,
            "metrics": self.metrics.snapshot(),
        }

    def clear_caches(self) -> None:
        self.team_cache.clear()
        self.fixture_cache.clear()
        logger.info("Cleared fixture and team caches.")

    async def close(self) -> None:
        await self.queue.close()
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()


def build_aggregator(config: Config, client=None, metrics: Optional[MetricsRecorder] = None) -> MatchAggregator:
    """Wire one client, one queue and the two caches from configuration."""
    metrics = metrics or get_metrics_recorder()
    if client is None:
        client = FootballDataClient(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.request_timeout,
        )
    queue = RequestQueue(
        request_delay=config.request_delay,
        max_attempts=config.max_attempts,
        backoff_base=config.backoff_base,
        max_backoff=config.max_backoff,
        max_jitter=config.max_jitter,
        operation_timeout=config.request_timeout + 5,
        metrics=metrics,
    )
    fixture_cache = TTLCache(
        config.fixture_cache_ttl,
        persist_path=config.cache_path("fixtures"),
        name="fixture-cache",
    )
    team_cache = TTLCache(
        config.standings_cache_ttl,
        persist_path=config.cache_path("teams"),
        name="team-cache",
    )
    return MatchAggregator(
        client,
        queue,
        fixture_cache,
        team_cache,
        config.competitions,
        days_ahead=config.days_ahead,
        metrics=metrics,
    )
