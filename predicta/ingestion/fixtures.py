"""Upcoming fixture ingestion."""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional
import asyncio
import logging

from predicta.exceptions import PredictaError
from predicta.normalization.ids import make_fixtures_cache_key
from predicta.storage import CacheStore

logger = logging.getLogger(__name__)


async def fetch_upcoming_fixtures(
    client,
    queue,
    cache: CacheStore,
    competition_code: str,
    days_ahead: int = 7,
    today: Optional[date] = None,
    errors: Optional[List[str]] = None,
) -> List[Dict[str, Any]]:
    """Scheduled matches of one competition from today to today + ``days_ahead``.

    Returns the raw provider match dicts. Failures are logged, appended to
    ``errors`` when given, and produce an empty list that is not cached.
    """
    cache_key = make_fixtures_cache_key(competition_code, days_ahead)
    cached = cache.get(cache_key)
    if cached is not None:
        logger.debug("Fixture cache hit for %s.", cache_key)
        return cached

    today = today or date.today()
    date_from = today.isoformat()
    date_to = (today + timedelta(days=days_ahead)).isoformat()

    try:
        payload = await queue.submit(lambda: client.get_matches(competition_code, date_from, date_to))
    except (PredictaError, asyncio.TimeoutError) as exc:
        logger.warning("Failed to fetch fixtures for %s: %s", competition_code, exc)
        if errors is not None:
            errors.append(f"fixtures {competition_code}: {str(exc) or type(exc).__name__}")
        return []

    matches = payload.get("matches") if isinstance(payload, dict) else None
    if not isinstance(matches, list):
        logger.warning("Fixture payload for %s has no match list.", competition_code)
        if errors is not None:
            errors.append(f"fixtures {competition_code}: malformed response")
        return []

    matches = [match for match in matches if isinstance(match, dict)]
    cache.set(cache_key, matches)
    logger.info(
        "Fetched %d fixtures for %s (%s to %s).", len(matches), competition_code, date_from, date_to
    )
    return matches
