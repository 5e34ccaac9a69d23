"""Async client for the football-data.org v4 API.

Usage:
    async with FootballDataClient(api_key="YOUR_KEY") as client:
        payload = await client.get_standings("PL")
"""

from typing import Any, Dict, Optional
import asyncio
import json
import logging

import aiohttp

from predicta.constants import FOOTBALL_DATA_BASE_URL, FOOTBALL_DATA_SOURCE, SCHEDULED_STATUS
from predicta.exceptions import (
    AuthenticationError,
    NetworkError,
    RateLimitError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

_RETRY_HEADERS = ("Retry-After", "X-RequestCounter-Reset")


def _retry_after(headers) -> Optional[float]:
    for name in _RETRY_HEADERS:
        value = headers.get(name) if headers else None
        if value is None:
            continue
        try:
            return max(0.0, float(value))
        except (TypeError, ValueError):
            continue
    return None


def _provider_message(body: str) -> Optional[str]:
    """football-data.org errors look like {"message": "...", "errorCode": 429}."""
    try:
        payload = json.loads(body)
    except ValueError:
        return body[:200] if body else None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return None


class FootballDataClient:
    """
    Thin wrapper around one ``aiohttp.ClientSession``.

    Every method returns the decoded JSON payload or raises a subclass of
    ``DataFetchError``. Pacing and retries are the request queue's job, not
    the client's.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = FOOTBALL_DATA_BASE_URL,
        timeout: float = 15.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "FootballDataClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def get_matches(
        self,
        competition_code: str,
        date_from: str,
        date_to: str,
        status: str = SCHEDULED_STATUS,
    ) -> Dict[str, Any]:
        """Matches of one competition between two ISO dates (inclusive)."""
        params = {"status": status, "dateFrom": date_from, "dateTo": date_to}
        return await self._get(f"/competitions/{competition_code}/matches", params)

    async def get_standings(self, competition_code: str) -> Dict[str, Any]:
        return await self._get(f"/competitions/{competition_code}/standings")

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        if not self.api_key:
            raise AuthenticationError(FOOTBALL_DATA_SOURCE, "API key not configured")

        url = f"{self.base_url}{path}"
        headers = {"X-Auth-Token": self.api_key}
        session = self._get_session()
        logger.debug("GET %s params=%s", url, params)

        try:
            async with session.get(url, params=params, headers=headers, timeout=self.timeout) as response:
                status = response.status
                if status == 429:
                    raise RateLimitError(FOOTBALL_DATA_SOURCE, retry_after=_retry_after(response.headers))
                if status in (401, 403):
                    body = await response.text(errors="replace")
                    raise AuthenticationError(
                        FOOTBALL_DATA_SOURCE,
                        _provider_message(body) or "API key rejected",
                        status_code=status,
                        response_body=body,
                    )
                if status >= 400:
                    body = await response.text(errors="replace")
                    raise UpstreamError(
                        FOOTBALL_DATA_SOURCE,
                        _provider_message(body) or f"GET {path} failed",
                        status_code=status,
                        response_body=body,
                    )
                try:
                    payload = await response.json(content_type=None)
                except ValueError as exc:
                    raise UpstreamError(
                        FOOTBALL_DATA_SOURCE, f"invalid JSON from {path}: {exc}", status_code=status
                    ) from exc
        except asyncio.TimeoutError as exc:
            raise NetworkError(FOOTBALL_DATA_SOURCE, f"timeout requesting {path}", original_error=exc) from exc
        except aiohttp.ClientError as exc:
            raise NetworkError(FOOTBALL_DATA_SOURCE, f"request to {path} failed", original_error=exc) from exc

        if not isinstance(payload, dict):
            raise UpstreamError(FOOTBALL_DATA_SOURCE, f"unexpected payload from {path}", status_code=status)
        return payload
