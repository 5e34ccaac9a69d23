"""Unit tests for the football-data.org client."""

import asyncio
import json

import aiohttp
import pytest

from predicta.exceptions import AuthenticationError, NetworkError, RateLimitError, UpstreamError
from predicta.ingestion.client import FootballDataClient
from tests.fixtures.sample_api_responses import premier_league_standings
from tests.mocks import FakeResponse, FakeSession


def _client(session, api_key="secret"):
    return FootballDataClient(api_key=api_key, base_url="https://example.test/v4/", session=session)



@pytest.mark.asyncio
async def test_get_standings_sends_token_and_returns_payload():
    payload = premier_league_standings()
    session = FakeSession(FakeResponse(body=json.dumps(payload)))

    result = await _client(session).get_standings("PL")

    assert result == payload
    call = session.calls[0]
    assert call["url"] == "https://example.test/v4/competitions/PL/standings"
    assert call["headers"] == {"X-Auth-Token": "secret"}


@pytest.mark.asyncio
async def test_get_matches_passes_date_window_and_status():
    session = FakeSession(FakeResponse(body='{"matches": []}'))

    await _client(session).get_matches("SA", "2025-01-01", "2025-01-08")

    call = session.calls[0]
    assert call["url"].endswith("/competitions/SA/matches")
    assert call["params"] == {"status": "SCHEDULED", "dateFrom": "2025-01-01", "dateTo": "2025-01-08"}


@pytest.mark.asyncio
async def test_missing_api_key_raises_without_request():
    session = FakeSession(FakeResponse())

    with pytest.raises(AuthenticationError):
        await _client(session, api_key="").get_standings("PL")
    assert session.calls == []


@pytest.mark.asyncio
async def test_rate_limit_maps_to_rate_limit_error_with_hint():
    session = FakeSession(FakeResponse(status=429, headers={"X-RequestCounter-Reset": "42"}))

    with pytest.raises(RateLimitError) as excinfo:
        await _client(session).get_standings("PL")
    assert excinfo.value.retry_after == 42.0
    assert excinfo.value.status_code == 429


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_rejected_token_maps_to_authentication_error(status):
    body = json.dumps({"message": "The resource you are looking for is restricted.", "errorCode": status})
    session = FakeSession(FakeResponse(status=status, body=body))

    with pytest.raises(AuthenticationError) as excinfo:
        await _client(session).get_standings("CL")
    assert excinfo.value.status_code == status
    assert "restricted" in str(excinfo.value)


@pytest.mark.asyncio
async def test_server_error_maps_to_upstream_error():
    session = FakeSession(FakeResponse(status=503, body="Service Unavailable"))

    with pytest.raises(UpstreamError) as excinfo:
        await _client(session).get_matches("PL", "2025-01-01", "2025-01-08")
    assert excinfo.value.status_code == 503
    assert not isinstance(excinfo.value, RateLimitError)


@pytest.mark.asyncio
async def test_undecodable_error_body_maps_to_upstream_error():
    session = FakeSession(FakeResponse(status=502, body=b"\xff\xfe\xfa bad gateway"))

    with pytest.raises(UpstreamError) as excinfo:
        await _client(session).get_standings("PL")
    assert excinfo.value.status_code == 502
    assert "bad gateway" in excinfo.value.response_body


@pytest.mark.asyncio
async def test_undecodable_rejection_body_maps_to_authentication_error():
    session = FakeSession(FakeResponse(status=403, body=b"\xff denied"))

    with pytest.raises(AuthenticationError):
        await _client(session).get_standings("PL")


@pytest.mark.asyncio
async def test_invalid_json_maps_to_upstream_error():
    session = FakeSession(FakeResponse(body="<html>oops</html>"))

    with pytest.raises(UpstreamError):
        await _client(session).get_standings("PL")


@pytest.mark.asyncio
async def test_connection_failure_maps_to_network_error():
    session = FakeSession(error=aiohttp.ClientConnectionError("connection refused"))

    with pytest.raises(NetworkError) as excinfo:
        await _client(session).get_standings("PL")
    assert isinstance(excinfo.value.original_error, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_timeout_maps_to_network_error():
    session = FakeSession(error=asyncio.TimeoutError())

    with pytest.raises(NetworkError):
        await _client(session).get_standings("PL")


@pytest.mark.asyncio
async def test_injected_session_is_not_closed_by_client():
    session = FakeSession(FakeResponse())

    async with _client(session) as client:
        await client.get_standings("PL")

    assert session.closed is False
