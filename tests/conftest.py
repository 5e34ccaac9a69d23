"""
Pytest configuration and shared fixtures for predicta tests.
"""

import pytest

from predicta.ops.metrics import InMemoryMetricsRecorder
from predicta.ops.request_queue import RequestQueue
from predicta.storage import TTLCache
from predicta.types import TeamStatistics
from tests.mocks import FakeClock


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def metrics():
    return InMemoryMetricsRecorder()


@pytest.fixture
def queue(metrics):
    """Queue without pacing so pipeline tests run instantly."""
    return RequestQueue(request_delay=0, max_jitter=0, operation_timeout=None, metrics=metrics)


@pytest.fixture
def team_cache(fake_clock):
    return TTLCache(3600, clock=fake_clock, name="team-cache")


@pytest.fixture
def fixture_cache(fake_clock):
    return TTLCache(1800, clock=fake_clock, name="fixture-cache")


@pytest.fixture
def make_team():
    """Factory for TeamStatistics with sensible defaults."""
    def _make(name="Team", wins=10, draws=5, losses=5, scored=30, conceded=20, form="WDLWW", **extra):
        return TeamStatistics(
            name=name,
            competition="Premier League",
            form=form,
            goals_scored=scored,
            goals_conceded=conceded,
            wins=wins,
            draws=draws,
            losses=losses,
            **extra,
        )
    return _make


@pytest.fixture
def strong_team(make_team):
    return make_team("Team A", wins=20, draws=3, losses=2, scored=60, conceded=15, form="WWWWW")


@pytest.fixture
def weak_team(make_team):
    return make_team("Team B", wins=5, draws=5, losses=15, scored=20, conceded=50, form="LLLDL")
