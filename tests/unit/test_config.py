"""Unit tests for configuration loading."""

import json
from pathlib import Path

import pytest

from predicta.config import Config
from predicta.exceptions import ConfigurationError

_ENV_VARS = [
    "FOOTBALL_DATA_API_KEY",
    "FOOTBALL_DATA_BASE_URL",
    "PREDICTA_COMPETITIONS",
    "PREDICTA_DAYS_AHEAD",
    "PREDICTA_REQUEST_DELAY",
    "PREDICTA_MAX_ATTEMPTS",
    "PREDICTA_FIXTURE_CACHE_TTL",
    "PREDICTA_CACHE_DIR",
    "PREDICTA_CACHE_PERSIST",
    "PREDICTA_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Config.from_env()

    assert config.api_key == ""
    assert config.competitions == ["PL", "PD", "SA", "BL1"]
    assert config.days_ahead == 7
    assert config.request_delay == 6.5
    assert config.max_attempts == 5
    assert config.fixture_cache_ttl == 1800
    assert config.standings_cache_ttl == 3600


def test_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("FOOTBALL_DATA_API_KEY", "token")
    monkeypatch.setenv("PREDICTA_COMPETITIONS", "Premier League, serie a,BL1,PL")
    monkeypatch.setenv("PREDICTA_REQUEST_DELAY", "7")
    monkeypatch.setenv("PREDICTA_CACHE_PERSIST", "no")
    monkeypatch.setenv("PREDICTA_LOG_LEVEL", "debug")

    config = Config.from_env()

    assert config.api_key == "token"
    assert config.competitions == ["PL", "SA", "BL1"]
    assert config.request_delay == 7.0
    assert config.cache_persist is False
    assert config.log_level == "DEBUG"


def test_bad_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("PREDICTA_DAYS_AHEAD", "soon")
    monkeypatch.setenv("PREDICTA_MAX_ATTEMPTS", "")
    monkeypatch.setenv("PREDICTA_FIXTURE_CACHE_TTL", "1.5h")

    config = Config.from_env()

    assert config.days_ahead == 7
    assert config.max_attempts == 5
    assert config.fixture_cache_ttl == 1800


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        Config.load(str(tmp_path / "missing.env"))


def test_load_env_file_overrides_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("PREDICTA_DAYS_AHEAD", "3")
    env_file = tmp_path / "predicta.env"
    env_file.write_text(
        "# local settings\nFOOTBALL_DATA_API_KEY='abc123'\nPREDICTA_COMPETITIONS=PD\n",
        encoding="utf-8",
    )

    config = Config.load(str(env_file))

    assert config.api_key == "abc123"
    assert config.competitions == ["PD"]
    assert config.days_ahead == 3


def test_load_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"PREDICTA_COMPETITIONS": ["SA", "FL1"], "PREDICTA_DAYS_AHEAD": 10}), encoding="utf-8")

    config = Config.load(str(path))

    assert config.competitions == ["SA", "FL1"]
    assert config.days_ahead == 10


def test_to_dict_masks_api_key():
    config = Config(api_key="secret")
    assert config.to_dict()["api_key"] == "***"


def test_cache_path():
    assert Config(cache_dir="/tmp/predicta").cache_path("teams") == Path("/tmp/predicta/teams.json")
    assert Config(cache_persist=False).cache_path("teams") is None
