"""Unit tests for provider payload decoding."""

from datetime import datetime, timezone

import pytest

from predicta.constants import UNKNOWN_FORM
from predicta.normalization import ids
from predicta.normalization.schema import (
    SchemaValidationError,
    decode_fixture,
    decode_standing_row,
    decode_standings_table,
    normalize_form,
)
from tests.fixtures.sample_api_responses import match, premier_league_standings, standings_payload


def test_decode_standings_table_uses_total_table():
    rows = decode_standings_table(premier_league_standings())

    assert [row.team_id for row in rows] == [64, 57, 65, 73]
    assert rows[0].team_name == "Liverpool FC"
    assert rows[0].form == "WWDWW"
    assert rows[0].played_games == 20


def test_decode_standings_table_falls_back_to_first_table():
    payload = standings_payload("PL", [])
    payload["standings"] = [{"type": "HOME", "table": [{"position": 1, "team": {"id": 1, "name": "Only"}}]}]

    rows = decode_standings_table(payload)
    assert [row.team_name for row in rows] == ["Only"]


@pytest.mark.parametrize("payload", [None, {}, {"standings": []}, {"standings": [{"type": "TOTAL"}]}])
def test_decode_standings_table_handles_empty_payloads(payload):
    assert decode_standings_table(payload) == []


def test_decode_standing_row_defaults_missing_fields():
    row = decode_standing_row({"team": {"id": 9}})

    assert row.team_name == "Unknown Team"
    assert row.won == row.draw == row.lost == 0
    assert row.goals_for == 0
    assert row.form == UNKNOWN_FORM


def test_rows_without_team_id_are_dropped():
    payload = standings_payload("PL", [{"position": 1, "team": {"name": "Ghost"}}])
    assert decode_standings_table(payload) == []


@pytest.mark.parametrize("raw, expected", [
    ("W,D,L,W,W", "WDLWW"),
    ("wdl", "WDL"),
    ("", UNKNOWN_FORM),
    (None, UNKNOWN_FORM),
    ("?,-", UNKNOWN_FORM),
])
def test_normalize_form(raw, expected):
    assert normalize_form(raw) == expected


def test_decode_fixture_parses_kickoff_as_utc():
    fixture = decode_fixture(match(1001, "PL", 64, "Liverpool FC", 57, "Arsenal FC", "2025-01-05T16:30:00Z", "Anfield"))

    assert fixture.provider_id == 1001
    assert fixture.kickoff == datetime(2025, 1, 5, 16, 30, tzinfo=timezone.utc)
    assert fixture.competition_code == "PL"
    assert fixture.venue == "Anfield"


def test_decode_fixture_uses_default_competition():
    payload = match(5, "PL", 1, "A", 2, "B")
    del payload["competition"]

    fixture = decode_fixture(payload, default_competition="SA")
    assert fixture.competition_code == "SA"


@pytest.mark.parametrize("broken", [
    lambda payload: payload.pop("id"),
    lambda payload: payload["homeTeam"].pop("id"),
    lambda payload: payload.update(utcDate="not a date"),
])
def test_decode_fixture_rejects_unidentifiable_matches(broken):
    payload = match(5, "PL", 1, "A", 2, "B")
    broken(payload)

    with pytest.raises(SchemaValidationError):
        decode_fixture(payload)


def test_identifier_helpers():
    assert ids.make_match_id("pl", 1001) == "PL-1001"
    assert ids.make_team_cache_key("SA", 98) == "team-SA-98"
    assert ids.make_standings_marker_key("BL1") == "standings-BL1"
    assert ids.make_fixtures_cache_key("PD", 7) == "fixtures:PD:7"
