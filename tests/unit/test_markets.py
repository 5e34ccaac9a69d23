"""Unit tests for betting market probabilities."""

import pytest

from predicta.models.markets import betting_markets, btts_probability, expected_total_goals

MARKET_NAMES = [
    "over_1_5_goals",
    "over_2_5_goals",
    "over_3_5_goals",
    "btts",
    "corners_over_6_5",
    "corners_over_8_5",
    "corners_over_10_5",
]


@pytest.fixture
def unplayed(make_team):
    return make_team("New", wins=0, draws=0, losses=0, scored=0, conceded=0, form="N/A")


def test_unplayed_teams_use_default_goal_rate(unplayed):
    assert expected_total_goals(unplayed, unplayed) == 3.0


def test_market_probabilities_for_default_teams(unplayed):
    markets = betting_markets(unplayed, unplayed, confidence=70)

    assert markets.over_1_5_goals.probability == 78.8
    assert markets.over_2_5_goals.probability == 37.5
    assert markets.over_3_5_goals.probability == 15.0
    assert markets.btts.probability == 77.5
    # 5 + 5 corners per game
    assert markets.corners_over_6_5.probability == 65.8
    assert markets.corners_over_8_5.probability == 39.1
    assert markets.corners_over_10_5.probability == 15.0


def test_recommendation_needs_probability_and_confidence(unplayed):
    confident = betting_markets(unplayed, unplayed, confidence=70)
    unsure = betting_markets(unplayed, unplayed, confidence=60)

    assert confident.over_1_5_goals.recommended is True
    assert confident.btts.recommended is True
    assert confident.corners_over_6_5.recommended is True
    assert confident.over_2_5_goals.recommended is False
    assert confident.over_3_5_goals.recommended is False
    assert not any(getattr(unsure, name).recommended for name in MARKET_NAMES)


def test_btts_penalised_by_tight_defense(make_team):
    attackers = make_team(wins=10, draws=5, losses=5, scored=40, conceded=30)
    fortress = make_team(wins=12, draws=6, losses=2, scored=30, conceded=10)

    # 2.0/1.5 scoring, 1.5/0.5 conceding: 35 + 21.875 + 12.5 + 5 - 10
    assert btts_probability(attackers, fortress) == pytest.approx(64.375)


@pytest.mark.parametrize("corners, expected", [(1.0, 25.0), (20.0, 95.0)])
def test_corner_market_clamps(make_team, corners, expected):
    team = make_team(corners_per_game=corners)
    markets = betting_markets(team, team, confidence=90)

    assert markets.corners_over_6_5.probability == expected


def test_probabilities_within_market_ranges(strong_team, weak_team, make_team):
    teams = [strong_team, weak_team, make_team(scored=70, conceded=60, corners_per_game=9.0)]
    bounds = {
        "over_1_5_goals": (25, 95),
        "over_2_5_goals": (15, 90),
        "over_3_5_goals": (10, 85),
        "btts": (20, 90),
        "corners_over_6_5": (20, 95),
        "corners_over_8_5": (15, 90),
        "corners_over_10_5": (10, 85),
    }
    for home in teams:
        for away in teams:
            markets = betting_markets(home, away, confidence=80)
            for name, (low, high) in bounds.items():
                assert low <= getattr(markets, name).probability <= high
