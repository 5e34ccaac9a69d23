"""Canonical ID and cache key helpers."""


def canonicalize_competition_code(code: str) -> str:
    return (code or "").strip().upper()


def make_match_id(competition_code: str, provider_id: int) -> str:
    """Provider match ids only are unique within one competition."""
    return f"{canonicalize_competition_code(competition_code)}-{provider_id}"


def make_team_cache_key(competition_code: str, team_id: int) -> str:
    return f"team-{canonicalize_competition_code(competition_code)}-{team_id}"


def make_standings_marker_key(competition_code: str) -> str:
    return f"standings-{canonicalize_competition_code(competition_code)}"


def make_fixtures_cache_key(competition_code: str, days_ahead: int) -> str:
    return f"fixtures:{canonicalize_competition_code(competition_code)}:{int(days_ahead)}"
