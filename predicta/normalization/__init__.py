"""Provider payload decoding and identifiers."""

from predicta.normalization.schema import (
    RawFixture,
    SchemaValidationError,
    StandingRow,
    decode_fixture,
    decode_standing_row,
    decode_standings_table,
    normalize_form,
)
from predicta.normalization.ids import (
    make_fixtures_cache_key,
    make_match_id,
    make_standings_marker_key,
    make_team_cache_key,
)

__all__ = [
    "RawFixture",
    "SchemaValidationError",
    "StandingRow",
    "decode_fixture",
    "decode_standing_row",
    "decode_standings_table",
    "normalize_form",
    "make_fixtures_cache_key",
    "make_match_id",
    "make_standings_marker_key",
    "make_team_cache_key",
]
