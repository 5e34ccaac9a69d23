"""
Constants for predicta.

Provides competition code mappings, the default tracked competitions,
and the sentinel used for unknown team form.
"""

from typing import Dict, List, Optional


# =============================================================================
# COMPETITIONS
# =============================================================================

# football-data.org competition codes keyed by the names people actually type
COMPETITION_CODES: Dict[str, str] = {
    'Premier League': 'PL',
    'English Premier League': 'PL',
    'EPL': 'PL',
    'Championship': 'ELC',
    'La Liga': 'PD',
    'LaLiga': 'PD',
    'Primera Division': 'PD',
    'Serie A': 'SA',
    'Bundesliga': 'BL1',
    'Ligue 1': 'FL1',
    'Eredivisie': 'DED',
    'Primeira Liga': 'PPL',
    'Champions League': 'CL',
    'UEFA Champions League': 'CL',
    'European Championship': 'EC',
    'World Cup': 'WC',
    'FIFA World Cup': 'WC',
    'Campeonato Brasileiro Serie A': 'BSA',
}

COMPETITION_NAMES: Dict[str, str] = {
    'PL': 'Premier League',
    'ELC': 'Championship',
    'PD': 'Primera Division',
    'SA': 'Serie A',
    'BL1': 'Bundesliga',
    'FL1': 'Ligue 1',
    'DED': 'Eredivisie',
    'PPL': 'Primeira Liga',
    'CL': 'UEFA Champions League',
    'EC': 'European Championship',
    'WC': 'FIFA World Cup',
    'BSA': 'Campeonato Brasileiro Serie A',
}

DEFAULT_COMPETITIONS: List[str] = ['PL', 'PD', 'SA', 'BL1']


def competition_code(value: Optional[str]) -> Optional[str]:
    """
    Normalize a league name or code to its football-data.org code.

    Handles:
    - Full names: "Premier League" -> "PL"
    - Any case: "serie a" -> "SA", "bl1" -> "BL1"
    - Already standard: "PD" -> "PD"

    Returns None for empty input and the upper-cased input when unknown,
    so new provider codes still pass through.
    """
    if not value:
        return None

    text = str(value).strip()
    if text in COMPETITION_CODES:
        return COMPETITION_CODES[text]

    upper = text.upper()
    if upper in COMPETITION_NAMES:
        return upper

    lowered = text.lower()
    for name, code in COMPETITION_CODES.items():
        if name.lower() == lowered:
            return code

    return upper


def competition_name(code: str) -> str:
    """Human-readable name for a competition code."""
    return COMPETITION_NAMES.get((code or '').upper(), code)


# =============================================================================
# TEAM FORM
# =============================================================================

UNKNOWN_FORM = 'N/A'
FORM_RESULTS = ('W', 'D', 'L')
FORM_WINDOW = 5

# =============================================================================
# PROVIDER
# =============================================================================

FOOTBALL_DATA_SOURCE = 'football_data'
FOOTBALL_DATA_BASE_URL = 'https://api.football-data.org/v4'
SCHEDULED_STATUS = 'SCHEDULED'
