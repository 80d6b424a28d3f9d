"""NBA team code normalization.

ESPN pastes (and some hand-typed rosters) use non-standard team codes, while
schedule feeds use the standard 2-3 letter NBA abbreviations.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

TEAM_CODE_ALIASES: Dict[str, str] = {
    "UTAH": "UTA",
    "GS": "GSW",
    "NY": "NYK",
    "SA": "SAS",
    "NO": "NOP",
    "WSH": "WAS",
    "PHO": "PHX",
    "BRK": "BKN",
    "CHO": "CHA",
}

_CLEAN_CODE = re.compile(r"^[A-Z]{2,3}$")
_LEADING_BLOCK = re.compile(r"^[A-Z]{2,4}")
_ANY_BLOCK = re.compile(r"[A-Z]{2,4}")


def normalize_team_code(team: Optional[str]) -> Optional[str]:
    """Normalize a team code to the schedule feed's abbreviation.

    Args:
        team: Raw team code (e.g., "UTAH", "gs", "LAL ", "UTAH•")

    Returns:
        Canonical abbreviation (e.g., "UTA"), or None if nothing usable is found

    Examples:
        >>> normalize_team_code("UTAH")
        'UTA'
        >>> normalize_team_code(" lal ")
        'LAL'
        >>> normalize_team_code("INVALID_CODE") is None
        True
    """
    if not team:
        return None

    raw = team.upper().strip()
    if not raw:
        return None

    if _CLEAN_CODE.match(raw):
        return TEAM_CODE_ALIASES.get(raw, raw)

    # Decorated strings: take the first 2-4 letter block
    match = _LEADING_BLOCK.match(raw) or _ANY_BLOCK.search(raw)
    if not match:
        return None

    extracted = match.group(0)
    if extracted in TEAM_CODE_ALIASES:
        return TEAM_CODE_ALIASES[extracted]
    if _CLEAN_CODE.match(extracted):
        return extracted
    return None
