"""Stat name mapping utilities.

Maps fantasy category names/abbreviations (e.g., "3PTM", "FG%") to
``StatLine`` attribute names (e.g., "threes", "fg_pct").
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List

# Scoring categories in display order
CATEGORY_ORDER: List[str] = ["FG%", "FT%", "3PTM", "PTS", "REB", "AST", "ST", "BLK", "TO"]

# Categories where the lower total wins
LOWER_IS_BETTER: FrozenSet[str] = frozenset({"turnovers"})


def build_stat_name_to_field_mapping() -> Dict[str, str]:
    """Map stat names/abbreviations to StatLine field names.

    Returns:
        Dictionary mapping category names to StatLine attributes

    Examples:
        >>> mapping = build_stat_name_to_field_mapping()
        >>> mapping["3PTM"]
        'threes'
        >>> mapping["FG%"]
        'fg_pct'
    """
    return {
        # Percentage stats (derived from makes/attempts)
        "FG%": "fg_pct",
        "FT%": "ft_pct",
        # Counting stats
        "3PTM": "threes",
        "3PM": "threes",
        "PTS": "points",
        "REB": "rebounds",
        "AST": "assists",
        "ST": "steals",
        "STL": "steals",
        "BLK": "blocks",
        "TO": "turnovers",
    }


def get_field_for_stat(stat_name: str) -> str:
    """Get the StatLine field for a stat name, or empty string if unknown."""
    return build_stat_name_to_field_mapping().get(stat_name.upper(), "")


def is_percentage_stat(stat_name: str) -> bool:
    """Check if a stat is a percentage stat.

    Percentage stats are never summed; they are computed from summed makes
    and attempts (e.g., FG% = FGM / FGA).
    """
    return "%" in stat_name or stat_name.endswith("_pct")


def is_lower_better(stat_name: str) -> bool:
    field = get_field_for_stat(stat_name) or stat_name
    return field in LOWER_IS_BETTER
