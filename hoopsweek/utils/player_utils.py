"""Utilities for working with roster entries."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from hoopsweek.models import RosterEntry

logger = logging.getLogger(__name__)


def get_player_key(entry: RosterEntry) -> Optional[str]:
    """Extract the player id from a roster entry.

    Args:
        entry: Roster entry

    Returns:
        Player id or None if blank
    """
    return entry.player.player_id or None


def deduplicate_entries(roster: Iterable[RosterEntry]) -> List[RosterEntry]:
    """Drop repeated player ids, keeping the first occurrence.

    A player pasted twice would otherwise be credited twice for the same game.

    Args:
        roster: Roster entries in input order

    Returns:
        Entries with unique player ids, original order preserved

    Example:
        >>> from hoopsweek.models import Player, RosterEntry
        >>> a = RosterEntry(player=Player(player_id="1", name="A"))
        >>> len(deduplicate_entries([a, a]))
        1
    """
    unique_entries: Dict[str, RosterEntry] = {}

    for entry in roster:
        player_key = get_player_key(entry)
        if not player_key:
            continue
        if player_key in unique_entries:
            logger.warning(f"Duplicate roster entry for player {player_key}, ignoring repeat")
            continue
        unique_entries[player_key] = entry

    return list(unique_entries.values())


def active_entries(roster: Iterable[RosterEntry]) -> List[RosterEntry]:
    """Entries eligible for lineup slots (everything except injured reserve)."""
    return [entry for entry in roster if not entry.is_injured_reserve]


def injured_reserve_entries(roster: Iterable[RosterEntry]) -> List[RosterEntry]:
    return [entry for entry in roster if entry.is_injured_reserve]
