"""Pytest configuration and fixtures for hoopsweek tests."""

from __future__ import annotations

from datetime import date
from typing import Callable, Dict, List

import pytest

from hoopsweek.models import Game, GameLiveStatus, Player, RosterEntry

MONDAY = date(2026, 1, 5)
TUESDAY = date(2026, 1, 6)
WEDNESDAY = date(2026, 1, 7)


def build_player(player_id: str, nba_team: str = "LAL", positions=("PG",), **overrides) -> Player:
    stats = {
        "name": f"Player {player_id}",
        "games_played": 20,
        "minutes": 32.0,
        "fgm": 8.0,
        "fga": 16.0,
        "ftm": 4.0,
        "fta": 5.0,
        "threes": 2.0,
        "rebounds": 5.0,
        "assists": 6.0,
        "steals": 1.0,
        "blocks": 0.5,
        "turnovers": 2.5,
        "points": 22.0,
    }
    stats.update(overrides)
    return Player(player_id=player_id, nba_team=nba_team, positions=list(positions), **stats)


def build_entry(player_id: str, nba_team: str = "LAL", positions=("PG",), slot_type="starter", **overrides) -> RosterEntry:
    return RosterEntry(
        player=build_player(player_id, nba_team, positions, **overrides),
        slot_type=slot_type,
    )


@pytest.fixture
def make_player() -> Callable[..., Player]:
    """Factory for players with healthy, full-sample stats."""
    return build_player


@pytest.fixture
def make_entry() -> Callable[..., RosterEntry]:
    """Factory for roster entries."""
    return build_entry


@pytest.fixture
def sample_schedule() -> Dict[date, List[Game]]:
    """Three days: LAL plays Mon/Tue, BOS Mon/Wed, UTA Tue."""
    return {
        MONDAY: [Game(game_id="g1", home_team="LAL", away_team="BOS", status="Final")],
        TUESDAY: [
            Game(game_id="g2", home_team="LAL", away_team="UTA", status="7:30 PM ET"),
            Game(game_id="g3", home_team="MIA", away_team="NYK", status="7:00 PM ET"),
        ],
        WEDNESDAY: [Game(game_id="g4", home_team="BOS", away_team="MIA", status="Scheduled")],
    }


@pytest.fixture
def today_schedule() -> Callable[[GameLiveStatus], Dict[date, List[Game]]]:
    """Factory for a schedule with one LAL game today and one tomorrow."""

    def _build(status: GameLiveStatus) -> Dict[date, List[Game]]:
        return {
            TUESDAY: [Game(game_id="today", home_team="LAL", away_team="BOS", live_status=status)],
            WEDNESDAY: [Game(game_id="tomorrow", home_team="LAL", away_team="MIA")],
        }

    return _build
