"""Tests for rest-of-week integer start matching."""

from datetime import date

import pytest

from hoopsweek.matchup.roster_optimizer import STANDARD_LINEUP_SLOTS, LineupSlot
from hoopsweek.matchup.start_matching import (
    EXCLUDED_IR,
    EXCLUDED_MISSING_TEAM,
    EXCLUDED_NO_POSITIONS,
    compute_rest_of_week_starts,
    find_maximum_matching,
)
from hoopsweek.models import Game

MONDAY = date(2026, 1, 5)
TUESDAY = date(2026, 1, 6)


@pytest.mark.unit
class TestFindMaximumMatching:
    def test_augmenting_path_beats_greedy_order(self):
        """A flexible player is moved so a constrained one can start."""
        slots = [LineupSlot("C", frozenset({"C"})), LineupSlot("UTIL", frozenset({"PG", "C"}))]
        players = [("a", "Flexible", ["PG", "C"]), ("b", "Center", ["C"])]

        count, assignments = find_maximum_matching(players, slots)

        assert count == 2
        assert {a.player_id: a.assigned_slot for a in assignments} == {"a": "UTIL", "b": "C"}

    def test_point_guard_glut(self):
        players = [(f"p{i}", f"Player {i}", ["PG"]) for i in range(10)]

        count, assignments = find_maximum_matching(players, STANDARD_LINEUP_SLOTS)

        assert count == 3
        assert sorted(a.assigned_slot for a in assignments) == ["G", "PG", "UTIL"]

    def test_no_players(self):
        assert find_maximum_matching([], STANDARD_LINEUP_SLOTS) == (0, [])


@pytest.mark.integration
class TestComputeRestOfWeekStarts:
    """Test per-day breakdown and week totals."""

    def test_week_totals(self, make_entry):
        schedule = {
            MONDAY: [Game(home_team="LAL", away_team="BOS")],
            TUESDAY: [Game(home_team="LAL", away_team="MIA")],
        }
        roster = [
            make_entry("lal1", "LAL", ["PG"]),
            make_entry("lal2", "LAL", ["PG"]),
            make_entry("lal3", "LAL", ["PG"]),
            make_entry("lal4", "LAL", ["PG"]),
            make_entry("bos1", "BOS", ["C"]),
            make_entry("ir1", "LAL", ["SF"], slot_type="ir"),
            make_entry("nopos", "LAL", []),
            make_entry("noteam", "", ["SG"]),
        ]

        result = compute_rest_of_week_starts(roster, [MONDAY, TUESDAY], schedule)

        monday, tuesday = result.per_day
        assert monday.players_with_game == 5
        assert monday.starts_used == 4
        assert monday.overflow == 1
        assert monday.unused_slots == 4
        assert monday.schedule_games_count == 1
        assert monday.missing_team_count == 1
        assert {p.reason for p in monday.excluded_players} == {
            EXCLUDED_IR,
            EXCLUDED_NO_POSITIONS,
            EXCLUDED_MISSING_TEAM,
        }
        assert tuesday.starts_used == 3

        assert result.projected_starts == 7
        assert result.max_possible_starts == 16
        assert result.unused_starts == 9
        assert result.overflow_games == 2
        assert result.roster_games_remaining == 9
        assert result.days_remaining == 2

    def test_injury_status_is_ignored(self, make_entry):
        schedule = {MONDAY: [Game(home_team="LAL", away_team="BOS")]}
        roster = [make_entry("out", "LAL", ["PG"], status="O")]

        result = compute_rest_of_week_starts(roster, [MONDAY], schedule)

        assert result.projected_starts == 1

    def test_to_dict_serializes_dates(self, make_entry):
        schedule = {MONDAY: [Game(home_team="LAL", away_team="BOS")]}
        result = compute_rest_of_week_starts([make_entry("p1")], ["2026-01-05"], schedule)

        data = result.to_dict()

        assert data["per_day"][0]["day"] == "2026-01-05"
        assert data["projected_starts"] == 1
