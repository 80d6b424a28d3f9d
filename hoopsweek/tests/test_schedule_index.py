"""Tests for the date-keyed schedule index."""

from datetime import date, datetime

import pytest

from hoopsweek.models import Game
from hoopsweek.schedule.schedule_index import GameScheduleIndex, coerce_date

MONDAY = date(2026, 1, 5)
TUESDAY = date(2026, 1, 6)
WEDNESDAY = date(2026, 1, 7)


@pytest.mark.unit
class TestCoerceDate:
    def test_accepts_date_datetime_and_string(self):
        assert coerce_date(MONDAY) == MONDAY
        assert coerce_date(datetime(2026, 1, 5, 19, 30)) == MONDAY
        assert coerce_date("2026-01-05") == MONDAY
        assert coerce_date("2026-01-05T23:00:00") == MONDAY

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            coerce_date("next tuesday")


@pytest.mark.unit
class TestGameScheduleIndex:
    """Test schedule lookups."""

    def test_team_lookup(self, sample_schedule):
        index = GameScheduleIndex(sample_schedule)

        assert index.team_plays_on("LAL", MONDAY)
        assert index.team_plays_on("BOS", MONDAY)
        assert not index.team_plays_on("MIA", MONDAY)
        assert index.game_for_team("UTA", TUESDAY).game_id == "g2"

    def test_roster_alias_matches_schedule(self, sample_schedule):
        """UTAH on the roster matches UTA in the schedule."""
        index = GameScheduleIndex(sample_schedule)
        assert index.team_plays_on("UTAH", TUESDAY)

    def test_schedule_aliases_are_normalized(self):
        index = GameScheduleIndex({MONDAY: [Game(home_team="GS", away_team="UTAH")]})

        game = index.game_for_team("GSW", MONDAY)
        assert game is not None
        assert game.away_team == "UTA"
        assert index.known_teams() == {"GSW", "UTA"}

    def test_string_dates(self):
        index = GameScheduleIndex({"2026-01-05": [Game(home_team="LAL", away_team="BOS")]})
        assert index.team_plays_on("LAL", "2026-01-05")
        assert index.dates() == [MONDAY]

    def test_team_game_dates(self, sample_schedule):
        index = GameScheduleIndex(sample_schedule)

        assert index.team_game_dates("LAL") == [MONDAY, TUESDAY]
        assert index.team_game_dates("LAL", [TUESDAY, WEDNESDAY]) == [TUESDAY]
        assert index.team_games_in_range("BOS", [MONDAY, TUESDAY, WEDNESDAY]) == 2

    def test_has_games_in(self, sample_schedule):
        index = GameScheduleIndex(sample_schedule)
        assert index.has_games_in([WEDNESDAY])
        assert not index.has_games_in([date(2026, 1, 10)])

    def test_empty_index(self):
        index = GameScheduleIndex()
        assert index.is_empty
        assert len(index) == 0
        assert index.games_on(MONDAY) == []
        assert not index.team_plays_on("LAL", MONDAY)

    def test_coerce_reuses_index(self, sample_schedule):
        index = GameScheduleIndex(sample_schedule)
        assert GameScheduleIndex.coerce(index) is index
        assert len(GameScheduleIndex.coerce(sample_schedule)) == 4
