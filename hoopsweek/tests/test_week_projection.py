"""Tests for the schedule-aware week projector."""

from datetime import date

import pytest

from hoopsweek.matchup.roster_optimizer import LineupSlot
from hoopsweek.matchup.validation import ProjectionErrorCode
from hoopsweek.matchup.week_projection import project_week, project_week_safe
from hoopsweek.models import Game

MONDAY = date(2026, 1, 5)
TUESDAY = date(2026, 1, 6)
WEDNESDAY = date(2026, 1, 7)


@pytest.mark.integration
class TestProjectWeek:
    """Test weekly accumulation over the allocator."""

    def test_started_games_follow_schedule(self, make_entry, sample_schedule):
        roster = [make_entry("lal", "LAL"), make_entry("bos", "BOS", ["C"])]

        projection = project_week(roster, [MONDAY, TUESDAY, WEDNESDAY], sample_schedule)

        assert projection.player("lal").scheduled_games == 2
        assert projection.player("lal").started_games == pytest.approx(2.0)
        assert projection.player("bos").started_games == pytest.approx(2.0)
        assert projection.started_games == pytest.approx(4.0)
        assert projection.totals.points == pytest.approx(22.0 * 4)

    def test_utah_alias_on_roster(self, make_entry, sample_schedule):
        roster = [make_entry("uta", "UTAH", ["SF"])]

        projection = project_week(roster, [TUESDAY], sample_schedule)

        assert projection.player("uta").started_games == pytest.approx(1.0)
        assert projection.unmapped_players == []

    def test_percentages_are_ratio_of_sums(self, make_entry):
        schedule = {MONDAY: [Game(home_team="LAL", away_team="BOS")]}
        roster = [
            make_entry("a", "LAL", ["PG"], fgm=6.0, fga=10.0, ftm=4.0, fta=5.0),
            make_entry("b", "BOS", ["C"], fgm=4.0, fga=10.0, ftm=6.0, fta=10.0),
        ]

        projection = project_week(roster, [MONDAY], schedule)

        assert projection.fg_pct == pytest.approx(0.5)
        assert projection.ft_pct == pytest.approx(10 / 15)
        assert projection.stats_by_date[MONDAY].fg_pct == pytest.approx(0.5)

    @pytest.mark.parametrize("status", ["O", "IR", "SUSP"])
    def test_out_players_get_nothing(self, make_entry, sample_schedule, status):
        roster = [make_entry("hurt", "LAL", status=status)]

        projection = project_week(roster, [MONDAY, TUESDAY], sample_schedule)

        hurt = projection.player("hurt")
        assert hurt.started_games == 0.0
        assert hurt.scheduled_games == 2
        assert hurt.benched_games == 0
        assert projection.bench_overflow == 0
        assert projection.totals.points == 0.0

    def test_day_to_day_is_weighted(self, make_entry, sample_schedule):
        roster = [make_entry("dtd", "LAL", status="DTD")]

        projection = project_week(roster, [MONDAY, TUESDAY], sample_schedule)

        assert projection.player("dtd").started_games == pytest.approx(1.2)
        assert projection.possible_games == pytest.approx(1.2)
        assert projection.player("dtd").status_label == "DTD (60%)"

    def test_ir_slot_excluded(self, make_entry, sample_schedule):
        roster = [make_entry("ir", "LAL", slot_type="ir"), make_entry("lal", "LAL")]

        projection = project_week(roster, [MONDAY], sample_schedule)

        assert projection.player("ir") is None
        assert projection.started_games == pytest.approx(1.0)

    def test_bench_overflow_and_empty_slot_days(self, make_entry):
        schedule = {MONDAY: [Game(home_team="LAL", away_team="BOS")]}
        slots = [LineupSlot("PG", frozenset({"PG"})), LineupSlot("C", frozenset({"C"}))]
        roster = [make_entry("pg1"), make_entry("pg2"), make_entry("pg3")]

        projection = project_week(roster, [MONDAY, TUESDAY], schedule, lineup_slots=slots)

        assert projection.bench_overflow == 2
        assert projection.player("pg2").benched_games == 1
        # Monday leaves C open, Tuesday has no games at all
        assert projection.empty_slot_days == 2
        assert projection.unfilled_slots == 3

    def test_ten_point_guards_on_one_game_day(self, make_entry):
        """PG, G and UTIL are the only seats a PG-only roster can fill."""
        schedule = {MONDAY: [Game(home_team="LAL", away_team="BOS")]}
        roster = [make_entry(f"pg{i}", "LAL", ["PG"]) for i in range(10)]

        projection = project_week(roster, [MONDAY], schedule)

        assert projection.daily[MONDAY].filled_slots == 3
        assert projection.bench_overflow == 7
        assert projection.unfilled_slots == 5
        assert projection.started_games == pytest.approx(3.0)
        assert projection.totals.points == pytest.approx(66.0)

    def test_started_never_exceeds_team_games(self, make_entry, sample_schedule):
        roster = [make_entry(f"p{i}", "LAL", ["PG", "SG"]) for i in range(6)]

        projection = project_week(roster, [MONDAY, TUESDAY, WEDNESDAY], sample_schedule)

        for player in projection.player_projections:
            assert player.started_games <= 2
        for allocation in projection.daily.values():
            assert allocation.filled_slots <= allocation.slot_count

    def test_partial_mapping_warns(self, make_entry, sample_schedule):
        roster = [make_entry("lal", "LAL"), make_entry("bad", "XXX", name="Mystery Man")]

        projection = project_week(roster, [MONDAY], sample_schedule)

        assert [p.player_id for p in projection.unmapped_players] == ["bad"]
        assert projection.player("bad").mapped is False
        assert projection.player("bad").started_games == 0.0
        assert any("Mystery Man" in w for w in projection.warnings)

    def test_duplicate_players_counted_once(self, make_entry, sample_schedule):
        roster = [make_entry("lal", "LAL"), make_entry("lal", "LAL")]

        projection = project_week(roster, [MONDAY], sample_schedule)

        assert len(projection.player_projections) == 1
        assert projection.started_games == pytest.approx(1.0)

    def test_game_filter(self, make_entry, sample_schedule):
        roster = [make_entry("lal", "LAL")]

        projection = project_week(
            roster, [MONDAY, TUESDAY], sample_schedule, game_filter=lambda day, game: day != MONDAY
        )

        assert projection.player("lal").scheduled_games == 1
        assert projection.stats_by_date[MONDAY].points == 0.0

    def test_empty_roster(self, sample_schedule):
        projection = project_week([], [MONDAY], sample_schedule)

        assert projection.started_games == 0.0
        assert projection.warnings

    def test_to_dict(self, make_entry, sample_schedule):
        data = project_week([make_entry("lal")], [MONDAY], sample_schedule).to_dict()

        assert data["stats_by_date"]["2026-01-05"]["points"] == pytest.approx(22.0)
        assert data["player_projections"][0]["player_id"] == "lal"
        assert data["daily"]["2026-01-05"]["filled_slots"] == 1


@pytest.mark.integration
class TestProjectWeekSafe:
    """Test structured failures."""

    def test_no_schedule_data(self, make_entry):
        outcome = project_week_safe([make_entry("p1")], [TUESDAY], {})

        assert not outcome.success
        assert outcome.error.code is ProjectionErrorCode.NO_SCHEDULE_DATA

    def test_mapping_failed(self, make_entry):
        schedule = {TUESDAY: [Game(home_team="LAL", away_team="BOS")]}

        outcome = project_week_safe([make_entry("x", "XXX")], [TUESDAY], schedule)

        assert outcome.error.code is ProjectionErrorCode.SCHEDULE_MAPPING_FAILED
        assert len(outcome.error.validation.unmapped_players) == 1

    def test_success(self, make_entry):
        schedule = {TUESDAY: [Game(home_team="LAL", away_team="BOS")]}

        outcome = project_week_safe([make_entry("p1", "LAL")], [TUESDAY], schedule)

        assert outcome.success
        assert outcome.projection.started_games > 0
        assert outcome.projection.validation.players_received == 1

    def test_no_remaining_dates_is_zero_projection(self, make_entry, sample_schedule):
        outcome = project_week_safe([make_entry("p1")], [], sample_schedule)

        assert outcome.success
        assert outcome.projection.started_games == 0.0
