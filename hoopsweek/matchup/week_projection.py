"""Schedule-aware weekly projection of a fantasy roster.

For each remaining date the players whose team plays are run through the
daily slot filler, and per-game rates are credited by the fraction of a
start each player receives. Percentages are derived from summed makes and
attempts at the end, never averaged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union

from hoopsweek.matchup.roster_optimizer import (
    STANDARD_LINEUP_SLOTS,
    DayAllocation,
    LineupSlot,
    SlotCandidate,
    fill_lineup_for_day,
)
from hoopsweek.matchup.validation import (
    ProjectionError,
    ProjectionErrorCode,
    ProjectionOutcome,
    UnmappedPlayer,
    ValidationReport,
    validate_projection_input,
)
from hoopsweek.models import Game, RosterEntry
from hoopsweek.player.availability import get_availability_multiplier, get_status_label
from hoopsweek.player.player_stats import StatLine
from hoopsweek.player.shrinkage import get_blended_per_game_stats, has_missing_shot_volume
from hoopsweek.schedule.schedule_index import DateLike, GameScheduleIndex, coerce_date
from hoopsweek.schedule.team_codes import normalize_team_code
from hoopsweek.utils.player_utils import active_entries, deduplicate_entries

logger = logging.getLogger(__name__)

ScheduleInput = Union[GameScheduleIndex, Mapping[DateLike, Sequence[Game]]]
GameFilter = Callable[[date, Game], bool]


@dataclass
class PlayerProjection:
    """One player's contribution to the weekly projection."""

    player_id: str
    name: str
    nba_team: Optional[str]
    positions: List[str]
    status: str
    availability: float
    scheduled_games: int = 0
    started_games: float = 0.0
    benched_games: int = 0
    per_game: StatLine = field(default_factory=StatLine)
    projected: StatLine = field(default_factory=StatLine)
    used_shrinkage: bool = False
    mapped: bool = True

    @property
    def status_label(self) -> str:
        return get_status_label(self.availability)

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "nba_team": self.nba_team,
            "positions": list(self.positions),
            "status": self.status,
            "status_label": self.status_label,
            "availability": self.availability,
            "scheduled_games": self.scheduled_games,
            "started_games": self.started_games,
            "benched_games": self.benched_games,
            "per_game": self.per_game.to_dict(),
            "projected": self.projected.to_dict(),
            "used_shrinkage": self.used_shrinkage,
            "mapped": self.mapped,
        }


@dataclass
class WeekProjection:
    totals: StatLine = field(default_factory=StatLine)
    started_games: float = 0.0
    bench_overflow: int = 0
    unfilled_slots: int = 0
    empty_slot_days: int = 0
    possible_games: float = 0.0
    player_projections: List[PlayerProjection] = field(default_factory=list)
    daily: Dict[date, DayAllocation] = field(default_factory=dict)
    stats_by_date: Dict[date, StatLine] = field(default_factory=dict)
    unmapped_players: List[UnmappedPlayer] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    validation: Optional[ValidationReport] = None

    @property
    def fg_pct(self) -> float:
        return self.totals.fg_pct

    @property
    def ft_pct(self) -> float:
        return self.totals.ft_pct

    def player(self, player_id: str) -> Optional[PlayerProjection]:
        for projection in self.player_projections:
            if projection.player_id == player_id:
                return projection
        return None

    def to_dict(self) -> dict:
        return {
            "totals": self.totals.to_dict(),
            "started_games": self.started_games,
            "bench_overflow": self.bench_overflow,
            "unfilled_slots": self.unfilled_slots,
            "empty_slot_days": self.empty_slot_days,
            "possible_games": self.possible_games,
            "player_projections": [p.to_dict() for p in self.player_projections],
            "daily": {day.isoformat(): alloc.to_dict() for day, alloc in self.daily.items()},
            "stats_by_date": {
                day.isoformat(): line.to_dict() for day, line in self.stats_by_date.items()
            },
            "unmapped_players": [
                {"player_id": p.player_id, "name": p.name, "nba_team": p.nba_team, "reason": p.reason}
                for p in self.unmapped_players
            ],
            "warnings": list(self.warnings),
            "validation": self.validation.to_dict() if self.validation else None,
        }


def _build_player_projection(entry: RosterEntry, mapped: bool) -> PlayerProjection:
    player = entry.player
    per_game, used_shrinkage = get_blended_per_game_stats(player)
    return PlayerProjection(
        player_id=player.player_id,
        name=player.name,
        nba_team=normalize_team_code(player.nba_team) or player.nba_team,
        positions=list(player.positions),
        status=player.status or "healthy",
        availability=get_availability_multiplier(player.status),
        per_game=per_game,
        used_shrinkage=used_shrinkage,
        mapped=mapped,
    )


def project_week(
    roster: Sequence[RosterEntry],
    remaining_dates: Sequence[DateLike],
    schedule: ScheduleInput,
    lineup_slots: Sequence[LineupSlot] = STANDARD_LINEUP_SLOTS,
    game_filter: Optional[GameFilter] = None,
) -> WeekProjection:
    """Project category totals for the remaining days of the week.

    Args:
        roster: Roster entries in input order (order breaks slot-fill ties)
        remaining_dates: Dates still to be played this week
        schedule: Date to games mapping or a prebuilt GameScheduleIndex
        lineup_slots: Ordered slot inventory
        game_filter: Optional predicate; a game only counts when it returns True

    Returns:
        WeekProjection; unmapped players contribute nothing and are reported
    """
    index = GameScheduleIndex.coerce(schedule)
    days = sorted({coerce_date(d) for d in remaining_dates})
    projection = WeekProjection()

    entries = active_entries(deduplicate_entries(roster))
    if not entries:
        projection.warnings.append("Roster has no active players; nothing to project")
        logger.warning("Projecting an empty roster")
    if not days:
        projection.warnings.append("No remaining dates this week")

    validation = validate_projection_input(entries, days, index)
    projection.validation = validation
    projection.unmapped_players = list(validation.unmapped_players)
    unmapped_ids = {p.player_id for p in validation.unmapped_players}
    for unmapped in validation.unmapped_players:
        projection.warnings.append(
            f"{unmapped.name}: {unmapped.reason} ({unmapped.nba_team or 'none'}), excluded"
        )

    players: Dict[str, PlayerProjection] = {}
    for entry in entries:
        player_projection = _build_player_projection(entry, entry.player.player_id not in unmapped_ids)
        players[entry.player.player_id] = player_projection
        if not entry.player.positions:
            projection.warnings.append(f"{entry.player.name}: no eligible positions")
        if has_missing_shot_volume(entry.player):
            projection.warnings.append(
                f"{entry.player.name}: missing shooting volume, using position averages"
            )
        elif player_projection.used_shrinkage:
            projection.warnings.append(f"{entry.player.name}: using blended stats (limited sample)")

    for day in days:
        candidates: List[SlotCandidate] = []
        for entry in entries:
            player_projection = players[entry.player.player_id]
            if not player_projection.mapped:
                continue
            game = index.game_for_team(entry.player.nba_team, day)
            if game is None:
                continue
            if game_filter is not None and not game_filter(day, game):
                continue
            player_projection.scheduled_games += 1
            projection.possible_games += player_projection.availability
            candidates.append(
                SlotCandidate(entry.player.player_id, entry.player.positions, player_projection.availability)
            )

        allocation = fill_lineup_for_day(candidates, lineup_slots)
        projection.daily[day] = allocation

        day_line = StatLine()
        for player_id, fraction in allocation.started.items():
            player_projection = players[player_id]
            player_projection.started_games += fraction
            day_line = day_line + player_projection.per_game.scaled(fraction)
        for player_id in allocation.benched:
            players[player_id].benched_games += 1

        projection.stats_by_date[day] = day_line
        projection.bench_overflow += allocation.bench_overflow
        projection.unfilled_slots += allocation.unfilled_slots
        if allocation.unfilled_slots > 0:
            projection.empty_slot_days += 1

        logger.debug(
            f"{day}: {len(candidates)} candidates, {allocation.filled_slots}/{allocation.slot_count} "
            f"filled, {allocation.bench_overflow} benched"
        )

    for player_projection in players.values():
        player_projection.projected = player_projection.per_game.scaled(player_projection.started_games)
        projection.totals = projection.totals + player_projection.projected
        projection.started_games += player_projection.started_games
        projection.player_projections.append(player_projection)

    logger.info(
        f"Week projection: {len(days)} days, {projection.started_games:.2f} started games, "
        f"{projection.bench_overflow} bench overflow, {projection.empty_slot_days} days with empty slots"
    )
    return projection


def check_projection_input(
    roster: Sequence[RosterEntry],
    remaining_dates: Sequence[DateLike],
    index: GameScheduleIndex,
) -> Optional[ProjectionError]:
    """Return the window-level error that makes a projection meaningless, if any."""
    days = sorted({coerce_date(d) for d in remaining_dates})
    if days and not index.has_games_in(days):
        logger.warning(f"No schedule data for {len(days)} requested dates")
        return ProjectionError.from_code(ProjectionErrorCode.NO_SCHEDULE_DATA)

    validation = validate_projection_input(deduplicate_entries(roster), days, index)
    if validation.all_unmapped:
        logger.warning("No roster players could be mapped to the schedule")
        return ProjectionError.from_code(ProjectionErrorCode.SCHEDULE_MAPPING_FAILED, validation)
    return None


def project_week_safe(
    roster: Sequence[RosterEntry],
    remaining_dates: Sequence[DateLike],
    schedule: ScheduleInput,
    lineup_slots: Sequence[LineupSlot] = STANDARD_LINEUP_SLOTS,
    game_filter: Optional[GameFilter] = None,
) -> ProjectionOutcome[WeekProjection]:
    """Like ``project_week`` but returns structured errors instead of a bad projection."""
    index = GameScheduleIndex.coerce(schedule)
    error = check_projection_input(roster, remaining_dates, index)
    if error is not None:
        return ProjectionOutcome(error=error)
    return ProjectionOutcome(
        projection=project_week(roster, remaining_dates, index, lineup_slots, game_filter)
    )
