"""Slate-aware remaining projection.

Games on today's slate that have already tipped off are part of the
team's current totals, so the remaining projection only counts today's
games that have not started yet. Future days are counted in full.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple, Union

from hoopsweek.matchup.roster_optimizer import STANDARD_LINEUP_SLOTS, LineupSlot
from hoopsweek.matchup.validation import ProjectionOutcome
from hoopsweek.matchup.week_projection import (
    ScheduleInput,
    WeekProjection,
    check_projection_input,
    project_week,
)
from hoopsweek.models import Game, GameLiveStatus, RosterEntry
from hoopsweek.player.player_stats import StatLine
from hoopsweek.schedule.game_status import (
    SlateStatus,
    build_slate_status,
    game_live_status,
    resolve_slate_date,
)
from hoopsweek.schedule.schedule_index import DateLike, GameScheduleIndex, coerce_date
from hoopsweek.schedule.team_codes import normalize_team_code
from hoopsweek.utils.player_utils import active_entries, deduplicate_entries

logger = logging.getLogger(__name__)


@dataclass
class PlayerGameStatus:
    player_id: str
    player_name: str
    nba_team: str
    day: date
    game_id: str
    status: GameLiveStatus
    start_time: Optional[str] = None


def build_player_game_map(
    roster: Sequence[RosterEntry],
    schedule: ScheduleInput,
    dates: Optional[Sequence[DateLike]] = None,
) -> Dict[str, List[PlayerGameStatus]]:
    """Map player id to the games their team plays, with live status.

    IR players and players without a resolvable team are left out, as are
    players with no games on the given dates.
    """
    index = GameScheduleIndex.coerce(schedule)
    days = index.dates() if dates is None else sorted({coerce_date(d) for d in dates})

    player_games: Dict[str, List[PlayerGameStatus]] = {}
    for entry in active_entries(roster):
        player = entry.player
        team = normalize_team_code(player.nba_team)
        if not team:
            continue
        games = []
        for day in days:
            game = index.game_for_team(team, day)
            if game is None:
                continue
            games.append(
                PlayerGameStatus(
                    player_id=player.player_id,
                    player_name=player.name,
                    nba_team=team,
                    day=day,
                    game_id=game.game_id,
                    status=game_live_status(game),
                    start_time=game.start_time,
                )
            )
        if games:
            player_games[player.player_id] = games
    return player_games


def filter_not_started_games(
    player_games: Dict[str, List[PlayerGameStatus]],
) -> Dict[str, List[PlayerGameStatus]]:
    """Keep only NOT_STARTED games; players left with none are dropped."""
    filtered = {}
    for player_id, games in player_games.items():
        not_started = [g for g in games if g.status is GameLiveStatus.NOT_STARTED]
        if not_started:
            filtered[player_id] = not_started
    return filtered


def get_projection_explanation(slate_status: SlateStatus) -> str:
    """Describe which games the current and remaining totals cover."""
    if not slate_status.today_has_started_games:
        return "Current includes through yesterday; Remaining includes today and future games."
    if slate_status.all_games_complete:
        return "Current includes today (all games complete); Remaining includes future days only."
    return (
        "Current includes live games already started; Remaining includes only games "
        f"that have not started ({slate_status.not_started} games)."
    )


@dataclass
class SlateAwareProjection:
    projection: WeekProjection
    slate_status: SlateStatus
    today: date
    excluded_started_games: int = 0
    included_not_started_games: int = 0
    explanation: str = ""
    warnings: List[str] = field(default_factory=list)

    @property
    def today_stats(self) -> StatLine:
        return self.projection.stats_by_date.get(self.today, StatLine())

    @property
    def totals(self) -> StatLine:
        return self.projection.totals

    def to_dict(self) -> dict:
        return {
            "projection": self.projection.to_dict(),
            "slate_status": self.slate_status.to_dict(),
            "today": self.today.isoformat(),
            "excluded_started_games": self.excluded_started_games,
            "included_not_started_games": self.included_not_started_games,
            "explanation": self.explanation,
            "today_stats": self.today_stats.to_dict(),
            "warnings": list(self.warnings),
        }


def _split_remaining_dates(
    remaining_dates: Sequence[DateLike], today: date
) -> Tuple[List[date], List[date]]:
    days = sorted({coerce_date(d) for d in remaining_dates})
    return [d for d in days if d >= today], [d for d in days if d < today]


def project_slate_aware(
    roster: Sequence[RosterEntry],
    remaining_dates: Sequence[DateLike],
    schedule: ScheduleInput,
    as_of: Union[datetime, date],
    lineup_slots: Sequence[LineupSlot] = STANDARD_LINEUP_SLOTS,
) -> SlateAwareProjection:
    """Project the rest of the week without double-counting started games.

    Args:
        roster: Roster entries in input order
        remaining_dates: Dates still in the matchup week
        schedule: Date to games mapping or a GameScheduleIndex; today's games
            should carry live status
        as_of: Point in time the projection is made; its slate date in
            ``settings.schedule_timezone`` is "today"
        lineup_slots: Ordered slot inventory

    Returns:
        SlateAwareProjection with counters and the explanation text
    """
    index = GameScheduleIndex.coerce(schedule)
    today = resolve_slate_date(as_of)
    days, stale = _split_remaining_dates(remaining_dates, today)

    warnings: List[str] = []
    if stale:
        warnings.append(f"Ignoring {len(stale)} remaining dates before {today.isoformat()}")
        logger.warning(f"Dropped past dates from remaining window: {[d.isoformat() for d in stale]}")

    slate_status = build_slate_status(index.games_on(today), today, as_of)

    def not_started_today(day: date, game: Game) -> bool:
        if day != today:
            return True
        return game_live_status(game) is GameLiveStatus.NOT_STARTED

    entries = deduplicate_entries(roster)
    excluded = included = 0
    for games in build_player_game_map(entries, index, days).values():
        for game in games:
            if game.day == today and game.status is not GameLiveStatus.NOT_STARTED:
                excluded += 1
            else:
                included += 1

    projection = project_week(entries, days, index, lineup_slots, game_filter=not_started_today)
    warnings.extend(projection.warnings)

    result = SlateAwareProjection(
        projection=projection,
        slate_status=slate_status,
        today=today,
        excluded_started_games=excluded,
        included_not_started_games=included,
        explanation=get_projection_explanation(slate_status),
        warnings=warnings,
    )
    logger.info(
        f"Slate-aware projection as of {today}: {excluded} started player-games excluded, "
        f"{included} included"
    )
    return result


def project_slate_aware_safe(
    roster: Sequence[RosterEntry],
    remaining_dates: Sequence[DateLike],
    schedule: ScheduleInput,
    as_of: Union[datetime, date],
    lineup_slots: Sequence[LineupSlot] = STANDARD_LINEUP_SLOTS,
) -> ProjectionOutcome[SlateAwareProjection]:
    index = GameScheduleIndex.coerce(schedule)
    days, _ = _split_remaining_dates(remaining_dates, resolve_slate_date(as_of))
    error = check_projection_input(roster, days, index)
    if error is not None:
        return ProjectionOutcome(error=error)
    return ProjectionOutcome(
        projection=project_slate_aware(roster, remaining_dates, index, as_of, lineup_slots)
    )
