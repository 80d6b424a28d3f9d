"""Rest-of-week integer start counts via maximum bipartite matching.

Unlike the week projector, this ignores injury weighting entirely: it answers
"how many whole starts can this roster physically use on each remaining day?"
Both sides of a matchup are computed the same way so the numbers compare.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from hoopsweek.matchup.roster_optimizer import STANDARD_LINEUP_SLOTS, LineupSlot, total_slot_count
from hoopsweek.models import Game, RosterEntry
from hoopsweek.schedule.schedule_index import DateLike, GameScheduleIndex, coerce_date
from hoopsweek.schedule.team_codes import normalize_team_code

logger = logging.getLogger(__name__)

EXCLUDED_IR = "IR slot"
EXCLUDED_MISSING_TEAM = "Missing team"
EXCLUDED_NO_POSITIONS = "No positions"


@dataclass
class SlotAssignment:
    player_id: str
    player_name: str
    assigned_slot: str
    positions: List[str]


@dataclass
class ExcludedPlayer:
    player_id: str
    player_name: str
    reason: str
    nba_team: Optional[str] = None
    positions: List[str] = field(default_factory=list)


@dataclass
class DayStarts:
    """Integer start breakdown for one remaining day."""

    day: date
    slots_count: int
    schedule_games_count: int
    players_with_game: int
    filtered_out: int
    starts_used: int
    overflow: int
    unused_slots: int
    missing_team_count: int
    slot_assignments: List[SlotAssignment] = field(default_factory=list)
    excluded_players: List[ExcludedPlayer] = field(default_factory=list)


@dataclass
class RestOfWeekStarts:
    projected_starts: int
    max_possible_starts: int
    unused_starts: int
    overflow_games: int
    roster_games_remaining: int
    days_remaining: int
    per_day: List[DayStarts] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        for day_data, day in zip(data["per_day"], self.per_day):
            day_data["day"] = day.day.isoformat()
        return data


def find_maximum_matching(
    players: Sequence[Tuple[str, str, Sequence[str]]],
    lineup_slots: Sequence[LineupSlot],
) -> Tuple[int, List[SlotAssignment]]:
    """Maximum matching of players to seats using DFS augmenting paths.

    Args:
        players: (player_id, player_name, positions) tuples
        lineup_slots: Slot inventory; each category expands to ``count`` seats

    Returns:
        Tuple of (number of matched players, assignments in seat order)
    """
    # Stable processing order keeps the chosen assignment deterministic
    ordered = sorted(players, key=lambda p: (p[0], p[1]))
    seats: List[LineupSlot] = [slot for slot in lineup_slots for _ in range(slot.count)]

    adjacency: List[List[int]] = [
        [idx for idx, seat in enumerate(seats) if seat.accepts(positions)]
        for _, _, positions in ordered
    ]
    seat_match: List[int] = [-1] * len(seats)

    def try_augment(player_idx: int, visited: List[bool]) -> bool:
        for seat_idx in adjacency[player_idx]:
            if visited[seat_idx]:
                continue
            visited[seat_idx] = True
            if seat_match[seat_idx] == -1 or try_augment(seat_match[seat_idx], visited):
                seat_match[seat_idx] = player_idx
                return True
        return False

    match_count = 0
    for player_idx in range(len(ordered)):
        if try_augment(player_idx, [False] * len(seats)):
            match_count += 1

    assignments = []
    for seat_idx, player_idx in enumerate(seat_match):
        if player_idx == -1:
            continue
        player_id, player_name, positions = ordered[player_idx]
        assignments.append(
            SlotAssignment(player_id, player_name, seats[seat_idx].slot, list(positions))
        )
    return match_count, assignments


def _day_starts(
    roster: Sequence[RosterEntry],
    day: date,
    games: Sequence[Game],
    schedule: GameScheduleIndex,
    lineup_slots: Sequence[LineupSlot],
) -> DayStarts:
    excluded: List[ExcludedPlayer] = []
    candidates: List[Tuple[str, str, Sequence[str]]] = []
    missing_team = 0

    for entry in roster:
        player = entry.player
        if entry.is_injured_reserve:
            excluded.append(
                ExcludedPlayer(player.player_id, player.name, EXCLUDED_IR, player.nba_team, list(player.positions))
            )
            continue
        if not player.positions:
            excluded.append(
                ExcludedPlayer(player.player_id, player.name, EXCLUDED_NO_POSITIONS, player.nba_team)
            )
            continue
        if not normalize_team_code(player.nba_team):
            missing_team += 1
            excluded.append(
                ExcludedPlayer(
                    player.player_id, player.name, EXCLUDED_MISSING_TEAM, player.nba_team, list(player.positions)
                )
            )
            continue
        if schedule.team_plays_on(player.nba_team, day):
            candidates.append((player.player_id, player.name, player.positions))

    match_count, assignments = find_maximum_matching(candidates, lineup_slots)
    slots_count = total_slot_count(lineup_slots)

    return DayStarts(
        day=day,
        slots_count=slots_count,
        schedule_games_count=len(games),
        players_with_game=len(candidates),
        filtered_out=len(excluded),
        starts_used=match_count,
        overflow=max(len(candidates) - match_count, 0),
        unused_slots=max(slots_count - match_count, 0),
        missing_team_count=missing_team,
        slot_assignments=assignments,
        excluded_players=excluded,
    )


def compute_rest_of_week_starts(
    roster: Sequence[RosterEntry],
    remaining_dates: Sequence[DateLike],
    schedule: Union[GameScheduleIndex, Mapping[DateLike, Sequence[Game]]],
    lineup_slots: Sequence[LineupSlot] = STANDARD_LINEUP_SLOTS,
) -> RestOfWeekStarts:
    """Integer starts the roster can use on each remaining day of the week."""
    index = GameScheduleIndex.coerce(schedule)
    days = sorted({coerce_date(d) for d in remaining_dates})

    per_day = [_day_starts(roster, day, index.games_on(day), index, lineup_slots) for day in days]

    projected = sum(d.starts_used for d in per_day)
    max_possible = total_slot_count(lineup_slots) * len(days)
    result = RestOfWeekStarts(
        projected_starts=projected,
        max_possible_starts=max_possible,
        unused_starts=max_possible - projected,
        overflow_games=sum(d.overflow for d in per_day),
        roster_games_remaining=sum(d.players_with_game for d in per_day),
        days_remaining=len(days),
        per_day=per_day,
    )
    logger.info(
        f"Rest-of-week starts: {projected}/{max_possible} over {len(days)} days, "
        f"{result.overflow_games} overflow games"
    )
    return result
