"""Input validation and structured failures for weekly projections."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from hoopsweek.models import RosterEntry
from hoopsweek.schedule.schedule_index import DateLike, GameScheduleIndex, coerce_date
from hoopsweek.schedule.team_codes import normalize_team_code
from hoopsweek.utils.player_utils import active_entries

logger = logging.getLogger(__name__)

UNMAPPED_MISSING_TEAM = "Missing team code"
UNMAPPED_UNKNOWN_TEAM = "Team code not found in schedule"


class ProjectionErrorCode(str, Enum):
    NO_SCHEDULE_DATA = "NO_SCHEDULE_DATA"
    SCHEDULE_MAPPING_FAILED = "SCHEDULE_MAPPING_FAILED"
    OPP_ROSTER_MISSING = "OPP_ROSTER_MISSING"


ERROR_MESSAGES = {
    ProjectionErrorCode.NO_SCHEDULE_DATA: "Import or fetch the NBA schedule first",
    ProjectionErrorCode.SCHEDULE_MAPPING_FAILED: (
        "No roster players could be matched to the schedule. Check the team codes on the roster"
    ),
    ProjectionErrorCode.OPP_ROSTER_MISSING: "Import the opponent roster to project the matchup",
}


@dataclass
class UnmappedPlayer:
    player_id: str
    name: str
    nba_team: Optional[str]
    reason: str


@dataclass
class ValidationReport:
    """What the engine could and could not resolve about a projection input."""

    players_received: int = 0
    players_with_valid_team_code: int = 0
    unmapped_players: List[UnmappedPlayer] = field(default_factory=list)
    games_found_total: int = 0
    players_with_at_least_one_game: int = 0
    dates_requested: int = 0
    dates_with_games: int = 0

    @property
    def all_unmapped(self) -> bool:
        return self.players_received > 0 and self.players_with_valid_team_code == 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ProjectionError:
    code: ProjectionErrorCode
    message: str
    validation: Optional[ValidationReport] = None

    @classmethod
    def from_code(
        cls, code: ProjectionErrorCode, validation: Optional[ValidationReport] = None
    ) -> "ProjectionError":
        return cls(code=code, message=ERROR_MESSAGES[code], validation=validation)

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "validation": self.validation.to_dict() if self.validation else None,
        }


T = TypeVar("T")


@dataclass
class ProjectionOutcome(Generic[T]):
    """Either a projection or a structured error, never both."""

    projection: Optional[T] = None
    error: Optional[ProjectionError] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.projection is not None

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {"success": self.success}
        if self.projection is not None:
            data["projection"] = self.projection.to_dict()
        if self.error is not None:
            data["error"] = self.error.to_dict()
        return data


def find_unmapped_reason(nba_team: Optional[str], schedule: GameScheduleIndex) -> Optional[str]:
    """Why a player's team cannot be matched to the schedule, or None if it can.

    A code that normalizes but never appears anywhere in the supplied schedule
    is treated as unmapped, distinct from a team that simply has no game on the
    requested dates.
    """
    code = normalize_team_code(nba_team)
    if not code:
        return UNMAPPED_MISSING_TEAM
    if code not in schedule.known_teams():
        return UNMAPPED_UNKNOWN_TEAM
    return None


def validate_projection_input(
    roster: Sequence[RosterEntry],
    dates: Sequence[DateLike],
    schedule: GameScheduleIndex,
) -> ValidationReport:
    """Check how much of a non-IR roster resolves against the schedule.

    Args:
        roster: Roster entries; IR entries are ignored
        dates: Dates being projected
        schedule: Schedule index

    Returns:
        ValidationReport with counts and unmapped players
    """
    days: List[date] = sorted({coerce_date(d) for d in dates})
    players = active_entries(roster)
    report = ValidationReport(
        players_received=len(players),
        dates_requested=len(days),
        dates_with_games=sum(1 for day in days if schedule.games_on(day)),
    )

    for entry in players:
        player = entry.player
        reason = find_unmapped_reason(player.nba_team, schedule)
        if reason:
            report.unmapped_players.append(
                UnmappedPlayer(player.player_id, player.name, player.nba_team, reason)
            )
            continue
        report.players_with_valid_team_code += 1
        games = schedule.team_games_in_range(player.nba_team, days)
        report.games_found_total += games
        if games > 0:
            report.players_with_at_least_one_game += 1

    if report.unmapped_players:
        logger.warning(
            f"{len(report.unmapped_players)}/{report.players_received} players unmapped: "
            f"{[p.name for p in report.unmapped_players]}"
        )
    return report
