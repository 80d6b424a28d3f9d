"""Projection of a head-to-head categories matchup for both teams."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Union

from hoopsweek.matchup.roster_optimizer import STANDARD_LINEUP_SLOTS, LineupSlot
from hoopsweek.matchup.slate_projection import SlateAwareProjection, project_slate_aware_safe
from hoopsweek.matchup.validation import (
    ProjectionError,
    ProjectionErrorCode,
    ProjectionOutcome,
)
from hoopsweek.matchup.week_projection import ScheduleInput
from hoopsweek.models import RosterEntry
from hoopsweek.player.player_stats import StatLine, combine_current_and_remaining
from hoopsweek.schedule.schedule_index import DateLike, GameScheduleIndex
from hoopsweek.utils.stat_mappings import CATEGORY_ORDER, get_field_for_stat, is_lower_better

logger = logging.getLogger(__name__)

_TIE_TOLERANCE = 0.001

# Percentage categories fall back to shot volume when the ratio ties
_VOLUME_TIEBREAK = {"fg_pct": "fga", "ft_pct": "fta"}


@dataclass
class CategoryResult:
    category: str
    mine: float
    theirs: float
    winner: str  # "mine", "theirs" or "tie"


@dataclass
class CategoryComparison:
    categories: List[CategoryResult] = field(default_factory=list)
    wins: int = 0
    losses: int = 0
    ties: int = 0

    def to_dict(self) -> dict:
        return {
            "categories": [
                {"category": c.category, "mine": c.mine, "theirs": c.theirs, "winner": c.winner}
                for c in self.categories
            ],
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
        }


def _compare_values(field_name: str, mine: StatLine, theirs: StatLine) -> str:
    a_value = getattr(mine, field_name)
    b_value = getattr(theirs, field_name)

    if abs(a_value - b_value) < _TIE_TOLERANCE:
        volume_field = _VOLUME_TIEBREAK.get(field_name)
        if volume_field is None:
            return "tie"
        a_volume = getattr(mine, volume_field)
        b_volume = getattr(theirs, volume_field)
        if abs(a_volume - b_volume) <= _TIE_TOLERANCE:
            return "tie"
        # Higher volume wins the tiebreaker
        return "mine" if a_volume > b_volume else "theirs"

    if is_lower_better(field_name):
        return "mine" if a_value < b_value else "theirs"
    return "mine" if a_value > b_value else "theirs"


def compare_categories(
    mine: StatLine,
    theirs: StatLine,
    categories: Sequence[str] = CATEGORY_ORDER,
) -> CategoryComparison:
    """Compare two stat lines category by category.

    Turnovers are lower-is-better. For FG% and FT% ties, the larger attempt
    volume wins; other ties count as ties.

    Args:
        mine: User team totals
        theirs: Opponent totals
        categories: Category names (e.g. "FG%", "3PTM", "TO")

    Returns:
        CategoryComparison with per-category winners and the W-L-T record
    """
    comparison = CategoryComparison()
    for category in categories:
        field_name = get_field_for_stat(category)
        if not field_name:
            logger.warning(f"Unknown scoring category {category!r}, skipped")
            continue
        winner = _compare_values(field_name, mine, theirs)
        comparison.categories.append(
            CategoryResult(category, getattr(mine, field_name), getattr(theirs, field_name), winner)
        )
        if winner == "mine":
            comparison.wins += 1
        elif winner == "theirs":
            comparison.losses += 1
        else:
            comparison.ties += 1
    return comparison


@dataclass
class TeamMatchupProjection:
    """One side of the matchup: remaining projection plus combined final totals."""

    outcome: ProjectionOutcome[SlateAwareProjection]
    current: StatLine = field(default_factory=StatLine)

    @property
    def remaining(self) -> StatLine:
        if self.outcome.projection is None:
            return StatLine()
        return self.outcome.projection.totals

    @property
    def final(self) -> StatLine:
        return combine_current_and_remaining(self.current, self.remaining)

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.to_dict(),
            "current": self.current.to_dict(),
            "remaining": self.remaining.to_dict(),
            "final": self.final.to_dict(),
        }


@dataclass
class MatchupProjection:
    mine: TeamMatchupProjection
    theirs: TeamMatchupProjection
    comparison: Optional[CategoryComparison] = None

    def to_dict(self) -> dict:
        return {
            "mine": self.mine.to_dict(),
            "theirs": self.theirs.to_dict(),
            "comparison": self.comparison.to_dict() if self.comparison else None,
        }


def _project_side(
    roster: Optional[Sequence[RosterEntry]],
    remaining_dates: Sequence[DateLike],
    index: GameScheduleIndex,
    as_of: Union[datetime, date],
    lineup_slots: Sequence[LineupSlot],
    missing_roster_error: Optional[ProjectionErrorCode] = None,
) -> ProjectionOutcome[SlateAwareProjection]:
    if not roster and missing_roster_error is not None:
        logger.warning("Opponent roster missing, skipping opponent projection")
        return ProjectionOutcome(error=ProjectionError.from_code(missing_roster_error))
    return project_slate_aware_safe(roster or [], remaining_dates, index, as_of, lineup_slots)


def project_matchup(
    my_roster: Sequence[RosterEntry],
    opponent_roster: Optional[Sequence[RosterEntry]],
    remaining_dates: Sequence[DateLike],
    schedule: ScheduleInput,
    as_of: Union[datetime, date],
    my_current: Optional[StatLine] = None,
    opponent_current: Optional[StatLine] = None,
    lineup_slots: Sequence[LineupSlot] = STANDARD_LINEUP_SLOTS,
) -> MatchupProjection:
    """Project both sides of a matchup with the same schedule and ``as_of``.

    Final totals are current (already played) plus remaining, with FG%/FT%
    recomputed from combined makes and attempts. The category comparison is
    only produced when both sides projected successfully.
    """
    index = GameScheduleIndex.coerce(schedule)

    mine = TeamMatchupProjection(
        outcome=_project_side(my_roster, remaining_dates, index, as_of, lineup_slots),
        current=my_current or StatLine(),
    )
    theirs = TeamMatchupProjection(
        outcome=_project_side(
            opponent_roster,
            remaining_dates,
            index,
            as_of,
            lineup_slots,
            missing_roster_error=ProjectionErrorCode.OPP_ROSTER_MISSING,
        ),
        current=opponent_current or StatLine(),
    )

    result = MatchupProjection(mine=mine, theirs=theirs)
    if mine.outcome.success and theirs.outcome.success:
        result.comparison = compare_categories(mine.final, theirs.final)
        logger.info(
            f"Projected matchup: {result.comparison.wins}-{result.comparison.losses}-"
            f"{result.comparison.ties}"
        )
    return result


def category_winners(comparison: CategoryComparison) -> Dict[str, str]:
    return {c.category: c.winner for c in comparison.categories}
