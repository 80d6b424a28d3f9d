"""Per-day lineup slot filling for projecting usable starts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

logger = logging.getLogger(__name__)

ALL_POSITIONS: FrozenSet[str] = frozenset({"PG", "SG", "SF", "PF", "C"})


@dataclass(frozen=True)
class LineupSlot:
    """One lineup slot category and how many seats of it a day offers."""

    slot: str
    eligible_positions: FrozenSet[str]
    count: int = 1

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"Slot {self.slot} has negative count {self.count}")
        # Accept any iterable of positions, store upper-cased frozenset
        object.__setattr__(
            self, "eligible_positions", frozenset(p.upper() for p in self.eligible_positions)
        )

    def accepts(self, positions: Iterable[str]) -> bool:
        return any(pos.upper() in self.eligible_positions for pos in positions)


# Ordered by priority: specific positions, then G/F flex, then UTIL
STANDARD_LINEUP_SLOTS: Tuple[LineupSlot, ...] = (
    LineupSlot("PG", frozenset({"PG"})),
    LineupSlot("SG", frozenset({"SG"})),
    LineupSlot("SF", frozenset({"SF"})),
    LineupSlot("PF", frozenset({"PF"})),
    LineupSlot("C", frozenset({"C"})),
    LineupSlot("G", frozenset({"PG", "SG"})),
    LineupSlot("F", frozenset({"SF", "PF"})),
    LineupSlot("UTIL", ALL_POSITIONS),
)


def total_slot_count(lineup_slots: Sequence[LineupSlot]) -> int:
    return sum(slot.count for slot in lineup_slots)


@dataclass
class SlotCandidate:
    """A player with a game on the day being filled."""

    player_id: str
    positions: Sequence[str]
    availability: float = 1.0


@dataclass
class DayAllocation:
    """Result of filling one day's lineup.

    ``started`` holds every candidate: their availability multiplier if they
    were placed, else 0.
    """

    started: Dict[str, float] = field(default_factory=dict)
    assignments: Dict[str, str] = field(default_factory=dict)
    benched: List[str] = field(default_factory=list)
    slot_count: int = 0

    @property
    def filled_slots(self) -> int:
        return len(self.assignments)

    @property
    def bench_overflow(self) -> int:
        return len(self.benched)

    @property
    def unfilled_slots(self) -> int:
        return max(self.slot_count - self.filled_slots, 0)

    @property
    def started_games(self) -> float:
        return sum(self.started.values())

    def to_dict(self) -> dict:
        return {
            "started": dict(self.started),
            "assignments": dict(self.assignments),
            "benched": list(self.benched),
            "filled_slots": self.filled_slots,
            "bench_overflow": self.bench_overflow,
            "unfilled_slots": self.unfilled_slots,
        }


def _eligible_slot_count(positions: Sequence[str], lineup_slots: Sequence[LineupSlot]) -> int:
    """Number of distinct slot categories a player can fill (lower = less flexible)."""
    return sum(1 for slot in lineup_slots if slot.count > 0 and slot.accepts(positions))


def fill_lineup_for_day(
    candidates: Sequence[SlotCandidate],
    lineup_slots: Sequence[LineupSlot] = STANDARD_LINEUP_SLOTS,
) -> DayAllocation:
    """Fill one day's lineup slots with a most-constrained-first greedy pass.

    Algorithm:
    1. Drop candidates with availability 0 (credited 0, not bench overflow)
    2. Sort by number of eligible slot categories (ascending); ties keep input order
    3. Each player takes the first open seat, in slot priority order, they qualify for
    4. Players left without a seat are benched (bench overflow)

    Args:
        candidates: Players whose team plays this day (IR already excluded)
        lineup_slots: Ordered slot inventory; order is the fill priority

    Returns:
        DayAllocation with credited started-fraction per candidate
    """
    seats: List[str] = []
    seat_slots: List[LineupSlot] = []
    for slot in lineup_slots:
        for _ in range(slot.count):
            seats.append(slot.slot)
            seat_slots.append(slot)
    open_seats = [True] * len(seats)

    allocation = DayAllocation(slot_count=len(seats))

    players_to_assign = []
    for order, candidate in enumerate(candidates):
        allocation.started[candidate.player_id] = 0.0
        if candidate.availability <= 0:
            logger.debug(f"{candidate.player_id} unavailable (multiplier 0), skipped")
            continue
        if not candidate.positions:
            logger.warning(f"{candidate.player_id} has a game but no eligible positions")
        players_to_assign.append(
            (_eligible_slot_count(candidate.positions, lineup_slots), order, candidate)
        )

    # sorted() is stable; `order` makes the tie-break explicit
    players_to_assign.sort(key=lambda item: (item[0], item[1]))

    for flexibility, _, candidate in players_to_assign:
        for seat_idx, slot in enumerate(seat_slots):
            if open_seats[seat_idx] and slot.accepts(candidate.positions):
                open_seats[seat_idx] = False
                allocation.assignments[candidate.player_id] = seats[seat_idx]
                allocation.started[candidate.player_id] = candidate.availability
                logger.debug(
                    f"Assigned {candidate.player_id} to {seats[seat_idx]} "
                    f"(eligible: {list(candidate.positions)}, flexibility {flexibility})"
                )
                break
        else:
            allocation.benched.append(candidate.player_id)
            logger.debug(
                f"No slot available for {candidate.player_id} "
                f"(eligible: {list(candidate.positions)}), benched"
            )

    if allocation.unfilled_slots:
        remaining = [seats[i] for i, is_open in enumerate(open_seats) if is_open]
        logger.debug(f"Unfilled slots: {remaining}")

    return allocation
