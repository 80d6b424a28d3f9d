"""Fantasy basketball 9-category stat lines and ratio-of-sums percentage math."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict, Iterable, Tuple

# Makes/attempts feeding FG% and FT%
SHOOTING_FIELDS: Tuple[str, ...] = ("fgm", "fga", "ftm", "fta")

# Counting categories (summed, never averaged)
COUNTING_FIELDS: Tuple[str, ...] = (
    "threes",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "turnovers",
    "points",
)


def _ratio(made: float, attempted: float) -> float:
    return made / attempted if attempted > 0 else 0.0


@dataclass(frozen=True)
class StatLine:
    """Per-game rates or accumulated totals for the nine fantasy categories.

    Percentages are never stored: ``fg_pct``/``ft_pct`` are always derived from
    the summed makes and attempts so that adding two lines together yields the
    correct ratio-of-sums.
    """

    fgm: float = 0.0
    fga: float = 0.0
    ftm: float = 0.0
    fta: float = 0.0
    threes: float = 0.0
    rebounds: float = 0.0
    assists: float = 0.0
    steals: float = 0.0
    blocks: float = 0.0
    turnovers: float = 0.0
    points: float = 0.0

    @property
    def fg_pct(self) -> float:
        return _ratio(self.fgm, self.fga)

    @property
    def ft_pct(self) -> float:
        return _ratio(self.ftm, self.fta)

    def __add__(self, other: "StatLine") -> "StatLine":
        if not isinstance(other, StatLine):
            return NotImplemented
        return StatLine(
            **{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)}
        )

    def scaled(self, factor: float) -> "StatLine":
        """Multiply every makes/attempts and counting value by ``factor``."""
        return StatLine(**{f.name: getattr(self, f.name) * factor for f in fields(self)})

    def to_dict(self) -> Dict[str, float]:
        data = asdict(self)
        data["fg_pct"] = self.fg_pct
        data["ft_pct"] = self.ft_pct
        return data


def sum_stat_lines(lines: Iterable[StatLine]) -> StatLine:
    """Add stat lines together (ratio-of-sums for percentages)."""
    total = StatLine()
    for line in lines:
        total = total + line
    return total


def combine_current_and_remaining(current: StatLine, remaining: StatLine) -> StatLine:
    """Combine accumulated actual totals with the projection for games not yet played.

    Counting stats add; FG%/FT% are recomputed from the combined shooting volume.
    """
    return current + remaining
