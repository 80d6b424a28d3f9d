"""Shrinkage blending for small-sample per-game rates.

A player back from injury with two logged games at an outlier rate should
not drive a week-long projection. Observed rates are pulled toward a
position-based league average with weight ``n / (n + K)``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from hoopsweek.config import settings
from hoopsweek.models import Player
from hoopsweek.player.player_stats import StatLine

logger = logging.getLogger(__name__)


@dataclass
class ShrinkageResult:
    value: float
    used_shrinkage: bool


# League-average per-game lines by primary position (fallback rates)
DEFAULT_AVERAGES = StatLine(
    fgm=5.1, fga=11.0, ftm=2.3, fta=3.0, threes=1.5, rebounds=5.0,
    assists=3.0, steals=0.9, blocks=0.6, turnovers=1.8, points=13.0,
)

POSITION_AVERAGES: Dict[str, StatLine] = {
    "PG": StatLine(fgm=5.3, fga=12.0, ftm=2.9, fta=3.5, threes=2.0, rebounds=3.5,
                   assists=6.0, steals=1.2, blocks=0.3, turnovers=2.5, points=14.5),
    "SG": StatLine(fgm=5.9, fga=13.0, ftm=2.4, fta=3.0, threes=2.2, rebounds=3.8,
                   assists=3.5, steals=1.0, blocks=0.4, turnovers=2.0, points=15.0),
    "SF": StatLine(fgm=5.1, fga=11.0, ftm=2.2, fta=2.8, threes=1.8, rebounds=5.5,
                   assists=2.5, steals=0.9, blocks=0.5, turnovers=1.8, points=13.5),
    "PF": StatLine(fgm=4.8, fga=10.0, ftm=1.9, fta=2.5, threes=1.2, rebounds=6.5,
                   assists=2.0, steals=0.7, blocks=0.8, turnovers=1.5, points=12.5),
    "C": StatLine(fgm=4.4, fga=8.0, ftm=2.0, fta=2.8, threes=0.5, rebounds=8.0,
                  assists=1.5, steals=0.5, blocks=1.2, turnovers=1.5, points=11.0),
}


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def apply_shrinkage_blend(
    observed: Optional[float],
    fallback: float,
    games_played: float,
    k: Optional[int] = None,
) -> ShrinkageResult:
    """Blend an observed per-game rate with a fallback rate by sample size.

    Args:
        observed: Observed per-game rate, None/NaN when absent
        fallback: Expected rate used when the sample is small or missing
        games_played: Observed sample size in games
        k: Trust threshold; defaults to ``settings.shrinkage_k``

    Returns:
        ShrinkageResult with the rate to use and whether it was shrunk

    Examples:
        >>> apply_shrinkage_blend(15.0, 10.0, 10).value
        15.0
        >>> round(apply_shrinkage_blend(15.0, 10.0, 5).value, 2)
        11.67
    """
    threshold = settings.shrinkage_k if k is None else k

    if _is_missing(observed):
        return ShrinkageResult(value=fallback, used_shrinkage=True)

    sample = max(float(games_played or 0), 0.0)
    if sample >= threshold:
        return ShrinkageResult(value=float(observed), used_shrinkage=False)

    weight = sample / (sample + threshold)
    blended = weight * observed + (1 - weight) * fallback
    return ShrinkageResult(value=blended, used_shrinkage=True)


def get_position_fallback(positions: Sequence[str]) -> StatLine:
    """League-average line for the player's primary (first listed) position."""
    primary = positions[0].upper() if positions else ""
    return POSITION_AVERAGES.get(primary, DEFAULT_AVERAGES)


def _has_production(player: Player) -> bool:
    return any(
        not _is_missing(value) and value > 0
        for value in (player.minutes, player.points, player.rebounds, player.assists, player.threes)
    )


def _missing_volume(player: Player, made: Optional[float], attempted: Optional[float]) -> bool:
    """Zero (or absent) makes and attempts next to real production means the
    shooting columns were dropped by the source ('--' parsed as 0)."""
    no_attempts = _is_missing(attempted) or attempted <= 0
    no_makes = _is_missing(made) or made <= 0
    return no_attempts and no_makes and _has_production(player)


def has_missing_shot_volume(player: Player) -> bool:
    """True when FG or FT makes/attempts look dropped for a player who plays."""
    return _missing_volume(player, player.fgm, player.fga) or _missing_volume(
        player, player.ftm, player.fta
    )


def _fill_from_pct(
    made: Optional[float], attempted: Optional[float], pct: Optional[float]
) -> Tuple[Optional[float], Optional[float]]:
    """Recover a missing make or attempt rate from the listed percentage."""
    if _is_missing(pct) or pct <= 0:
        return made, attempted
    # ESPN lists ".500"; some sources use 50.0
    ratio = pct / 100 if pct > 1 else pct
    if _is_missing(made) and not _is_missing(attempted):
        return ratio * attempted, attempted
    if _is_missing(attempted) and not _is_missing(made):
        return made, made / ratio
    return made, attempted


def get_blended_per_game_stats(
    player: Player, games_played: Optional[int] = None
) -> Tuple[StatLine, bool]:
    """Per-game rates for ``player`` with shrinkage applied to every category.

    When shooting volume is missing but the player clearly plays, makes and
    attempts are treated as absent so the position fallback volume is used
    instead of forcing an artificial 0.000 FG%/FT%. A missing make or attempt
    rate is first recovered from the listed FG%/FT% when there is one.

    Returns:
        Tuple of (per-game StatLine, whether any category was shrunk or filled)
    """
    if games_played is None:
        games_played = player.games_played or settings.default_games_played

    fallback = get_position_fallback(player.positions)
    observed: Dict[str, Optional[float]] = {
        "fgm": player.fgm,
        "fga": player.fga,
        "ftm": player.ftm,
        "fta": player.fta,
        "threes": player.threes,
        "rebounds": player.rebounds,
        "assists": player.assists,
        "steals": player.steals,
        "blocks": player.blocks,
        "turnovers": player.turnovers,
        "points": player.points,
    }
    observed["fgm"], observed["fga"] = _fill_from_pct(player.fgm, player.fga, player.fg_pct)
    observed["ftm"], observed["fta"] = _fill_from_pct(player.ftm, player.fta, player.ft_pct)

    if _missing_volume(player, observed["fgm"], observed["fga"]):
        logger.debug(f"{player.name}: no FG volume despite production, using fallback volume")
        observed["fgm"] = observed["fga"] = None
    if _missing_volume(player, observed["ftm"], observed["fta"]):
        logger.debug(f"{player.name}: no FT volume despite production, using fallback volume")
        observed["ftm"] = observed["fta"] = None

    used_shrinkage = False
    blended: Dict[str, float] = {}
    for field_name, value in observed.items():
        result = apply_shrinkage_blend(value, getattr(fallback, field_name), games_played)
        blended[field_name] = result.value
        used_shrinkage = used_shrinkage or result.used_shrinkage

    return StatLine(**blended), used_shrinkage
