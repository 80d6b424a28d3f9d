"""Availability model: injury/status label to expected-contribution multiplier.

Labels come from ESPN roster pastes ("DTD", "O", "INJ (O)", "SUSP", ...).
Matching is case-insensitive and token based so that parenthetical suffixes
and compound labels still resolve.

Unknown labels fail open (1.0): a label we cannot read should not silently
erase a player from the projection.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Dict, FrozenSet, Optional

logger = logging.getLogger(__name__)


class AvailabilityStatus(Enum):
    """Canonical availability categories."""

    HEALTHY = "HEALTHY"
    OUT = "OUT"
    DAY_TO_DAY = "DAY_TO_DAY"
    QUESTIONABLE = "QUESTIONABLE"
    PROBABLE = "PROBABLE"
    UNKNOWN = "UNKNOWN"


STATUS_MULTIPLIERS: Dict[AvailabilityStatus, float] = {
    AvailabilityStatus.HEALTHY: 1.0,
    AvailabilityStatus.OUT: 0.0,
    AvailabilityStatus.DAY_TO_DAY: 0.6,
    AvailabilityStatus.QUESTIONABLE: 0.7,
    AvailabilityStatus.PROBABLE: 0.85,
    AvailabilityStatus.UNKNOWN: 1.0,
}

HEALTHY_TOKENS: FrozenSet[str] = frozenset({"HEALTHY", "ACTIVE", "A"})
OUT_TOKENS: FrozenSet[str] = frozenset({"O", "OUT", "IR", "SUSP", "SUSPENDED", "SUSPENSION"})
DTD_TOKENS: FrozenSet[str] = frozenset({"DTD"})
QUESTIONABLE_TOKENS: FrozenSet[str] = frozenset({"Q", "QUESTIONABLE"})
PROBABLE_TOKENS: FrozenSet[str] = frozenset({"GTD", "P", "PROBABLE"})

OUT_PHRASES = ("INJURED RESERVE",)
DTD_PHRASES = ("DAY TO DAY",)
PROBABLE_PHRASES = ("GAME TIME DECISION",)

_TOKEN = re.compile(r"[A-Z]+")


def _normalize_label(label: str) -> str:
    return re.sub(r"[-_/]+", " ", label.upper()).strip()


def classify_status(label: Optional[str]) -> AvailabilityStatus:
    """Map a raw status label to a canonical availability category.

    Args:
        label: Raw label (e.g., "DTD", "INJ (O)", "Questionable"), may be None

    Returns:
        AvailabilityStatus; UNKNOWN for non-empty labels nothing matched
    """
    if label is None:
        return AvailabilityStatus.HEALTHY

    text = _normalize_label(label)
    if not text:
        return AvailabilityStatus.HEALTHY

    tokens = set(_TOKEN.findall(text))

    # Out wins over everything else ("DTD (O)" is out)
    if tokens & OUT_TOKENS or any(phrase in text for phrase in OUT_PHRASES):
        return AvailabilityStatus.OUT
    if tokens & DTD_TOKENS or any(phrase in text for phrase in DTD_PHRASES):
        return AvailabilityStatus.DAY_TO_DAY
    if tokens & QUESTIONABLE_TOKENS:
        return AvailabilityStatus.QUESTIONABLE
    if tokens & PROBABLE_TOKENS or any(phrase in text for phrase in PROBABLE_PHRASES):
        return AvailabilityStatus.PROBABLE
    if tokens and tokens <= HEALTHY_TOKENS:
        return AvailabilityStatus.HEALTHY

    logger.debug(f"Unrecognized status label {label!r}, treating as available")
    return AvailabilityStatus.UNKNOWN


def get_availability_multiplier(label: Optional[str]) -> float:
    """Return the fraction of a game a player with ``label`` is expected to contribute.

    Examples:
        >>> get_availability_multiplier(None)
        1.0
        >>> get_availability_multiplier("INJ (O)")
        0.0
        >>> get_availability_multiplier("dtd")
        0.6
    """
    return STATUS_MULTIPLIERS[classify_status(label)]


def get_status_label(multiplier: float) -> str:
    """Display label for a multiplier."""
    if multiplier <= 0:
        return "OUT"
    if multiplier <= 0.6:
        return "DTD (60%)"
    if multiplier <= 0.7:
        return "Q (70%)"
    if multiplier <= 0.85:
        return "GTD (85%)"
    return "Active"
