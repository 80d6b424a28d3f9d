"""Pydantic models for projection engine inputs."""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GameLiveStatus(str, Enum):
    """Live state of a single NBA game."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    FINAL = "FINAL"


SlotType = Literal["starter", "bench", "ir"]


class Player(BaseModel):
    """A rostered player and their per-game averages."""

    model_config = ConfigDict(frozen=True)

    player_id: str = Field(..., min_length=1)
    name: str
    nba_team: Optional[str] = None
    positions: List[str] = Field(default_factory=list)
    status: Optional[str] = None  # e.g. "DTD", "O", "INJ (O)"
    games_played: Optional[int] = Field(default=None, ge=0)

    # Per-game averages; None means the source row had no value
    minutes: Optional[float] = None
    fgm: Optional[float] = None
    fga: Optional[float] = None
    fg_pct: Optional[float] = None
    ftm: Optional[float] = None
    fta: Optional[float] = None
    ft_pct: Optional[float] = None
    threes: Optional[float] = None
    rebounds: Optional[float] = None
    assists: Optional[float] = None
    steals: Optional[float] = None
    blocks: Optional[float] = None
    turnovers: Optional[float] = None
    points: Optional[float] = None

    @field_validator("positions", mode="before")
    @classmethod
    def _split_positions(cls, value):
        # ESPN rows carry "PG/SG" or "PG, SG"
        if value is None:
            return []
        if isinstance(value, str):
            value = value.replace(",", "/").split("/")
        return [str(pos).strip().upper() for pos in value if str(pos).strip()]


class RosterEntry(BaseModel):
    """A player placed in a starting slot, on the bench, or on injured reserve."""

    model_config = ConfigDict(frozen=True)

    player: Player
    slot_type: SlotType = "starter"
    slot: Optional[str] = None  # e.g. "PG", "G", "UTIL", "Bench", "IR"

    @property
    def is_injured_reserve(self) -> bool:
        return self.slot_type == "ir"


class Game(BaseModel):
    """One scheduled NBA game."""

    model_config = ConfigDict(frozen=True)

    game_id: str = ""
    home_team: str
    away_team: str
    status: str = ""  # raw feed text, e.g. "Scheduled", "3rd Qtr", "Final/OT"
    live_status: Optional[GameLiveStatus] = None  # overrides `status` when set
    start_time: Optional[str] = None


__all__ = [
    "Game",
    "GameLiveStatus",
    "Player",
    "RosterEntry",
    "SlotType",
]
