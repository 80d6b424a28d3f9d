"""Live game status parsing and per-day slate status."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Optional, Sequence, Union

import pytz

from hoopsweek.config import settings
from hoopsweek.models import Game, GameLiveStatus
from hoopsweek.schedule.schedule_index import DateLike, coerce_date

_IN_PROGRESS_PATTERN = re.compile(
    r"in progress|live|halftime|half|qtr|quarter|end of|\b(?:1st|2nd|3rd|4th)\b|\b\d?ot\d?\b|overtime"
)


def parse_game_status(status_text: Optional[str]) -> GameLiveStatus:
    """Parse a schedule feed status string.

    Args:
        status_text: Feed text such as "Scheduled", "7:00 PM ET", "2nd Qtr", "Final/OT"

    Returns:
        GameLiveStatus; anything unrecognized is treated as not started
    """
    if not status_text:
        return GameLiveStatus.NOT_STARTED

    text = status_text.strip().lower()

    if "final" in text:
        return GameLiveStatus.FINAL

    if _IN_PROGRESS_PATTERN.search(text):
        return GameLiveStatus.IN_PROGRESS

    return GameLiveStatus.NOT_STARTED


def game_live_status(game: Game) -> GameLiveStatus:
    """Explicit ``live_status`` wins over the raw status text."""
    if game.live_status is not None:
        return game.live_status
    return parse_game_status(game.status)


@dataclass
class SlateStatus:
    """Counts of today's games by live status."""

    slate_date: date
    not_started: int
    in_progress: int
    final: int
    total_games: int
    as_of: Optional[str] = None

    @property
    def today_has_started_games(self) -> bool:
        return self.in_progress > 0 or self.final > 0

    @property
    def all_games_complete(self) -> bool:
        return self.total_games > 0 and self.not_started == 0 and self.in_progress == 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["slate_date"] = self.slate_date.isoformat()
        data["today_has_started_games"] = self.today_has_started_games
        data["all_games_complete"] = self.all_games_complete
        return data


def build_slate_status(
    games: Sequence[Game], slate_date: date, as_of: Union[datetime, date, None] = None
) -> SlateStatus:
    """Build slate status for the games of one date."""
    not_started = in_progress = final = 0
    for game in games:
        status = game_live_status(game)
        if status is GameLiveStatus.FINAL:
            final += 1
        elif status is GameLiveStatus.IN_PROGRESS:
            in_progress += 1
        else:
            not_started += 1

    return SlateStatus(
        slate_date=slate_date,
        not_started=not_started,
        in_progress=in_progress,
        final=final,
        total_games=len(games),
        as_of=as_of.isoformat() if as_of is not None else None,
    )


def resolve_slate_date(as_of: Union[datetime, DateLike], timezone: Optional[str] = None) -> date:
    """Calendar date of the NBA slate that ``as_of`` falls on.

    Timezone-aware timestamps are converted to the schedule timezone first, so
    9pm Eastern expressed in UTC (02:00 the next day) still maps to the
    Eastern game day. Naive datetimes and plain dates are taken as given.

    Args:
        as_of: Point in time the projection is made
        timezone: Timezone name; defaults to ``settings.schedule_timezone``

    Returns:
        Slate date
    """
    if isinstance(as_of, datetime):
        if as_of.tzinfo is not None and as_of.tzinfo.utcoffset(as_of) is not None:
            eastern = pytz.timezone(timezone or settings.schedule_timezone)
            return as_of.astimezone(eastern).date()
        return as_of.date()
    return coerce_date(as_of)
