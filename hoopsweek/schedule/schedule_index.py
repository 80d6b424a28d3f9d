"""Date-keyed index of NBA games built from caller-supplied schedule data."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Union

from hoopsweek.models import Game
from hoopsweek.schedule.team_codes import normalize_team_code

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


def coerce_date(value: DateLike) -> date:
    """Convert an ISO date string, date or datetime to a date.

    Raises:
        ValueError: If a string is not in YYYY-MM-DD form
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


class GameScheduleIndex:
    """Maps calendar dates to games and answers "does this team play today?".

    Team codes in the supplied games are normalized on build so that lookups
    with roster-side variants ("UTAH", "GS") match feed-side codes ("UTA", "GSW").
    """

    def __init__(self, games_by_date: Optional[Mapping[DateLike, Sequence[Game]]] = None) -> None:
        self._games: Dict[date, List[Game]] = {}
        for raw_date, games in (games_by_date or {}).items():
            day = coerce_date(raw_date)
            bucket = self._games.setdefault(day, [])
            for game in games:
                bucket.append(self._normalize_game(game))
        logger.debug(
            f"Schedule index built: {len(self._games)} dates, "
            f"{sum(len(g) for g in self._games.values())} games"
        )

    @staticmethod
    def _normalize_game(game: Game) -> Game:
        home = normalize_team_code(game.home_team) or game.home_team.upper().strip()
        away = normalize_team_code(game.away_team) or game.away_team.upper().strip()
        if home == game.home_team and away == game.away_team:
            return game
        return game.model_copy(update={"home_team": home, "away_team": away})

    @classmethod
    def coerce(
        cls, schedule: Union["GameScheduleIndex", Mapping[DateLike, Sequence[Game]], None]
    ) -> "GameScheduleIndex":
        """Return ``schedule`` as an index, building one from a mapping if needed."""
        if isinstance(schedule, GameScheduleIndex):
            return schedule
        return cls(schedule)

    def __len__(self) -> int:
        return sum(len(games) for games in self._games.values())

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def dates(self) -> List[date]:
        """All dates that have at least one game, ascending."""
        return sorted(day for day, games in self._games.items() if games)

    def games_on(self, day: DateLike) -> List[Game]:
        return list(self._games.get(coerce_date(day), []))

    def has_games_in(self, days: Iterable[DateLike]) -> bool:
        return any(self._games.get(coerce_date(day)) for day in days)

    def game_for_team(self, team: Optional[str], day: DateLike) -> Optional[Game]:
        """Return the game ``team`` plays on ``day``, or None."""
        code = normalize_team_code(team)
        if not code:
            return None
        for game in self._games.get(coerce_date(day), []):
            if game.home_team == code or game.away_team == code:
                return game
        return None

    def team_plays_on(self, team: Optional[str], day: DateLike) -> bool:
        return self.game_for_team(team, day) is not None

    def team_game_dates(
        self, team: Optional[str], days: Optional[Iterable[DateLike]] = None
    ) -> List[date]:
        """Dates on which ``team`` plays, optionally restricted to ``days``."""
        candidates = self.dates() if days is None else sorted({coerce_date(d) for d in days})
        return [day for day in candidates if self.team_plays_on(team, day)]

    def team_games_in_range(self, team: Optional[str], days: Iterable[DateLike]) -> int:
        return len(self.team_game_dates(team, days))

    def known_teams(self) -> Set[str]:
        """Every team code that appears anywhere in the schedule."""
        teams: Set[str] = set()
        for games in self._games.values():
            for game in games:
                teams.add(game.home_team)
                teams.add(game.away_team)
        return teams
