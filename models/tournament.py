"""
Tournament record models for the WinnerTrack system.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class TournamentState(str, Enum):
    """Lifecycle state of a tournament record."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


class AppState(str, Enum):
    """Overall data state, drives which panels the display layer shows."""
    EMPTY = "empty"
    SCHEDULED_ONLY = "scheduled-only"
    FIRST_WIN = "first-win"
    MINIMAL = "minimal"
    GROWING = "growing"
    ESTABLISHED = "established"


@dataclass(frozen=True)
class ScheduledTournament:
    """A tournament day whose results are not known yet."""
    date: str
    participants: Tuple[str, ...] = ()
    planned_tournament_count: int = 0
    teams: Tuple[str, ...] = ()

    @property
    def state(self) -> TournamentState:
        return TournamentState.SCHEDULED


@dataclass(frozen=True)
class CompletedTournament:
    """One finished tournament of a day, won by a pair of players."""
    date: str
    tournament_number: int
    winners: Tuple[str, str]
    participants: Tuple[str, ...] = ()
    planned_tournament_count: int = 0
    teams: Tuple[str, ...] = ()

    @property
    def state(self) -> TournamentState:
        return TournamentState.COMPLETED

    def partner_of(self, name: str) -> str:
        """Return the co-winner of ``name`` (the name itself for a self-pair)."""
        first, second = self.winners
        return second if first == name else first


TournamentRecord = Union[ScheduledTournament, CompletedTournament]
