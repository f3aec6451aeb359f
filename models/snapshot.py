"""
Result of one full reload cycle.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Tuple

from .player import PairStat, PlayerStat
from .tournament import AppState, TournamentRecord, TournamentState


@dataclass(frozen=True)
class ParseWarning:
    """A row or winners segment that was skipped while parsing."""
    line_number: int
    reason: str
    text: str = ""


@dataclass(frozen=True)
class StatsSnapshot:
    """
    Everything the display layer needs after a reload.

    A snapshot is replaced wholesale by the next reload; consumers must not
    mutate the player or pair objects it holds.
    """
    generated_at: datetime
    records: Tuple[TournamentRecord, ...] = ()
    players: Tuple[PlayerStat, ...] = ()
    pairs: Tuple[PairStat, ...] = ()
    messages: Tuple[str, ...] = ()
    app_state: AppState = AppState.EMPTY
    ranks: Mapping[str, int] = field(default_factory=dict)
    warnings: Tuple[ParseWarning, ...] = ()

    def __post_init__(self):
        # Read-only copy, independent of the map handed to the snapshot store
        object.__setattr__(self, 'ranks', MappingProxyType(dict(self.ranks)))

    @property
    def completed(self) -> Tuple[TournamentRecord, ...]:
        return tuple(r for r in self.records if r.state == TournamentState.COMPLETED)

    @property
    def scheduled(self) -> Tuple[TournamentRecord, ...]:
        return tuple(r for r in self.records if r.state == TournamentState.SCHEDULED)

    def player(self, name: str):
        """Look up a player by display name, or None."""
        for stat in self.players:
            if stat.name == name:
                return stat
        return None
