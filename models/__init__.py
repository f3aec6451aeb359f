"""
Models package for WinnerTrack.

This package contains all data models and dataclasses used throughout the system.
"""

from .badge import Badge, BadgeTier
from .player import MatchEntry, WinEntry, Milestone, PlayerStat, PairStat
from .snapshot import ParseWarning, StatsSnapshot
from .tournament import (
    AppState,
    CompletedTournament,
    ScheduledTournament,
    TournamentRecord,
    TournamentState,
)

__all__ = [
    'Badge', 'BadgeTier',
    'MatchEntry', 'WinEntry', 'Milestone', 'PlayerStat', 'PairStat',
    'ParseWarning', 'StatsSnapshot',
    'AppState', 'CompletedTournament', 'ScheduledTournament', 'TournamentRecord', 'TournamentState',
]
