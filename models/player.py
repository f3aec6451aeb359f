"""
Player and pair statistics models for the WinnerTrack system.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .badge import Badge


@dataclass
class MatchEntry:
    """One tournament a player took part in."""
    date: str
    tournament_number: int
    won: bool = False


@dataclass(frozen=True)
class WinEntry:
    """One tournament a player won, with the partner they won it with."""
    date: str
    tournament_number: int
    partner: Optional[str] = None


@dataclass(frozen=True)
class Milestone:
    """What a player needs to climb one place in the ranking."""
    kind: str
    message: str
    target_rank: Optional[int] = None
    target_name: Optional[str] = None
    wins_needed: int = 0


@dataclass
class PlayerStat:
    """Accumulated statistics for one player."""
    name: str
    total_wins: int = 0
    total_matches: int = 0
    sundays: Set[str] = field(default_factory=set)
    matches: List[MatchEntry] = field(default_factory=list)
    wins: List[WinEntry] = field(default_factory=list)
    partners: Dict[str, int] = field(default_factory=dict)

    # Derived once the fold over all records is done
    total_losses: int = 0
    win_rate: float = 0.0
    participation_rate: int = 0
    current_streak: int = 0
    best_streak: int = 0
    last5_form: str = ""
    last5_matches: List[MatchEntry] = field(default_factory=list)
    last5_win_rate: int = 0
    last_win_date: Optional[str] = None
    days_since_last_win: Optional[int] = None

    rank: int = 0
    previous_rank: Optional[int] = None
    rank_change: int = 0
    next_milestone: Optional[Milestone] = None
    badges: List[Badge] = field(default_factory=list)

    @property
    def sundays_played(self) -> int:
        return len(self.sundays)

    def has_badge(self, name: str) -> bool:
        return any(badge.name == name for badge in self.badges)


@dataclass
class PairStat:
    """Wins of one unordered pair of co-winners."""
    players: Tuple[str, str]
    wins: int = 0
    last_win: Optional[str] = None

    @property
    def pair(self) -> str:
        return " & ".join(self.players)

    def includes(self, name: str) -> bool:
        return name in self.players
