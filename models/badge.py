"""
Achievement badge models for the WinnerTrack system.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BadgeTier(str, Enum):
    """Rarity label of a badge."""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


@dataclass(frozen=True)
class Badge:
    """A badge attached to a player."""
    icon: str
    name: str
    tier: BadgeTier
    subtitle: Optional[str] = None
