"""
Typed views over the configuration dictionary.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict

from .config_manager import ConfigManager


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    defaults = ConfigManager.get_default_config()[name]
    return {**defaults, **((config or {}).get(name) or {})}


@dataclass(frozen=True)
class BadgeThresholds:
    """Thresholds used by the badge rules."""
    consistency_win_rate: float = 75
    consistency_min_sundays: int = 5
    streak_threshold: int = 3
    lightning_streak: int = 5
    unstoppable_streak: int = 7
    golden_gloves_wins: int = 10
    marathon_sundays: int = 20
    perfect_attendance_weeks: int = 8
    legend_wins: int = 50
    precision_win_rate: float = 90
    efficiency_min_sundays: int = 5
    balanced_win_rate_min: float = 45
    balanced_win_rate_max: float = 55
    balanced_min_wins: int = 15
    universal_partner_count: int = 5
    perfect_chemistry_min: int = 3
    duo_specialist_rate: float = 70
    duo_specialist_min_wins: int = 5
    free_agent_min_wins: int = 5
    free_agent_min_partners: int = 5
    triple_threat_same_day: int = 3
    iron_man_min_sundays: int = 10
    dynamic_duo_min_wins: int = 3
    lucky_wins: int = 7
    rising_star_min_wins: int = 6

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'BadgeThresholds':
        section = _section(config, 'badges')
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in section.items() if key in known})


@dataclass(frozen=True)
class FeatureGate:
    """Minimum data volume before a feature is shown."""
    min_tournaments: int
    min_players: int


def load_feature_gates(config: Dict[str, Any]) -> Dict[str, FeatureGate]:
    """Build the feature gate table from the ``feature_gates`` section."""
    gates = {}
    for name, gate in _section(config, 'feature_gates').items():
        gate = gate or {}
        gates[name] = FeatureGate(int(gate.get('min_tournaments', 0)), int(gate.get('min_players', 0)))
    return gates


@dataclass(frozen=True)
class DisplaySettings:
    """Display limits and date-aware message switches."""
    recent_threshold_days: int = 7
    max_messages: int = 5
    max_badges_displayed: int = 6
    max_history_items: int = 20
    date_aware_messages: bool = True

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'DisplaySettings':
        display = _section(config, 'display')
        toggles = _section(config, 'feature_toggles')
        return cls(
            recent_threshold_days=int(display['recent_threshold_days']),
            max_messages=int(display['max_messages']),
            max_badges_displayed=int(display['max_badges_displayed']),
            max_history_items=int(display['max_history_items']),
            date_aware_messages=bool(toggles['date_aware_messages']),
        )
