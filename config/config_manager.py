"""
Configuration management for the WinnerTrack system.
"""

import copy
import logging
from typing import Any, Dict, List

import yaml

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and provides default values."""

    @staticmethod
    def load_config(config_file: str) -> Dict[str, Any]:
        """Load configuration from YAML file, merged over the defaults."""
        defaults = ConfigManager.get_default_config()
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning(f"Configuration file '{config_file}' not found. Using default configuration.")
            return defaults
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing configuration file: {e}. Using default configuration.")
            return defaults

        if not isinstance(loaded, dict):
            logger.warning(f"Configuration file '{config_file}' does not contain a mapping. Using default configuration.")
            return defaults

        config = ConfigManager.merge(defaults, loaded)
        for error in ConfigManager.validate_config(config):
            logger.error(f"Config validation error: {error}")
        return config

    @staticmethod
    def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        Recursively merge ``override`` into a copy of ``base``.
        An empty value (``display:`` with nothing below it) keeps the default section.
        """
        merged = copy.deepcopy(base)
        for key, value in override.items():
            if value is None and isinstance(merged.get(key), dict):
                logger.warning(f"Configuration section '{key}' is empty. Using defaults.")
                continue
            if isinstance(merged.get(key), dict) and isinstance(value, dict):
                merged[key] = ConfigManager.merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return default configuration if config file is not available."""
        return {
            'source': {
                'csv_url': '',
                'test_mode': False,
                'timeout': 30,
                'auto_refresh_interval': 300,
            },
            'database': {
                'path': 'winnertrack.db',
            },
            'reports': {
                'output_dir': 'reports',
            },
            'display': {
                'max_history_items': 20,
                'history_load_more': 10,
                'max_participants_inline': 8,
                'max_timeline_cards': 12,
                'recent_threshold_days': 7,
                'max_messages': 5,
                'max_badges_displayed': 6,
            },
            'feature_toggles': {
                'show_participants': True,
                'show_timeline': True,
                'show_scheduled_tournaments': True,
                'date_aware_messages': True,
            },
            'feature_gates': {
                'basic_rankings': {'min_tournaments': 2, 'min_players': 2},
                'streak_tracking': {'min_tournaments': 3, 'min_players': 2},
                'duo_tracking': {'min_tournaments': 3, 'min_players': 3},
                'full_badges': {'min_tournaments': 5, 'min_players': 4},
                'advanced_features': {'min_tournaments': 10, 'min_players': 6},
            },
            'badges': {
                'consistency_win_rate': 75,
                'consistency_min_sundays': 5,
                'streak_threshold': 3,
                'lightning_streak': 5,
                'unstoppable_streak': 7,
                'golden_gloves_wins': 10,
                'marathon_sundays': 20,
                'perfect_attendance_weeks': 8,
                'legend_wins': 50,
                'precision_win_rate': 90,
                'efficiency_min_sundays': 5,
                'balanced_win_rate_min': 45,
                'balanced_win_rate_max': 55,
                'balanced_min_wins': 15,
                'universal_partner_count': 5,
                'perfect_chemistry_min': 3,
                'duo_specialist_rate': 70,
                'duo_specialist_min_wins': 5,
                'free_agent_min_wins': 5,
                'free_agent_min_partners': 5,
                'triple_threat_same_day': 3,
                'iron_man_min_sundays': 10,
                'dynamic_duo_min_wins': 3,
                'lucky_wins': 7,
                'rising_star_min_wins': 6,
            },
        }

    @staticmethod
    def validate_config(config: Dict[str, Any]) -> List[str]:
        """Return a list of problems with the numeric settings (empty if none)."""
        errors = []
        source = config.get('source') or {}
        display = config.get('display') or {}
        badges = config.get('badges') or {}

        if source.get('auto_refresh_interval', 0) < 0:
            errors.append('auto_refresh_interval must be >= 0')
        if display.get('max_history_items', 1) < 1:
            errors.append('max_history_items must be >= 1')
        if display.get('max_participants_inline', 1) < 1:
            errors.append('max_participants_inline must be >= 1')
        if badges.get('streak_threshold', 1) < 1:
            errors.append('streak_threshold must be >= 1')

        for key in ('consistency_win_rate', 'precision_win_rate', 'duo_specialist_rate',
                    'balanced_win_rate_min', 'balanced_win_rate_max'):
            value = badges.get(key)
            if value is not None and not 0 <= value <= 100:
                errors.append(f'{key} must be between 0-100')

        if badges.get('lightning_streak', 0) >= badges.get('unstoppable_streak', 1):
            errors.append('lightning_streak must be lower than unstoppable_streak')
        if badges.get('balanced_win_rate_min', 0) > badges.get('balanced_win_rate_max', 100):
            errors.append('balanced_win_rate_min must not exceed balanced_win_rate_max')

        return errors
