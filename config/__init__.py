"""
Configuration package for WinnerTrack.
"""

from .config_manager import ConfigManager
from .settings import BadgeThresholds, DisplaySettings, FeatureGate, load_feature_gates

__all__ = ['ConfigManager', 'BadgeThresholds', 'DisplaySettings', 'FeatureGate', 'load_feature_gates']
