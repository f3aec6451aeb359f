"""
Ranking package for WinnerTrack: aggregation, badges and the reload pipeline.
"""

from .badge_engine import BADGE_CATALOG, BadgeContext, BadgeEngine, BadgeRule
from .stats_aggregator import (
    FeatureUnlock,
    StatsAggregator,
    check_feature_unlock,
    classify_app_state,
    completed_only,
)
from .stats_pipeline import StatsPipeline

__all__ = [
    'BADGE_CATALOG', 'BadgeContext', 'BadgeEngine', 'BadgeRule',
    'FeatureUnlock', 'StatsAggregator', 'check_feature_unlock', 'classify_app_state', 'completed_only',
    'StatsPipeline',
]
