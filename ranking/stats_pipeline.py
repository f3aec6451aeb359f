"""
One reload cycle of the WinnerTrack system: CSV text in, immutable snapshot out.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from config.settings import BadgeThresholds, DisplaySettings
from database.rank_snapshot_store import InMemoryRankSnapshotStore, RankSnapshotStore
from models.snapshot import StatsSnapshot
from parsing.record_parser import RecordParser
from ranking.badge_engine import BadgeEngine
from ranking.stats_aggregator import StatsAggregator, classify_app_state
from reports.message_generator import MessageGenerator
from source.sheet_source import SheetSource

logger = logging.getLogger(__name__)


class StatsPipeline:
    """Parses, aggregates, badges and summarizes one export of the sheet."""

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 snapshot_store: Optional[RankSnapshotStore] = None):
        self.config = config or {}
        self.snapshot_store = snapshot_store or InMemoryRankSnapshotStore()
        self.badge_engine = BadgeEngine(BadgeThresholds.from_config(self.config))
        self.message_generator = MessageGenerator(DisplaySettings.from_config(self.config))

    def run(self, csv_text: str, now: Optional[datetime] = None) -> StatsSnapshot:
        """Compute a snapshot from already fetched CSV text."""
        now = now or datetime.now()

        parser = RecordParser()
        records = parser.parse(csv_text)
        app_state = classify_app_state(records)
        logger.info(f"App state: {app_state.value}")

        aggregator = StatsAggregator(now)
        previous_ranks = self.snapshot_store.load()
        players = aggregator.calculate_player_stats(records, previous_ranks)
        pairs = aggregator.calculate_pair_stats(records)
        self.badge_engine.assign_badges(players, pairs, records)

        ranks = aggregator.rank_snapshot(players)
        if players:
            self.snapshot_store.save(ranks)

        messages = self.message_generator.generate(records, players, pairs, now)

        return StatsSnapshot(
            generated_at=now,
            records=tuple(records),
            players=tuple(players),
            pairs=tuple(pairs),
            messages=tuple(messages),
            app_state=app_state,
            ranks=ranks,
            warnings=tuple(parser.warnings),
        )

    def reload(self, source: SheetSource, now: Optional[datetime] = None) -> StatsSnapshot:
        """
        Fetch and compute a fresh snapshot.
        DataSourceError from the source is propagated to the caller.
        """
        csv_text = source.fetch()
        return self.run(csv_text, now)
