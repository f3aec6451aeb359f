"""
Main application for the WinnerTrack stats engine.
"""

import argparse
import logging
import sys
import time

from config.config_manager import ConfigManager
from config.settings import DisplaySettings
from database.database_manager import DatabaseManager
from database.rank_snapshot_store import SqliteRankSnapshotStore
from ranking.stats_aggregator import StatsAggregator
from ranking.stats_pipeline import StatsPipeline
from reports.report_generator import ReportGenerator
from source.sheet_source import DataSourceError, SheetSource

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_once(pipeline: StatsPipeline, source: SheetSource, config: dict) -> None:
    """Fetch, compute and export one snapshot."""
    snapshot = pipeline.reload(source)

    logger.info(f"App state: {snapshot.app_state.value}")
    logger.info(f"Player statistics: {StatsAggregator.get_player_statistics(snapshot.players)}")
    if snapshot.warnings:
        logger.info(f"Skipped {len(snapshot.warnings)} malformed rows or segments")
    for message in snapshot.messages:
        logger.info(f"Message: {message}")

    display = DisplaySettings.from_config(config)
    report_generator = ReportGenerator(snapshot, max_badges=display.max_badges_displayed)
    report_results = report_generator.generate_all_reports(config['reports']['output_dir'])
    logger.info(f"Generated reports: {report_results}")


def main(config_file: str = "config.yaml", watch: bool = False) -> None:
    """Main application entry point."""
    try:
        logger.info("Starting WinnerTrack...")

        config = ConfigManager.load_config(config_file)
        db_manager = DatabaseManager(config['database']['path'])
        pipeline = StatsPipeline(config, SqliteRankSnapshotStore(db_manager))
        source = SheetSource.from_config(config)

        run_once(pipeline, source, config)

        interval = config['source']['auto_refresh_interval']
        while watch and interval > 0:
            time.sleep(interval)
            try:
                run_once(pipeline, source, config)
            except DataSourceError as e:
                logger.warning(f"Refresh failed, keeping previous reports: {e}")

        logger.info("WinnerTrack completed successfully")

    except DataSourceError as e:
        logger.error(f"Could not load tournament data: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error in WinnerTrack: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compute WinnerTrack leaderboards and badges")
    parser.add_argument('--config', default='config.yaml', help='YAML configuration file')
    parser.add_argument('--watch', action='store_true', help='keep refreshing at the configured interval')
    args = parser.parse_args()
    main(args.config, args.watch)
