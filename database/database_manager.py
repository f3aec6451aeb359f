"""
Core database management for the WinnerTrack system.
"""

import sqlite3
import logging
from typing import Dict

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages core database operations and initialization."""

    def __init__(self, db_path: str = "winnertrack.db"):
        self.db_path = db_path
        self.init_database()

    def init_database(self) -> None:
        """Initialize the database with required tables."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()

            # Ranks of the last run, used for rank change arrows
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS rank_snapshot (
                    player_name TEXT PRIMARY KEY,
                    rank INTEGER NOT NULL,
                    saved_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            conn.commit()
            logger.info("Database initialized successfully")

    def get_database_stats(self) -> Dict[str, int]:
        """Get basic database statistics."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()

            cursor.execute("SELECT COUNT(*) FROM rank_snapshot")
            ranked_players = cursor.fetchone()[0]

            return {
                'ranked_players': ranked_players,
            }
