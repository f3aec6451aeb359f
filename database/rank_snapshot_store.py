"""
Persistence of the previous ranking for the WinnerTrack system.

Only one snapshot exists at a time: ``save`` replaces it entirely.
"""

import sqlite3
import logging
from typing import Dict, Optional

from .database_manager import DatabaseManager

logger = logging.getLogger(__name__)


class RankSnapshotStore:
    """Interface for reading and writing the name to rank mapping."""

    def load(self) -> Dict[str, int]:
        raise NotImplementedError("Snapshot stores must implement load()")

    def save(self, ranks: Dict[str, int]) -> None:
        raise NotImplementedError("Snapshot stores must implement save()")


class InMemoryRankSnapshotStore(RankSnapshotStore):
    """Keeps the snapshot in process memory."""

    def __init__(self, ranks: Optional[Dict[str, int]] = None):
        self._ranks = dict(ranks or {})

    def load(self) -> Dict[str, int]:
        return dict(self._ranks)

    def save(self, ranks: Dict[str, int]) -> None:
        self._ranks = dict(ranks)


class SqliteRankSnapshotStore(RankSnapshotStore):
    """Keeps the snapshot in the ``rank_snapshot`` table."""

    def __init__(self, database_manager: DatabaseManager):
        self.db_manager = database_manager

    def load(self) -> Dict[str, int]:
        """Load previous ranks; an unreadable database yields no previous ranks."""
        try:
            with sqlite3.connect(self.db_manager.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT player_name, rank FROM rank_snapshot")
                ranks = {name: rank for name, rank in cursor.fetchall()}
        except sqlite3.Error as e:
            logger.error(f"Failed to load previous ranks: {e}")
            return {}

        logger.info(f"Loaded previous ranks for {len(ranks)} players")
        return ranks

    def save(self, ranks: Dict[str, int]) -> None:
        """Replace the stored snapshot with ``ranks``."""
        try:
            with sqlite3.connect(self.db_manager.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM rank_snapshot")
                cursor.executemany(
                    "INSERT INTO rank_snapshot (player_name, rank) VALUES (?, ?)",
                    list(ranks.items()),
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to save ranks: {e}")
            return

        logger.info(f"Saved ranks for {len(ranks)} players")
