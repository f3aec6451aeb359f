"""
Database package for WinnerTrack.
"""

from .database_manager import DatabaseManager
from .rank_snapshot_store import InMemoryRankSnapshotStore, RankSnapshotStore, SqliteRankSnapshotStore

__all__ = ['DatabaseManager', 'RankSnapshotStore', 'InMemoryRankSnapshotStore', 'SqliteRankSnapshotStore']
