# Area: Store
"""
SQLite persistence for the global leaderboard.
"""

from .database import get_connection, init_database
from .repo_leaderboard import SqliteLeaderboardStore

__all__ = [
    "get_connection",
    "init_database",
    "SqliteLeaderboardStore",
]
