# Area: Store
"""
trivia_session._store.database — Leaderboard database
=====================================================

Opens the SQLite file behind the persistent leaderboard and creates
the ``leaderboard_scores`` table from ``schema.sql``.
"""

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger("trivia_session.store.database")

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

DEFAULT_DB_PATH = "trivia_session.db"


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Connection whose rows read by column name."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: str = DEFAULT_DB_PATH) -> None:
    """Create the leaderboard table and index if missing."""
    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))
        conn.commit()
        logger.info(f"Leaderboard database ready at {db_path}")
    finally:
        conn.close()
