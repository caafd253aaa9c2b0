# Area: Store
"""
trivia_session._store.repo_leaderboard — Leaderboard repository
===============================================================

SQLite implementation of the LeaderboardStore capability. Scores are
keyed by leaderboard name and player id.
"""

import logging
from typing import Any, Dict, List, Optional

from ..host import PlayerId, player_key
from .database import DEFAULT_DB_PATH, get_connection, init_database

logger = logging.getLogger("trivia_session.store.leaderboard")


class SqliteLeaderboardStore:
    """
    Repository for the leaderboard_scores table.

    Usage:
        store = SqliteLeaderboardStore("scores.db")
        store.set_score_for_player("TriviaScore", "p1", 250, overwrite=True)
        store.get_top("TriviaScore", limit=5)
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH, create: bool = True):
        self.db_path = db_path
        if create:
            init_database(db_path)

    def set_score_for_player(
        self,
        leaderboard_name: str,
        player_id: PlayerId,
        score: int,
        overwrite: bool,
    ) -> None:
        """
        Store a player's score.

        With overwrite=False an existing higher score is kept.
        """
        if overwrite:
            query = """
                INSERT INTO leaderboard_scores (leaderboard_name, player_id, score)
                VALUES (?, ?, ?)
                ON CONFLICT (leaderboard_name, player_id)
                DO UPDATE SET score = excluded.score, updated_at = CURRENT_TIMESTAMP
            """
        else:
            query = """
                INSERT INTO leaderboard_scores (leaderboard_name, player_id, score)
                VALUES (?, ?, ?)
                ON CONFLICT (leaderboard_name, player_id)
                DO UPDATE SET score = MAX(score, excluded.score), updated_at = CURRENT_TIMESTAMP
            """
        self._write(query, (leaderboard_name, player_key(player_id), score))
        logger.debug(f"{leaderboard_name}: {player_id} -> {score}")

    def get_score(self, leaderboard_name: str, player_id: PlayerId) -> Optional[int]:
        """Stored score, or None if the player has none."""
        query = """
            SELECT score FROM leaderboard_scores
            WHERE leaderboard_name = ? AND player_id = ?
        """
        rows = self._read(query, (leaderboard_name, player_key(player_id)))
        return rows[0]["score"] if rows else None

    def get_top(self, leaderboard_name: str, limit: int = 5) -> List[Dict[str, Any]]:
        """Highest scores first; ties in player id order."""
        query = """
            SELECT player_id, score FROM leaderboard_scores
            WHERE leaderboard_name = ?
            ORDER BY score DESC, player_id ASC
            LIMIT ?
        """
        return self._read(query, (leaderboard_name, limit))

    def clear(self, leaderboard_name: Optional[str] = None) -> None:
        """Delete one leaderboard's scores, or every score."""
        if leaderboard_name is None:
            self._write("DELETE FROM leaderboard_scores")
        else:
            self._write(
                "DELETE FROM leaderboard_scores WHERE leaderboard_name = ?",
                (leaderboard_name,),
            )

    # ── Internals ────────────────────────────────────────────

    def _write(self, query: str, params: tuple = ()) -> None:
        conn = get_connection(self.db_path)
        try:
            conn.execute(query, params)
            conn.commit()
        finally:
            conn.close()

    def _read(self, query: str, params: tuple = ()) -> List[Dict[str, Any]]:
        conn = get_connection(self.db_path)
        try:
            return [dict(row) for row in conn.execute(query, params).fetchall()]
        finally:
            conn.close()
