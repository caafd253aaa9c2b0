# Area: Store Tests
"""Tests for the SQLite leaderboard store."""

import os
import tempfile

import pytest

from trivia_session._store.database import get_connection, init_database
from trivia_session._store.repo_leaderboard import SqliteLeaderboardStore


class TestSqliteLeaderboardStore:
    """Tests for SqliteLeaderboardStore class."""

    @pytest.fixture
    def db_path(self):
        """Create temporary database for testing."""
        fd, path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        init_database(path)
        yield path
        os.unlink(path)

    @pytest.fixture
    def store(self, db_path):
        return SqliteLeaderboardStore(db_path)

    def test_schema_creates_table(self, db_path):
        conn = get_connection(db_path)
        try:
            row = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='leaderboard_scores'"
            ).fetchone()
        finally:
            conn.close()
        assert row is not None

    def test_init_is_idempotent(self, db_path):
        init_database(db_path)
        init_database(db_path)

    def test_set_and_get_score(self, store):
        store.set_score_for_player("TriviaScore", "p1", 250, overwrite=True)
        assert store.get_score("TriviaScore", "p1") == 250

    def test_missing_score_is_none(self, store):
        assert store.get_score("TriviaScore", "nobody") is None

    def test_writes_visible_to_second_store(self, store, db_path):
        store.set_score_for_player("TriviaScore", "p1", 120, overwrite=True)
        reader = SqliteLeaderboardStore(db_path, create=False)
        assert reader.get_score("TriviaScore", "p1") == 120
        assert reader.get_top("TriviaScore") == [{"player_id": "p1", "score": 120}]

    def test_overwrite_replaces_lower(self, store):
        store.set_score_for_player("TriviaScore", "p1", 300, overwrite=True)
        store.set_score_for_player("TriviaScore", "p1", 100, overwrite=True)
        assert store.get_score("TriviaScore", "p1") == 100

    def test_no_overwrite_keeps_higher(self, store):
        store.set_score_for_player("TriviaScore", "p1", 300, overwrite=False)
        store.set_score_for_player("TriviaScore", "p1", 100, overwrite=False)
        assert store.get_score("TriviaScore", "p1") == 300
        store.set_score_for_player("TriviaScore", "p1", 400, overwrite=False)
        assert store.get_score("TriviaScore", "p1") == 400

    def test_int_ids_stored_as_text(self, store):
        store.set_score_for_player("TriviaScore", 7, 50, overwrite=True)
        assert store.get_score("TriviaScore", "7") == 50

    def test_leaderboards_are_separate(self, store):
        store.set_score_for_player("A", "p1", 10, overwrite=True)
        store.set_score_for_player("B", "p1", 20, overwrite=True)
        assert store.get_score("A", "p1") == 10
        assert store.get_score("B", "p1") == 20

    def test_get_top(self, store):
        for player, score in [("p1", 100), ("p2", 300), ("p3", 200), ("p4", 300)]:
            store.set_score_for_player("TriviaScore", player, score, overwrite=True)

        top = store.get_top("TriviaScore", limit=3)

        assert [(r["player_id"], r["score"]) for r in top] == [
            ("p2", 300), ("p4", 300), ("p3", 200),
        ]

    def test_clear_one_leaderboard(self, store):
        store.set_score_for_player("A", "p1", 10, overwrite=True)
        store.set_score_for_player("B", "p1", 20, overwrite=True)
        store.clear("A")
        assert store.get_score("A", "p1") is None
        assert store.get_score("B", "p1") == 20

    def test_clear_all(self, store):
        store.set_score_for_player("A", "p1", 10, overwrite=True)
        store.clear()
        assert store.get_top("A") == []
