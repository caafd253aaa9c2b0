# Area: Session Tests
"""Tests for TriviaSession construction."""

import json
import os
import tempfile

import pytest

from trivia_session._core.timer_backends import VirtualTimerBackend
from trivia_session._store.repo_leaderboard import SqliteLeaderboardStore
from trivia_session.errors import ConfigError
from trivia_session.session import TriviaSession


class TestCreate:
    """Tests for TriviaSession.create()."""

    def test_defaults(self):
        session = TriviaSession.create(None, VirtualTimerBackend())
        assert session.config["leaderboard_name"] == "TriviaScore"
        assert session.leaderboard_store is None
        assert session.coordinator.settings.time_limit == 30
        assert session.roster.local_player_id == "local"

    def test_sessions_are_independent(self):
        first = TriviaSession.create(None, VirtualTimerBackend())
        second = TriviaSession.create(None, VirtualTimerBackend())
        first.coordinator.on_player_joined("p1")
        assert second.roster.count() == 0
        assert first.bus is not second.bus

    def test_time_limit_from_config(self):
        session = TriviaSession.create({"question_time_limit_sec": 12}, VirtualTimerBackend())
        assert session.coordinator.settings.time_limit == 12

    def test_devices_registered(self):
        session = TriviaSession.create(None, VirtualTimerBackend(), device_ids=["a", "b"])
        assert session.devices.total_count() == 2

    def test_invalid_config(self):
        with pytest.raises(ConfigError):
            TriviaSession.create({"timer_tick_ms": 0}, VirtualTimerBackend())

    def test_questions_loaded_from_path(self, tmp_path):
        path = tmp_path / "bank.json"
        path.write_text(json.dumps([
            {"id": 1, "question": "Q?", "answers": [{"text": "A", "correct": True}]},
        ]))
        session = TriviaSession.create({"questions_path": str(path)}, VirtualTimerBackend())
        assert len(session.coordinator.question_bank) == 1

    def test_sqlite_store_opened_from_db_path(self):
        fd, path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        try:
            session = TriviaSession.create({"db_path": path}, VirtualTimerBackend())
            assert isinstance(session.leaderboard_store, SqliteLeaderboardStore)
            session.leaderboard_store.set_score_for_player("TriviaScore", "p1", 10, overwrite=True)
            assert session.leaderboard_store.get_score("TriviaScore", "p1") == 10
        finally:
            os.unlink(path)
