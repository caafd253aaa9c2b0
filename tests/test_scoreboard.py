# Area: Core Tests
"""Tests for ScoreBoard."""

import pytest

from trivia_session._core.scoreboard import ScoreBoard
from trivia_session.host import PlayerRef


class TestScores:
    """Tests for score bookkeeping."""

    def test_unknown_player_scores_zero(self):
        assert ScoreBoard().get_score("ghost") == 0

    def test_add_points_returns_new_total(self):
        board = ScoreBoard()
        assert board.add_points("a", 100) == 100
        assert board.add_points("a", 50) == 150
        assert board.add_points("a", -30) == 120

    def test_set_score(self):
        board = ScoreBoard()
        board.set_score("a", 42)
        assert board.get_score("a") == 42
        assert board.has_score("a")

    def test_scored_player_count_ignores_zero(self):
        board = ScoreBoard()
        board.set_score("a", 10)
        board.set_score("b", 0)
        assert board.scored_player_count() == 1

    def test_scores_is_a_copy(self):
        board = ScoreBoard()
        board.set_score("a", 10)
        board.scores()["a"] = 999
        assert board.get_score("a") == 10

    def test_reset(self):
        board = ScoreBoard()
        board.set_score("a", 10)
        board.reset()
        assert board.get_score("a") == 0
        assert board.scores() == {}


class TestAnswerPoints:
    """Tests for the answer award policy."""

    @pytest.mark.parametrize("is_correct,response_ms,limit_ms,expected", [
        (True, 1000, 10000, 200),
        (True, 3000, 10000, 150),
        (True, 7000, 10000, 100),
        (False, 0, 10000, 0),
        (True, 10000, 10000, 100),
    ])
    def test_compute_answer_points(self, is_correct, response_ms, limit_ms, expected):
        board = ScoreBoard()
        assert board.compute_answer_points(is_correct, response_ms, limit_ms) == expected

    def test_zero_time_limit_gives_no_bonus(self):
        board = ScoreBoard()
        assert board.compute_answer_points(True, 0, 0) == 100


class TestLeaderboard:
    """Tests for ranked leaderboard snapshots."""

    def test_stable_tie_break(self):
        board = ScoreBoard()
        board.set_score("A", 300)
        board.set_score("B", 300)
        board.set_score("C", 100)
        refs = [PlayerRef("A", "Ann"), PlayerRef("B", "Bob"), PlayerRef("C", "Cy")]

        entries = board.snapshot_leaderboard(refs)

        assert [e.player_id for e in entries] == ["A", "B", "C"]
        assert [e.name for e in entries] == ["Ann", "Bob", "Cy"]

    def test_zero_scores_are_excluded(self):
        board = ScoreBoard()
        board.set_score("A", 0)
        board.set_score("B", 50)
        refs = [PlayerRef("A", "Ann"), PlayerRef("B", "Bob"), PlayerRef("C", "Cy")]
        assert [e.player_id for e in board.snapshot_leaderboard(refs)] == ["B"]

    def test_only_listed_players_appear(self):
        board = ScoreBoard()
        board.set_score("gone", 900)
        board.set_score("B", 50)
        assert [e.player_id for e in board.snapshot_leaderboard([PlayerRef("B", "Bob")])] == ["B"]

    def test_int_ids_are_stringified(self):
        board = ScoreBoard()
        board.set_score(7, 100)
        entry = board.snapshot_leaderboard([PlayerRef(7, "Seven")])[0]
        assert entry.player_id == "7"

    def test_top_n(self):
        board = ScoreBoard()
        refs = []
        for i in range(8):
            board.set_score(f"p{i}", (i + 1) * 10)
            refs.append(PlayerRef(f"p{i}", f"P{i}"))
        top = board.top_n(refs)
        assert len(top) == 5
        assert top[0].player_id == "p7"
        assert len(board.top_n(refs, n=2)) == 2
