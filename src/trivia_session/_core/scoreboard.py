# Area: Core
"""
trivia_session._core.scoreboard — Scores and leaderboards
=========================================================

Cumulative per-player scores, the per-answer award policy (base points
plus a speed bonus), and ranked leaderboard snapshots.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .._events.catalog import LeaderboardEntry
from ..host import PlayerId, PlayerRef

logger = logging.getLogger("trivia_session.scoreboard")

BASE_POINTS = 100
SPEED_BONUS_POINTS = 50
VERY_FAST_RATIO = 0.8
FAST_RATIO = 0.6


class ScoreBoard:
    """Tracks cumulative scores keyed by player id."""

    def __init__(self) -> None:
        self._scores: Dict[PlayerId, int] = {}

    def get_score(self, player_id: PlayerId) -> int:
        return self._scores.get(player_id, 0)

    def set_score(self, player_id: PlayerId, value: int) -> None:
        self._scores[player_id] = value

    def add_points(self, player_id: PlayerId, delta: int) -> int:
        """Add (or, with a negative delta, subtract) points; return the new total."""
        new_score = self.get_score(player_id) + delta
        self._scores[player_id] = new_score
        logger.debug("Score %s: %+d -> %d", player_id, delta, new_score)
        return new_score

    @staticmethod
    def calculate_speed_bonus(response_time_ms: float, time_limit_ms: float) -> int:
        """Bonus tier from how much of the time limit was left."""
        if time_limit_ms <= 0:
            return 0
        speed_ratio = 1 - (response_time_ms / time_limit_ms)
        if speed_ratio > VERY_FAST_RATIO:
            return 2
        if speed_ratio > FAST_RATIO:
            return 1
        return 0

    def compute_answer_points(
        self, is_correct: bool, response_time_ms: float, time_limit_ms: float
    ) -> int:
        """Points for one answer: 0 if wrong, else 100 plus 50 per bonus tier."""
        if not is_correct:
            return 0
        bonus = self.calculate_speed_bonus(response_time_ms, time_limit_ms)
        return BASE_POINTS + bonus * SPEED_BONUS_POINTS

    def snapshot_leaderboard(self, present_players: Iterable[PlayerRef]) -> List[LeaderboardEntry]:
        """
        Ranked leaderboard for the given players.

        Players without a positive score are left out. Ties keep the
        input order (sorted() is stable).
        """
        entries = [
            LeaderboardEntry(name=ref.name, score=self.get_score(ref.player_id), player_id=str(ref.player_id))
            for ref in present_players
            if self.get_score(ref.player_id) > 0
        ]
        return sorted(entries, key=lambda e: -e.score)

    def top_n(self, present_players: Iterable[PlayerRef], n: int = 5) -> List[LeaderboardEntry]:
        return self.snapshot_leaderboard(present_players)[:n]

    def has_score(self, player_id: PlayerId) -> bool:
        return self.get_score(player_id) > 0

    def scored_player_count(self) -> int:
        """Number of players with a positive score."""
        return sum(1 for score in self._scores.values() if score > 0)

    def scores(self) -> Dict[PlayerId, int]:
        return dict(self._scores)

    def reset(self) -> None:
        """Clear every score."""
        self._scores.clear()
        logger.info("All scores reset")
