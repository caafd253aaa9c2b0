# Area: Shared
"""
trivia_session.demo — Simulated trivia session
==============================================

Runs a full game on a virtual clock with bot players, so the whole
round protocol can be watched from a terminal without a game engine.

Usage:
    from trivia_session.demo import run_demo
    leaderboard = run_demo(players=4, seed=7)
"""

import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

from ._core.timer_backends import VirtualTimerBackend
from ._events.catalog import (
    AnswerSubmitted,
    GameEnd,
    LeaderboardEntry,
    QuestionShow,
)
from .questions import correct_index, load_questions
from .session import TriviaSession

logger = logging.getLogger("trivia_session.demo")

# Default demo data path (relative to package)
DEFAULT_QUESTIONS_PATH = Path(__file__).parent / "demo_data" / "questions.json"

BOT_NAMES = ["Ada", "Grace", "Linus", "Guido", "Barbara", "Ken", "Margaret", "Dennis"]

# Chance a bot picks the correct answer
BOT_ACCURACY = 0.6

# Safety stop for the simulation loop
MAX_STEPS = 10_000


class DemoBot:
    """A simulated player that answers each question after a random delay."""

    def __init__(self, player_id: str, name: str, session: TriviaSession, rng: random.Random):
        self.player_id = player_id
        self.name = name
        self._session = session
        self._rng = rng
        session.bus.subscribe(QuestionShow.event_name, self._on_question)

    def _on_question(self, event: QuestionShow) -> None:
        limit_ms = event.time_limit * 1000
        delay_ms = self._rng.uniform(0.05, 0.9) * limit_ms
        correct = correct_index(event.question)
        if self._rng.random() < BOT_ACCURACY:
            choice = correct
        else:
            choice = self._rng.randrange(len(event.question.answers))
        self._session.timeouts.schedule(lambda: self._answer(choice, delay_ms), delay_ms)

    def _answer(self, choice: int, response_time_ms: float) -> None:
        self._session.bus.publish(AnswerSubmitted(
            player_id=self.player_id,
            answer_index=choice,
            response_time=response_time_ms,
        ))


def run_demo(
    players: int = 4,
    questions_path: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
    seed: Optional[int] = None,
) -> List[LeaderboardEntry]:
    """
    Play one full game with bot players on a virtual clock.

    Returns:
        The final leaderboard
    """
    rng = random.Random(seed)
    backend = VirtualTimerBackend()
    bank = load_questions(questions_path or DEFAULT_QUESTIONS_PATH)
    session = TriviaSession.create(
        config,
        backend,
        questions=bank,
        device_ids=[f"phone-{i + 1}" for i in range(max(players - 1, 1))],
        rng=rng,
    )
    coordinator = session.coordinator

    final: List[LeaderboardEntry] = []
    finished = []

    def _on_game_end(event: GameEnd) -> None:
        final.extend(event.final_leaderboard or [])
        finished.append(True)

    session.bus.subscribe(GameEnd.event_name, _on_game_end)

    bots = []
    for i in range(players):
        player_id = f"bot-{i + 1}"
        name = BOT_NAMES[i % len(BOT_NAMES)]
        bots.append(DemoBot(player_id, name, session, rng))
        coordinator.on_player_joined(player_id, name)

    host = bots[0].player_id
    coordinator.update_settings(host, {"isLocked": False})
    coordinator.update_settings(host, {
        "numberOfQuestions": len(bank),
        "modifiers": {"autoAdvance": True},
    })
    if not coordinator.start_game(host):
        session.close()
        return []

    steps = 0
    while not finished and steps < MAX_STEPS:
        wait_ms = backend.next_due_in_ms()
        if wait_ms is None:
            logger.warning("Simulation stalled with no pending timers")
            break
        backend.advance(wait_ms)
        steps += 1

    logger.info(f"Demo finished after {backend.now_ms / 1000:.1f} virtual seconds")
    session.close()
    return final


def format_leaderboard(entries: List[LeaderboardEntry]) -> str:
    """Plain-text table of a leaderboard."""
    if not entries:
        return "No scores."
    lines = [f"{'#':>2}  {'Player':<12} {'Score':>6}"]
    for rank, entry in enumerate(entries, start=1):
        lines.append(f"{rank:>2}  {entry.name:<12} {entry.score:>6}")
    return "\n".join(lines)
