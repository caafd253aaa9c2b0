"""
main.py — Embed a trivia session in a game loop
===============================================

Shows how a host platform drives the session core: it forwards
presence changes, calls the polling timer from its update loop, and
renders whatever the bus publishes.

    python main.py

Two scripted players join, the host starts the game, and both phones
answer every question as soon as it is shown.

Press Ctrl+C to stop.
"""

import logging
import random
import time

from trivia_session import PollingTimerBackend, TriviaSession, load_config, setup_logging
from trivia_session.questions import correct_index, load_questions
from trivia_session.demo import DEFAULT_QUESTIONS_PATH

# ── Setup logging (so you can see what's happening) ──
setup_logging("trivia_session.log", logging.INFO)

# ── Configuration ──
config = load_config()
config.update({
    # Short timings so the example finishes quickly
    "question_time_limit_sec": 5,
    "results_display_sec": 2,
    "auto_advance_sec": 2,
    "final_leaderboard_delay_sec": 1,
})

backend = PollingTimerBackend()
session = TriviaSession.create(
    config,
    backend,
    questions=load_questions(DEFAULT_QUESTIONS_PATH),
    device_ids=["phone-1", "phone-2"],
)
coordinator = session.coordinator
rng = random.Random()
finished = []


# ── Render what the bus publishes ──
def on_question(event):
    print(f"\nQ{event.question_index + 1}: {event.question.question}")
    for i, answer in enumerate(event.question.answers):
        print(f"   {i}. {answer.text}")
    # Each "phone" answers right away
    for player_id in ("alice", "bob"):
        choice = correct_index(event.question) if rng.random() < 0.7 else 0
        session.bus.publish("triviaAnswerSubmitted", {
            "playerId": player_id,
            "answerIndex": choice,
            "responseTime": rng.uniform(300, 4000),
        })


def on_results(event):
    if event.show_leaderboard:
        board = ", ".join(f"{e.name} {e.score}" for e in event.leaderboard_data or [])
        print(f"   Leaderboard: {board or '-'}")
    else:
        print(f"   Correct: {event.question.answers[event.correct_answer_index].text}")


def on_game_end(event):
    print("\nGame over!")
    finished.append(True)


session.bus.subscribe("triviaQuestionShow", on_question)
session.bus.subscribe("triviaResults", on_results)
session.bus.subscribe("triviaGameEnd", on_game_end)

# ── Players arrive; the first one is host ──
coordinator.on_player_joined("alice", "Alice")
coordinator.on_player_joined("bob", "Bob")
coordinator.update_settings("alice", {"isLocked": False})
coordinator.update_settings("alice", {"numberOfQuestions": 3, "modifiers": {"autoAdvance": True}})
coordinator.start_game("alice")

# ── The platform update loop ──
try:
    while not finished:
        backend.run_due()
        time.sleep(0.05)
except KeyboardInterrupt:
    pass
finally:
    session.close()
