# Area: Session
"""
trivia_session._session.enums — Round state machine enums
=========================================================

Defines the states and events of the round state machine.
"""

from enum import Enum


class RoundState(Enum):
    """
    States of the round state machine.

    State transitions:
    WAITING -> ADVANCING (on GAME_START)
    ADVANCING -> AWAITING_ANSWERS (on QUESTION_SHOWN)
    ADVANCING -> ENDED (on QUESTIONS_EXHAUSTED)
    AWAITING_ANSWERS -> SHOWING_RESULTS (on ANSWERS_CLOSED)
    SHOWING_RESULTS -> SHOWING_LEADERBOARD (on RESULTS_ELAPSED)
    SHOWING_LEADERBOARD -> ADVANCING (on ADVANCE)
    ENDED -> ADVANCING (on GAME_START)
    Any state -> WAITING (abort)
    """
    WAITING = "WAITING"
    ADVANCING = "ADVANCING"
    AWAITING_ANSWERS = "AWAITING_ANSWERS"
    SHOWING_RESULTS = "SHOWING_RESULTS"
    SHOWING_LEADERBOARD = "SHOWING_LEADERBOARD"
    ENDED = "ENDED"


class RoundEvent(Enum):
    """
    Events that drive the round state machine.

    Events are triggered by:
    - GAME_START: host starts a game
    - QUESTION_SHOWN: next question broadcast
    - QUESTIONS_EXHAUSTED: no question left to show
    - ANSWERS_CLOSED: question timer ran out, or every active player answered
    - RESULTS_ELAPSED: results display time passed
    - ADVANCE: host pressed next, or auto-advance timer fired
    """
    GAME_START = "GAME_START"
    QUESTION_SHOWN = "QUESTION_SHOWN"
    QUESTIONS_EXHAUSTED = "QUESTIONS_EXHAUSTED"
    ANSWERS_CLOSED = "ANSWERS_CLOSED"
    RESULTS_ELAPSED = "RESULTS_ELAPSED"
    ADVANCE = "ADVANCE"
