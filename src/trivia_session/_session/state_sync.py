# Area: Session
"""
trivia_session._session.state_sync — Late-joiner state snapshot
===============================================================

Builds the StateResponse a display component receives after sending a
StateRequest, so a phone picked up mid-game can draw the right screen.
"""

from typing import List, Optional

from .._events.catalog import LeaderboardEntry, Question, StateResponse
from .enums import RoundState
from .state_machine import WIRE_STATES


def build_state_response(
    requester_id: str,
    state: RoundState,
    question: Optional[Question] = None,
    question_index: Optional[int] = None,
    time_limit: Optional[int] = None,
    correct_answer_index: Optional[int] = None,
    answer_counts: Optional[List[int]] = None,
    leaderboard: Optional[List[LeaderboardEntry]] = None,
) -> StateResponse:
    """Build the StateResponse for the current round state."""
    fields = {"requester_id": requester_id, "game_state": WIRE_STATES[state]}

    if state in (RoundState.ADVANCING, RoundState.AWAITING_ANSWERS):
        fields.update(_question_fields(question, question_index, time_limit))
    elif state == RoundState.SHOWING_RESULTS:
        fields.update(_question_fields(question, question_index, time_limit))
        fields.update(_results_fields(correct_answer_index, answer_counts))
    elif state in (RoundState.SHOWING_LEADERBOARD, RoundState.ENDED):
        fields["show_leaderboard"] = True
        fields["leaderboard_data"] = list(leaderboard or [])

    return StateResponse(**fields)


def _question_fields(
    question: Optional[Question], question_index: Optional[int], time_limit: Optional[int]
) -> dict:
    """Fields describing the question on screen; empty before the first one."""
    if question is None:
        return {}
    return {
        "current_question": question,
        "question_index": question_index,
        "time_limit": time_limit,
    }


def _results_fields(correct_answer_index: Optional[int], answer_counts: Optional[List[int]]) -> dict:
    return {
        "show_leaderboard": False,
        "correct_answer_index": correct_answer_index,
        "answer_counts": list(answer_counts) if answer_counts is not None else None,
    }
