# Area: Session
"""
trivia_session._session.state_machine — Round state machine
===========================================================

Tracks where the session is in the question → results → leaderboard
cycle. Timer callbacks check the current state before acting, so a
stale timer can never push the session forward.
"""

import logging
from typing import Dict

from ..errors import InvalidTransitionError
from .enums import RoundEvent, RoundState

logger = logging.getLogger("trivia_session.state_machine")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS: Dict[RoundState, Dict[RoundEvent, RoundState]] = {
    RoundState.WAITING: {
        RoundEvent.GAME_START: RoundState.ADVANCING,
    },
    RoundState.ADVANCING: {
        RoundEvent.QUESTION_SHOWN: RoundState.AWAITING_ANSWERS,
        RoundEvent.QUESTIONS_EXHAUSTED: RoundState.ENDED,
    },
    RoundState.AWAITING_ANSWERS: {
        RoundEvent.ANSWERS_CLOSED: RoundState.SHOWING_RESULTS,
    },
    RoundState.SHOWING_RESULTS: {
        RoundEvent.RESULTS_ELAPSED: RoundState.SHOWING_LEADERBOARD,
    },
    RoundState.SHOWING_LEADERBOARD: {
        RoundEvent.ADVANCE: RoundState.ADVANCING,
    },
    RoundState.ENDED: {
        RoundEvent.GAME_START: RoundState.ADVANCING,
    },
}

# State name as reported to display components
WIRE_STATES: Dict[RoundState, str] = {
    RoundState.WAITING: "waiting",
    RoundState.ADVANCING: "playing",
    RoundState.AWAITING_ANSWERS: "playing",
    RoundState.SHOWING_RESULTS: "results",
    RoundState.SHOWING_LEADERBOARD: "leaderboard",
    RoundState.ENDED: "ended",
}


class RoundStateMachine:
    """
    State machine for one trivia game.

    Attributes:
        current_state: The current state of the state machine
    """

    def __init__(self):
        """Initialize state machine in WAITING."""
        self.current_state = RoundState.WAITING

    def can_transition(self, event: RoundEvent) -> bool:
        """
        Check if a transition is valid from current state.

        Args:
            event: The event to check

        Returns:
            True if the transition is valid, False otherwise
        """
        return event in TRANSITIONS.get(self.current_state, {})

    def transition(self, event: RoundEvent) -> RoundState:
        """
        Execute a state transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new state after transition

        Raises:
            InvalidTransitionError: If the transition is not valid
        """
        if not self.can_transition(event):
            raise InvalidTransitionError(event.value, self.current_state.value)

        previous = self.current_state
        self.current_state = TRANSITIONS[previous][event]
        logger.debug(f"{previous.value} --{event.value}--> {self.current_state.value}")
        return self.current_state

    def abort(self) -> None:
        """Drop back to WAITING from any state."""
        if self.current_state != RoundState.WAITING:
            logger.info(f"Aborted from {self.current_state.value}")
        self.current_state = RoundState.WAITING

    def reset(self) -> None:
        """Reset state machine to initial state."""
        self.current_state = RoundState.WAITING

    @property
    def is_running(self) -> bool:
        """True between a game start and its end or abort."""
        return self.current_state not in (RoundState.WAITING, RoundState.ENDED)

    @property
    def wire_state(self) -> str:
        return WIRE_STATES[self.current_state]
