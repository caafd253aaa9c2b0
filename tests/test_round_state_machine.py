# Area: Session Tests
"""Tests for the round state machine."""

import pytest

from trivia_session._session.enums import RoundEvent, RoundState
from trivia_session._session.state_machine import TRANSITIONS, RoundStateMachine
from trivia_session.errors import InvalidTransitionError


class TestRoundStateMachineBase:
    """Tests for basic state machine functionality."""

    def test_initial_state_is_waiting(self):
        sm = RoundStateMachine()
        assert sm.current_state == RoundState.WAITING
        assert sm.wire_state == "waiting"
        assert sm.is_running is False

    def test_can_transition(self):
        sm = RoundStateMachine()
        assert sm.can_transition(RoundEvent.GAME_START) is True
        assert sm.can_transition(RoundEvent.ANSWERS_CLOSED) is False

    def test_invalid_transition_raises_value_error(self):
        sm = RoundStateMachine()
        with pytest.raises(ValueError):
            sm.transition(RoundEvent.ADVANCE)
        with pytest.raises(InvalidTransitionError) as exc_info:
            sm.transition(RoundEvent.ADVANCE)
        assert exc_info.value.state == "WAITING"
        assert exc_info.value.event == "ADVANCE"

    def test_every_state_has_an_entry(self):
        assert set(TRANSITIONS) == set(RoundState)


class TestRoundStateMachineTransitions:
    """Tests for specific state transitions."""

    def test_full_round_cycle(self):
        sm = RoundStateMachine()
        sm.transition(RoundEvent.GAME_START)
        assert sm.current_state == RoundState.ADVANCING

        sm.transition(RoundEvent.QUESTION_SHOWN)
        assert sm.current_state == RoundState.AWAITING_ANSWERS
        assert sm.wire_state == "playing"
        assert sm.is_running is True

        sm.transition(RoundEvent.ANSWERS_CLOSED)
        assert sm.wire_state == "results"

        sm.transition(RoundEvent.RESULTS_ELAPSED)
        assert sm.wire_state == "leaderboard"

        sm.transition(RoundEvent.ADVANCE)
        assert sm.current_state == RoundState.ADVANCING

        sm.transition(RoundEvent.QUESTIONS_EXHAUSTED)
        assert sm.current_state == RoundState.ENDED
        assert sm.is_running is False

    def test_restart_after_end(self):
        sm = RoundStateMachine()
        sm.transition(RoundEvent.GAME_START)
        sm.transition(RoundEvent.QUESTIONS_EXHAUSTED)
        sm.transition(RoundEvent.GAME_START)
        assert sm.current_state == RoundState.ADVANCING

    @pytest.mark.parametrize("events", [
        [],
        [RoundEvent.GAME_START],
        [RoundEvent.GAME_START, RoundEvent.QUESTION_SHOWN],
        [RoundEvent.GAME_START, RoundEvent.QUESTION_SHOWN, RoundEvent.ANSWERS_CLOSED],
    ])
    def test_abort_from_any_state(self, events):
        sm = RoundStateMachine()
        for event in events:
            sm.transition(event)
        sm.abort()
        assert sm.current_state == RoundState.WAITING

    def test_reset(self):
        sm = RoundStateMachine()
        sm.transition(RoundEvent.GAME_START)
        sm.reset()
        assert sm.current_state == RoundState.WAITING
