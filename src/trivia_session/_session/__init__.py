# Area: Session
"""
Round protocol for one trivia session.

This package contains:
- Round state machine (states, events, transitions)
- Game settings merging and lock rules
- Late-joiner state snapshots
- The session coordinator
"""

from .coordinator import SessionCoordinator
from .enums import RoundEvent, RoundState
from .settings import merge_settings, settings_change_refusal
from .state_machine import RoundStateMachine
from .state_sync import build_state_response

__all__ = [
    "SessionCoordinator",
    "RoundEvent",
    "RoundState",
    "RoundStateMachine",
    "merge_settings",
    "settings_change_refusal",
    "build_state_response",
]
