# Area: Core
"""
In-memory state managers for one trivia session.

This package contains:
- Player roster (presence, opt-outs, answers, host)
- Scoreboard and answer scoring policy
- Tracked timeouts and cooperative timer backends
- Phone device assignment
"""

from .devices import DeviceAssignmentManager, DeviceRecord
from .roster import PlayerRoster
from .scoreboard import ScoreBoard
from .timeouts import TimeoutRegistry
from .timer_backends import PollingTimerBackend, VirtualTimerBackend

__all__ = [
    "DeviceAssignmentManager",
    "DeviceRecord",
    "PlayerRoster",
    "ScoreBoard",
    "TimeoutRegistry",
    "PollingTimerBackend",
    "VirtualTimerBackend",
]
