"""
trivia_session — Multiplayer trivia session core
================================================

In-memory state for a trivia minigame hosted inside a multiplayer
world: who is playing, who is host, who answered what, scores,
leaderboards, phone assignment and the timed round protocol. The host
engine is reached only through the small capability protocols in
``trivia_session.host``.

Quick Start:
    from trivia_session import TriviaSession, PollingTimerBackend, load_config

    backend = PollingTimerBackend()
    session = TriviaSession.create(load_config(), backend, questions=bank)
    session.bus.subscribe("triviaQuestionShow", render_question)

    session.coordinator.on_player_joined("p1", "Ada")
    session.coordinator.start_game("p1")
    backend.run_due()   # call from the platform update loop

Demo:
    python -m trivia_session --demo
"""

from ._core import (
    DeviceAssignmentManager,
    DeviceRecord,
    PlayerRoster,
    PollingTimerBackend,
    ScoreBoard,
    TimeoutRegistry,
    VirtualTimerBackend,
)
from ._events import (
    EVENT_CATALOG,
    EventBus,
    GameSettings,
    LeaderboardEntry,
    Question,
    Subscription,
    TriviaEvent,
    event_model,
    parse_event,
)
from ._session import RoundEvent, RoundState, RoundStateMachine, SessionCoordinator
from ._shared.logging_config import setup_logging
from ._store import SqliteLeaderboardStore
from .config import DEFAULT_CONFIG, load_config, validate_config
from .errors import (
    ConfigError,
    EventValidationError,
    InvalidTransitionError,
    TriviaSessionError,
    UnknownEventError,
)
from .host import (
    LOCAL_PLAYER_ID,
    DeviceController,
    LeaderboardStore,
    PlayerRef,
    PresenceSource,
    TimerBackend,
)
from .questions import load_questions, select_questions, shuffle_answers
from .session import TriviaSession

__version__ = "1.0.0"

__all__ = [
    # Session
    "TriviaSession",
    "SessionCoordinator",
    "RoundState",
    "RoundEvent",
    "RoundStateMachine",
    # Managers
    "PlayerRoster",
    "ScoreBoard",
    "TimeoutRegistry",
    "DeviceAssignmentManager",
    "DeviceRecord",
    "PollingTimerBackend",
    "VirtualTimerBackend",
    # Events
    "EventBus",
    "Subscription",
    "EVENT_CATALOG",
    "TriviaEvent",
    "GameSettings",
    "LeaderboardEntry",
    "Question",
    "event_model",
    "parse_event",
    # Host capabilities
    "LOCAL_PLAYER_ID",
    "PlayerRef",
    "PresenceSource",
    "TimerBackend",
    "LeaderboardStore",
    "DeviceController",
    # Storage
    "SqliteLeaderboardStore",
    # Questions
    "load_questions",
    "select_questions",
    "shuffle_answers",
    # Config & logging
    "DEFAULT_CONFIG",
    "load_config",
    "validate_config",
    "setup_logging",
    # Errors
    "TriviaSessionError",
    "UnknownEventError",
    "EventValidationError",
    "InvalidTransitionError",
    "ConfigError",
]
