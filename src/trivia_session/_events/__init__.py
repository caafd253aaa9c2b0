# Area: Events
"""
Broadcast events: the typed catalog and the in-process bus.
"""

from .bus import EventBus, Subscription
from .catalog import (
    EVENT_CATALOG,
    AnswerOption,
    AnswerSubmitted,
    AwardPoints,
    FourOptions,
    GameEnd,
    GameRegistered,
    GameReset,
    GameSettings,
    GameStart,
    HostChanged,
    HostViewMode,
    LeaderboardEntry,
    LeaderboardScoreUpdate,
    Modifiers,
    NextQuestion,
    PlayerLogout,
    PlayerRejoin,
    PlayerUpdate,
    Question,
    QuestionShow,
    Results,
    SettingsUpdate,
    StateRequest,
    StateResponse,
    TimerEnd,
    TimerUpdate,
    TriviaEvent,
    TwoOptions,
    UiState,
    event_model,
    parse_event,
)

__all__ = [
    "EventBus",
    "Subscription",
    "EVENT_CATALOG",
    "AnswerOption",
    "AnswerSubmitted",
    "AwardPoints",
    "FourOptions",
    "GameEnd",
    "GameRegistered",
    "GameReset",
    "GameSettings",
    "GameStart",
    "HostChanged",
    "HostViewMode",
    "LeaderboardEntry",
    "LeaderboardScoreUpdate",
    "Modifiers",
    "NextQuestion",
    "PlayerLogout",
    "PlayerRejoin",
    "PlayerUpdate",
    "Question",
    "QuestionShow",
    "Results",
    "SettingsUpdate",
    "StateRequest",
    "StateResponse",
    "TimerEnd",
    "TimerUpdate",
    "TriviaEvent",
    "TwoOptions",
    "UiState",
    "event_model",
    "parse_event",
]
