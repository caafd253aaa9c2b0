# Area: Events
"""
trivia_session._events.catalog — Broadcast event catalog
========================================================

The closed set of broadcast messages exchanged between the session
coordinator and the display components (phones, world boards).

Each event is an immutable pydantic model with a unique wire name.
Field names are snake_case in Python and camelCase on the wire, so a
payload from a display component validates as-is.
"""

from __future__ import annotations

from typing import ClassVar, Dict, List, Literal, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..errors import EventValidationError, UnknownEventError

GameState = Literal["waiting", "playing", "results", "leaderboard", "ended"]
ViewMode = Literal["pre-game", "game-settings"]


class WireModel(BaseModel):
    """Base for everything that travels in an event payload."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    def to_payload(self) -> dict:
        """Serialise with wire (camelCase) names, dropping unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ══════════════════════════════════════════════════════════════
# PAYLOAD TYPES
# ══════════════════════════════════════════════════════════════


class AnswerOption(WireModel):
    text: str
    correct: bool = False


class Question(WireModel):
    """A trivia question as sent to displays."""
    id: int
    question: str
    category: str = "General"
    difficulty: str = "easy"
    image: Optional[str] = None
    answers: List[AnswerOption] = Field(min_length=1)


class LeaderboardEntry(WireModel):
    name: str
    score: int
    player_id: str


class Modifiers(WireModel):
    auto_advance: bool = False
    power_ups: bool = False
    bonus_rounds: bool = False


class GameSettings(WireModel):
    """Host-editable game configuration."""
    number_of_questions: int = Field(default=5, ge=1)
    category: str = "Italian Brainrot Quiz"
    difficulty: str = "medium"
    time_limit: int = Field(default=30, ge=1)
    timer_type: str = "normal"
    difficulty_type: str = "medium"
    is_locked: bool = True
    modifiers: Modifiers = Field(default_factory=Modifiers)


# ══════════════════════════════════════════════════════════════
# EVENTS
# ══════════════════════════════════════════════════════════════


class TriviaEvent(WireModel):
    """Base class of every broadcast event."""
    event_name: ClassVar[str] = ""


class QuestionShow(TriviaEvent):
    event_name: ClassVar[str] = "triviaQuestionShow"
    question: Question
    question_index: int = Field(ge=0)
    time_limit: int = Field(ge=1)


class TwoOptions(TriviaEvent):
    event_name: ClassVar[str] = "triviaTwoOptions"
    question: Question
    question_index: int = Field(ge=0)
    time_limit: int = Field(ge=1)
    total_questions: int = Field(ge=1)


class FourOptions(TriviaEvent):
    event_name: ClassVar[str] = "triviaFourOptions"
    question: Question
    question_index: int = Field(ge=0)
    time_limit: int = Field(ge=1)
    total_questions: int = Field(ge=1)


class Results(TriviaEvent):
    event_name: ClassVar[str] = "triviaResults"
    question: Question
    correct_answer_index: int
    answer_counts: List[int]
    scores: Dict[str, int]
    show_leaderboard: Optional[bool] = None
    leaderboard_data: Optional[List[LeaderboardEntry]] = None


class AnswerSubmitted(TriviaEvent):
    event_name: ClassVar[str] = "triviaAnswerSubmitted"
    player_id: str
    answer_index: int = Field(ge=0)
    response_time: float = Field(ge=0)


class GameStart(TriviaEvent):
    event_name: ClassVar[str] = "triviaGameStart"
    host_id: str
    config: GameSettings


class NextQuestion(TriviaEvent):
    event_name: ClassVar[str] = "triviaNextQuestion"
    player_id: str


class GameRegistered(TriviaEvent):
    event_name: ClassVar[str] = "triviaGameRegistered"
    is_running: bool
    has_questions: bool


class GameEnd(TriviaEvent):
    event_name: ClassVar[str] = "triviaGameEnd"
    host_id: str
    final_leaderboard: Optional[List[LeaderboardEntry]] = None


class GameReset(TriviaEvent):
    event_name: ClassVar[str] = "triviaGameReset"
    host_id: str


class AwardPoints(TriviaEvent):
    event_name: ClassVar[str] = "triviaAwardPoints"
    player_id: str
    points: int


class LeaderboardScoreUpdate(TriviaEvent):
    event_name: ClassVar[str] = "leaderboardScoreUpdate"
    player_id: str
    score: int
    leaderboard_name: str


class PlayerUpdate(TriviaEvent):
    event_name: ClassVar[str] = "triviaPlayerUpdate"
    players_in_world: List[str]
    players_answered: List[str]
    answer_count: int = Field(ge=0)


class PlayerLogout(TriviaEvent):
    event_name: ClassVar[str] = "triviaPlayerLogout"
    player_id: str


class PlayerRejoin(TriviaEvent):
    event_name: ClassVar[str] = "triviaPlayerRejoin"
    player_id: str


class HostChanged(TriviaEvent):
    event_name: ClassVar[str] = "hostChanged"
    new_host_id: str
    old_host_id: Optional[str] = None


class HostViewMode(TriviaEvent):
    event_name: ClassVar[str] = "hostViewMode"
    host_id: str
    view_mode: ViewMode


class SettingsUpdate(TriviaEvent):
    event_name: ClassVar[str] = "triviaSettingsUpdate"
    host_id: str
    settings: GameSettings


class StateRequest(TriviaEvent):
    event_name: ClassVar[str] = "triviaStateRequest"
    requester_id: str


class StateResponse(TriviaEvent):
    event_name: ClassVar[str] = "triviaStateResponse"
    requester_id: str
    game_state: GameState
    current_question: Optional[Question] = None
    question_index: Optional[int] = None
    time_limit: Optional[int] = None
    show_leaderboard: Optional[bool] = None
    leaderboard_data: Optional[List[LeaderboardEntry]] = None
    correct_answer_index: Optional[int] = None
    answer_counts: Optional[List[int]] = None


class TimerUpdate(TriviaEvent):
    event_name: ClassVar[str] = "triviaTimerUpdate"
    time_remaining: int = Field(ge=0)
    question_index: int = Field(ge=0)


class TimerEnd(TriviaEvent):
    event_name: ClassVar[str] = "triviaTimerEnd"
    question_index: int = Field(ge=0)


class UiState(TriviaEvent):
    event_name: ClassVar[str] = "triviaUIState"
    show_config: bool
    show_results: bool
    show_waiting: bool
    show_leaderboard: bool
    show_error: bool
    error_message: Optional[str] = None


# ══════════════════════════════════════════════════════════════
# REGISTRY
# ══════════════════════════════════════════════════════════════

_EVENT_TYPES: Tuple[Type[TriviaEvent], ...] = (
    QuestionShow, TwoOptions, FourOptions, Results, AnswerSubmitted,
    GameStart, NextQuestion, GameRegistered, GameEnd, GameReset,
    AwardPoints, LeaderboardScoreUpdate, PlayerUpdate, PlayerLogout,
    PlayerRejoin, HostChanged, HostViewMode, SettingsUpdate,
    StateRequest, StateResponse, TimerUpdate, TimerEnd, UiState,
)

EVENT_CATALOG: Dict[str, Type[TriviaEvent]] = {cls.event_name: cls for cls in _EVENT_TYPES}

if len(EVENT_CATALOG) != len(_EVENT_TYPES):
    raise RuntimeError("Duplicate event names in catalog")


def event_model(event_name: str) -> Type[TriviaEvent]:
    """Look up the model class for a wire name."""
    model = EVENT_CATALOG.get(event_name)
    if model is None:
        raise UnknownEventError(event_name)
    return model


def parse_event(event_name: str, payload: dict) -> TriviaEvent:
    """
    Validate a raw payload against the named event's schema.

    Raises:
        UnknownEventError: If the name is not in the catalog
        EventValidationError: If the payload does not match the schema
    """
    model = event_model(event_name)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise EventValidationError(event_name, payload, errors) from exc
