# Area: Session
"""
trivia_session._session.coordinator — Round protocol
====================================================

Ties the roster, scoreboard, timeouts and device pool together and
drives one trivia game through the round state machine:

    join/leave → start → question → answers → results → leaderboard
    → next question ... → final leaderboard → game end

Every outbound message is a catalog event published on the bus. The
coordinator also listens on the bus for the events display components
send (answers, next-question, settings, ...), so a phone can drive the
game without a direct reference to it.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Callable, Dict, List, Optional, Sequence

from .._core.devices import DeviceAssignmentManager
from .._core.roster import PlayerRoster
from .._core.scoreboard import ScoreBoard
from .._core.timeouts import TimeoutRegistry
from .._events.bus import EventBus, Subscription
from .._events.catalog import (
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
)
from ..config import DEFAULT_CONFIG
from ..errors import EventValidationError
from ..host import LeaderboardStore, PlayerId, PlayerRef, player_key
from ..questions import correct_index, select_questions, shuffle_answers
from .enums import RoundEvent, RoundState
from .settings import merge_settings, settings_change_refusal
from .state_machine import RoundStateMachine
from .state_sync import build_state_response

logger = logging.getLogger("trivia_session.coordinator")


class SessionCoordinator:
    """
    Runs the trivia round protocol for one session.

    Args:
        bus: Event bus used for every inbound and outbound event
        roster: Player roster
        scoreboard: Score keeping
        timeouts: Tracked timeouts on the platform timer
        devices: Phone pool
        config: Session config (see trivia_session.config)
        leaderboard_store: Optional persistent leaderboard mirror
        question_bank: Questions available to start_game()
        settings: Initial game settings
        rng: Random source for question selection and shuffling
    """

    def __init__(
        self,
        bus: EventBus,
        roster: PlayerRoster,
        scoreboard: ScoreBoard,
        timeouts: TimeoutRegistry,
        devices: DeviceAssignmentManager,
        config: Optional[Dict[str, Any]] = None,
        leaderboard_store: Optional[LeaderboardStore] = None,
        question_bank: Optional[Sequence[Question]] = None,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.bus = bus
        self.roster = roster
        self.scoreboard = scoreboard
        self.timeouts = timeouts
        self.devices = devices
        self.config = {**DEFAULT_CONFIG, **(config or {})}
        self.leaderboard_store = leaderboard_store
        self.question_bank: List[Question] = list(question_bank or [])
        self.settings = settings or GameSettings(time_limit=self.config["question_time_limit_sec"])
        self.rng = rng or random.Random()
        self.state_machine = RoundStateMachine()
        self.host_view_mode = "pre-game"

        self._names: Dict[PlayerId, str] = {}
        self._questions: List[Question] = []
        self._question_index = -1
        self._answer_counts: List[int] = []
        self._time_remaining = 0
        self._remaining_ms = 0
        self._tick_handle: Optional[int] = None

        self._own_events: Dict[int, TriviaEvent] = {}
        self._subscriptions: List[Subscription] = []
        self._register_handlers()

    # ── Bus wiring ───────────────────────────────────────────

    def _register_handlers(self) -> None:
        sub = self._subscribe
        sub(AnswerSubmitted, lambda e: self.on_answer_submitted(
            self._resolve(e.player_id), e.answer_index, e.response_time))
        sub(NextQuestion, lambda e: self.request_next_question(self._resolve(e.player_id)))
        sub(StateRequest, lambda e: self.handle_state_request(e.requester_id))
        sub(GameStart, self._on_game_start_event)
        # Inbound copies are already on the bus; handlers must not re-broadcast them
        sub(SettingsUpdate, lambda e: self.update_settings(
            self._resolve(e.host_id), e.settings.model_dump(), broadcast=False))
        sub(PlayerLogout, lambda e: self.opt_out(self._resolve(e.player_id), broadcast=False))
        sub(PlayerRejoin, lambda e: self.rejoin(self._resolve(e.player_id), broadcast=False))
        sub(GameReset, lambda e: self.reset_game(self._resolve(e.host_id), broadcast=False))
        sub(HostViewMode, lambda e: self.set_host_view_mode(
            self._resolve(e.host_id), e.view_mode, broadcast=False))

    def _on_game_start_event(self, event: GameStart) -> None:
        """A host phone started the game with its own settings."""
        host = self._resolve(event.host_id)
        if self.roster.is_host(host) and not self.state_machine.is_running:
            self.settings = event.config
        self.start_game(host, broadcast=False)

    def _subscribe(self, model: type, handler: Callable[[Any], None]) -> None:
        def _inbound(event: TriviaEvent) -> None:
            if self._own_events.pop(id(event), None) is event:
                return
            handler(event)

        self._subscriptions.append(self.bus.subscribe(model.event_name, _inbound))

    def close(self) -> None:
        """Detach from the bus and cancel every pending timeout."""
        for subscription in self._subscriptions:
            self.bus.unsubscribe(subscription)
        self._subscriptions.clear()
        self._own_events.clear()
        self.timeouts.cancel_all()

    def _publish(self, event: TriviaEvent) -> TriviaEvent:
        if any(s.event_name == event.event_name for s in self._subscriptions):
            self._own_events[id(event)] = event
        return self.bus.publish(event)

    def _resolve(self, key: str) -> PlayerId:
        """Map a wire id back to the roster's id (which may be an int)."""
        for player_id in self.roster.present_players():
            if player_key(player_id) == key:
                return player_id
        return key

    # ── Presence ─────────────────────────────────────────────

    def on_player_joined(self, player_id: PlayerId, name: Optional[str] = None) -> None:
        """A player entered the world."""
        self._names[player_id] = name or str(player_id)
        self.roster.add_player(player_id)
        if self.roster.get_host() is None:
            self._change_host(player_id)
        self.devices.assign(player_id)
        self._publish_player_update()

    def on_player_left(self, player_id: PlayerId) -> None:
        """A player left the world."""
        was_host = self.roster.is_host(player_id)
        self.roster.remove_player(player_id)
        self._names.pop(player_id, None)
        self.devices.release(player_id)
        self.devices.assign_waiting()
        if was_host:
            self._promote_host(old_host=player_id)
        self._publish_player_update()
        self._close_if_all_answered()

    def resync_presence(self, player_ids: Sequence[PlayerId]) -> None:
        """Replace the present set from a periodic platform listing."""
        self.roster.set_present(player_ids)
        for player_id in player_ids:
            self._names.setdefault(player_id, str(player_id))
        host = self.roster.get_host()
        if host is not None and not self.roster.is_present(host):
            self.roster.clear_host()
            self._promote_host(old_host=host)
        elif host is None:
            self._promote_host(old_host=None)
        self.devices.assign_waiting()
        self._publish_player_update()

    def _promote_host(self, old_host: Optional[PlayerId]) -> None:
        present = self.roster.present_players()
        if not present:
            logger.info("No players left to take over as host")
            return
        self._change_host(present[0], old_host=old_host)

    def _change_host(self, new_host: PlayerId, old_host: Optional[PlayerId] = None) -> None:
        if self.roster.set_host(new_host):
            self._publish(HostChanged(new_host_id=player_key(new_host), old_host_id=player_key(old_host)))

    def _publish_player_update(self) -> None:
        self._publish(PlayerUpdate(
            players_in_world=[player_key(p) for p in self.roster.present_players()],
            players_answered=[player_key(p) for p in self.roster.answered_players()],
            answer_count=self.roster.answered_count(),
        ))

    # ── Opt-out ──────────────────────────────────────────────

    def opt_out(self, player_id: PlayerId, broadcast: bool = True) -> None:
        """Withdraw a player from answering; their current answer no longer counts."""
        removed = self.roster.opt_out(player_id)
        if removed is not None and 0 <= removed < len(self._answer_counts):
            self._answer_counts[removed] -= 1
        logger.info(f"Player {player_id} opted out")
        if broadcast:
            self._publish(PlayerLogout(player_id=player_key(player_id)))
        self._publish_player_update()
        self._close_if_all_answered()

    def rejoin(self, player_id: PlayerId, broadcast: bool = True) -> None:
        self.roster.rejoin(player_id)
        logger.info(f"Player {player_id} rejoined")
        if broadcast:
            self._publish(PlayerRejoin(player_id=player_key(player_id)))

    # ── Game lifecycle ───────────────────────────────────────

    def announce(self) -> GameRegistered:
        """Tell display components a game controller exists."""
        return self._publish(GameRegistered(
            is_running=self.state_machine.is_running,
            has_questions=bool(self.question_bank),
        ))

    def start_game(
        self,
        requester_id: PlayerId,
        questions: Optional[Sequence[Question]] = None,
        broadcast: bool = True,
    ) -> bool:
        """
        Start a game. Host only, and not while one is running.

        Args:
            requester_id: Player asking to start
            questions: Explicit questions; defaults to a selection from
                the bank that matches the current settings
            broadcast: Publish GameStart; off when the start arrived
                from the bus

        Returns:
            True if the game started
        """
        if not self._require_host(requester_id, "start the game"):
            return False
        if self.state_machine.is_running:
            logger.warning("Start ignored: a game is already running")
            return False

        if questions is None:
            questions = select_questions(
                self.question_bank,
                self.settings.category,
                self.settings.difficulty,
                self.settings.number_of_questions,
                self.rng,
            )
        if not questions:
            logger.warning("Start ignored: no questions available")
            return False

        self.timeouts.cancel_all()
        self.scoreboard.reset()
        self.roster.clear_round()
        self._questions = [shuffle_answers(q, self.rng) for q in questions]
        self._question_index = -1

        self.state_machine.transition(RoundEvent.GAME_START)
        logger.info(f"Game started by {requester_id} with {len(self._questions)} questions")
        if broadcast:
            self._publish(GameStart(host_id=player_key(requester_id), config=self.settings))
        self._show_next_question()
        return True

    def request_next_question(self, requester_id: PlayerId) -> bool:
        """Host pressed next while the leaderboard is showing."""
        if not self._require_host(requester_id, "advance"):
            return False
        if self.state_machine.current_state != RoundState.SHOWING_LEADERBOARD:
            logger.warning(f"Next ignored in state {self.state_machine.current_state.value}")
            return False
        self._advance()
        return True

    def reset_game(self, requester_id: PlayerId, broadcast: bool = True) -> bool:
        """Host aborted the game."""
        if not self._require_host(requester_id, "reset the game"):
            return False
        self.abort()
        if broadcast:
            self._publish(GameReset(host_id=player_key(requester_id)))
        return True

    def abort(self) -> None:
        """Cancel every timer and drop all round and score state."""
        self.timeouts.cancel_all()
        self._tick_handle = None
        self.roster.clear_round()
        self.scoreboard.reset()
        self.state_machine.abort()
        self._questions = []
        self._question_index = -1
        self._answer_counts = []
        self._publish_ui_state()

    def _require_host(self, requester_id: PlayerId, action: str) -> bool:
        if self.roster.is_host(requester_id):
            return True
        logger.warning(f"Player {requester_id} tried to {action} but is not the host")
        return False

    # ── Questions ────────────────────────────────────────────

    @property
    def current_question(self) -> Optional[Question]:
        if 0 <= self._question_index < len(self._questions):
            return self._questions[self._question_index]
        return None

    @property
    def question_index(self) -> int:
        return self._question_index

    @property
    def answer_counts(self) -> List[int]:
        return list(self._answer_counts)

    @property
    def time_remaining(self) -> int:
        return self._time_remaining

    def _show_next_question(self) -> None:
        index = self._question_index + 1
        if index >= len(self._questions):
            self.state_machine.transition(RoundEvent.QUESTIONS_EXHAUSTED)
            self._end_game()
            return

        self._question_index = index
        question = self._questions[index]
        time_limit = self.settings.time_limit
        self.roster.clear_round()
        self._answer_counts = [0] * len(question.answers)
        self._time_remaining = time_limit
        self._remaining_ms = time_limit * 1000
        self.state_machine.transition(RoundEvent.QUESTION_SHOWN)
        logger.info(f"Question {index + 1}/{len(self._questions)}: {question.question}")

        self._publish(QuestionShow(question=question, question_index=index, time_limit=time_limit))
        options_event = TwoOptions if len(question.answers) <= 2 else FourOptions
        self._publish(options_event(
            question=question,
            question_index=index,
            time_limit=time_limit,
            total_questions=len(self._questions),
        ))
        self._publish_ui_state()
        self._publish_player_update()
        self._schedule_tick(index)

    def _schedule_tick(self, index: int) -> None:
        delay_ms = min(self.config["timer_tick_ms"], self._remaining_ms)
        self._tick_handle = self.timeouts.schedule(
            lambda: self._on_tick(index, delay_ms), delay_ms
        )

    def _on_tick(self, index: int, elapsed_ms: float) -> None:
        if not self._is_current(RoundState.AWAITING_ANSWERS, index):
            return
        self._remaining_ms = max(0, self._remaining_ms - elapsed_ms)
        seconds = math.ceil(self._remaining_ms / 1000)
        # TimerUpdate counts whole seconds, however fine the tick
        if seconds != self._time_remaining:
            self._time_remaining = seconds
            self._publish(TimerUpdate(time_remaining=seconds, question_index=index))
        if self._remaining_ms > 0:
            self._schedule_tick(index)
            return
        self._tick_handle = None
        self._publish(TimerEnd(question_index=index))
        self._close_answers()

    def _is_current(self, state: RoundState, index: int) -> bool:
        """A timer callback only acts if the round it was scheduled for is still on."""
        return self.state_machine.current_state == state and self._question_index == index

    # ── Answers ──────────────────────────────────────────────

    def on_answer_submitted(self, player_id: PlayerId, answer_index: int, response_time_ms: float) -> bool:
        """
        Record a player's answer to the current question.

        Only the first answer per player per question counts.

        Returns:
            True if the answer was accepted
        """
        if self.state_machine.current_state != RoundState.AWAITING_ANSWERS:
            logger.debug(f"Answer from {player_id} outside answering window")
            return False
        if self.roster.has_answered(player_id):
            return False
        question = self.current_question
        if not 0 <= answer_index < len(question.answers):
            logger.warning(f"Answer index {answer_index} out of range from {player_id}")
            return False
        if not self.roster.record_answer(player_id, answer_index):
            return False

        self._answer_counts[answer_index] += 1
        points = self.scoreboard.compute_answer_points(
            answer_index == correct_index(question),
            response_time_ms,
            self.settings.time_limit * 1000,
        )
        if points > 0:
            self._award(player_id, points)

        self._publish_player_update()
        self._close_if_all_answered()
        return True

    def _award(self, player_id: PlayerId, points: int) -> None:
        total = self.scoreboard.add_points(player_id, points)
        leaderboard_name = self.config["leaderboard_name"]
        self._publish(AwardPoints(player_id=player_key(player_id), points=points))
        self._publish(LeaderboardScoreUpdate(
            player_id=player_key(player_id), score=total, leaderboard_name=leaderboard_name,
        ))
        if self.leaderboard_store is None:
            return
        try:
            self.leaderboard_store.set_score_for_player(leaderboard_name, player_id, total, True)
        except Exception:
            logger.error(f"Could not store score for {player_id}", exc_info=True)

    def _close_if_all_answered(self) -> None:
        if self.state_machine.current_state != RoundState.AWAITING_ANSWERS:
            return
        active = self.roster.active_players()
        if active and all(self.roster.has_answered(p) for p in active):
            logger.info("All active players answered")
            self._close_answers()

    def _close_answers(self) -> None:
        if self._tick_handle is not None:
            self.timeouts.cancel(self._tick_handle)
            self._tick_handle = None
        self.state_machine.transition(RoundEvent.ANSWERS_CLOSED)
        self._publish(self._results())
        self._publish_ui_state()
        index = self._question_index
        self.timeouts.schedule(
            lambda: self._on_results_elapsed(index),
            self.config["results_display_sec"] * 1000,
        )

    # ── Results & leaderboard ────────────────────────────────

    def leaderboard(self) -> List[LeaderboardEntry]:
        """Top players among those present."""
        refs = [PlayerRef(p, self._names.get(p, str(p))) for p in self.roster.present_players()]
        return self.scoreboard.top_n(refs, self.config["leaderboard_size"])

    def _results(self, show_leaderboard: bool = False) -> Results:
        question = self.current_question
        fields: Dict[str, Any] = {
            "question": question,
            "correct_answer_index": correct_index(question),
            "answer_counts": list(self._answer_counts),
            "scores": {player_key(p): self.scoreboard.get_score(p) for p in self.roster.present_players()},
        }
        if show_leaderboard:
            fields["show_leaderboard"] = True
            fields["leaderboard_data"] = self.leaderboard()
        return Results(**fields)

    def _on_results_elapsed(self, index: int) -> None:
        if not self._is_current(RoundState.SHOWING_RESULTS, index):
            return
        self.state_machine.transition(RoundEvent.RESULTS_ELAPSED)
        self._publish(self._results(show_leaderboard=True))
        self._publish_ui_state()
        if self.settings.modifiers.auto_advance:
            self.timeouts.schedule(
                lambda: self._on_auto_advance(index),
                self.config["auto_advance_sec"] * 1000,
            )

    def _on_auto_advance(self, index: int) -> None:
        if not self._is_current(RoundState.SHOWING_LEADERBOARD, index):
            return
        self._advance()

    def _advance(self) -> None:
        self.timeouts.cancel_all()
        self.state_machine.transition(RoundEvent.ADVANCE)
        self._show_next_question()

    def _end_game(self) -> None:
        logger.info("Questions exhausted; game over")
        self._publish_ui_state()
        self.timeouts.schedule(self._on_final_delay, self.config["final_leaderboard_delay_sec"] * 1000)

    def _on_final_delay(self) -> None:
        if self.state_machine.current_state != RoundState.ENDED:
            return
        final = self.leaderboard()
        if self.current_question is not None:
            self._publish(self._results(show_leaderboard=True))
        host = self.roster.get_host()
        self._publish(GameEnd(host_id=player_key(host) or "", final_leaderboard=final))
        logger.info(f"Final leaderboard: {[(e.name, e.score) for e in final]}")

    # ── Settings & host view ─────────────────────────────────

    def update_settings(self, requester_id: PlayerId, changes: Dict[str, Any], broadcast: bool = True) -> bool:
        """Apply a partial settings change from the host."""
        if not self._require_host(requester_id, "change settings"):
            return False
        refusal = settings_change_refusal(self.settings, changes, self.state_machine.is_running)
        if refusal:
            logger.warning(f"Settings change refused: {refusal}")
            return False
        try:
            self.settings = merge_settings(self.settings, changes)
        except EventValidationError as exc:
            logger.warning(exc.format_error_log())
            return False
        if broadcast:
            self._publish(SettingsUpdate(host_id=player_key(requester_id), settings=self.settings))
        return True

    def set_host_view_mode(self, requester_id: PlayerId, view_mode: str, broadcast: bool = True) -> bool:
        """Switch the host's screen between the lobby and the settings page."""
        if not self._require_host(requester_id, "switch view"):
            return False
        self.host_view_mode = view_mode
        if broadcast:
            self._publish(HostViewMode(host_id=player_key(requester_id), view_mode=view_mode))
        return True

    # ── State sync ───────────────────────────────────────────

    def handle_state_request(self, requester_id: str) -> StateResponse:
        """Answer a late joiner's request for the current screen."""
        question = self.current_question
        return self._publish(build_state_response(
            requester_id=player_key(requester_id),
            state=self.state_machine.current_state,
            question=question,
            question_index=self._question_index if question is not None else None,
            time_limit=self._time_remaining if question is not None else None,
            correct_answer_index=correct_index(question) if question is not None else None,
            answer_counts=self._answer_counts,
            leaderboard=self.leaderboard(),
        ))

    def _publish_ui_state(self) -> None:
        state = self.state_machine.current_state
        self._publish(UiState(
            show_config=state == RoundState.WAITING,
            show_results=state == RoundState.SHOWING_RESULTS,
            show_waiting=state == RoundState.AWAITING_ANSWERS,
            show_leaderboard=state in (RoundState.SHOWING_LEADERBOARD, RoundState.ENDED),
            show_error=False,
        ))
