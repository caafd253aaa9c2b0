# Area: Session
"""
trivia_session.session — Session object
=======================================

One TriviaSession owns every manager for a single game world. There are
no module-level singletons: create as many sessions as there are
worlds.

Usage:
    backend = PollingTimerBackend()
    session = TriviaSession.create(load_config(), backend)
    session.coordinator.on_player_joined("p1", "Ada")
    ...
    backend.run_due()   # from the platform's update loop
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ._core.devices import DeviceAssignmentManager
from ._core.roster import PlayerRoster
from ._core.scoreboard import ScoreBoard
from ._core.timeouts import TimeoutRegistry
from ._events.bus import EventBus
from ._events.catalog import GameSettings, Question
from ._session.coordinator import SessionCoordinator
from ._store.repo_leaderboard import SqliteLeaderboardStore
from .config import DEFAULT_CONFIG, validate_config
from .host import DeviceController, DeviceId, LeaderboardStore, TimerBackend
from .questions import load_questions

logger = logging.getLogger("trivia_session.session")


@dataclass
class TriviaSession:
    """Every manager of one session, wired together."""
    config: Dict[str, Any]
    bus: EventBus
    roster: PlayerRoster
    scoreboard: ScoreBoard
    timeouts: TimeoutRegistry
    devices: DeviceAssignmentManager
    coordinator: SessionCoordinator
    leaderboard_store: Optional[LeaderboardStore] = None

    @classmethod
    def create(
        cls,
        config: Optional[Dict[str, Any]],
        timer_backend: TimerBackend,
        leaderboard_store: Optional[LeaderboardStore] = None,
        device_controller: Optional[DeviceController] = None,
        questions: Optional[Sequence[Question]] = None,
        device_ids: Sequence[DeviceId] = (),
        rng: Optional[random.Random] = None,
    ) -> "TriviaSession":
        """
        Build a session from config.

        Args:
            config: Session config; missing keys take their defaults
            timer_backend: Platform timer used for every delayed callback
            leaderboard_store: Persistent leaderboard; when omitted and
                ``db_path`` is configured, a SQLite store is opened
            device_controller: Hooks for showing/hiding phone entities
            questions: Question bank; when omitted it is loaded from
                ``questions_path`` if configured
            device_ids: Phones to register in the pool
            rng: Random source (seed it for reproducible games)

        Raises:
            ConfigError: If the config or the question file is invalid
        """
        config = {**DEFAULT_CONFIG, **(config or {})}
        validate_config(config)

        if leaderboard_store is None and config.get("db_path"):
            leaderboard_store = SqliteLeaderboardStore(config["db_path"])

        bank: List[Question] = list(questions or [])
        if not bank and config.get("questions_path"):
            bank = load_questions(config["questions_path"])

        bus = EventBus()
        roster = PlayerRoster(local_player_id=config["local_player_id"])
        scoreboard = ScoreBoard()
        timeouts = TimeoutRegistry(timer_backend)
        devices = DeviceAssignmentManager(presence=roster, controller=device_controller)
        for device_id in device_ids:
            devices.register_device(device_id)

        coordinator = SessionCoordinator(
            bus=bus,
            roster=roster,
            scoreboard=scoreboard,
            timeouts=timeouts,
            devices=devices,
            config=config,
            leaderboard_store=leaderboard_store,
            question_bank=bank,
            settings=GameSettings(time_limit=config["question_time_limit_sec"]),
            rng=rng,
        )
        logger.info(f"Session created: {len(bank)} questions, {devices.total_count()} devices")
        return cls(
            config=config,
            bus=bus,
            roster=roster,
            scoreboard=scoreboard,
            timeouts=timeouts,
            devices=devices,
            coordinator=coordinator,
            leaderboard_store=leaderboard_store,
        )

    def close(self) -> None:
        """Stop the coordinator and cancel every pending timeout."""
        self.coordinator.close()
