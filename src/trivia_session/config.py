# Area: Shared
"""
trivia_session.config — Session configuration
=============================================

Defaults, JSON config file, then environment overrides (a ``.env``
file in the working directory is loaded first).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger("trivia_session.config")

DEFAULT_CONFIG: Dict[str, Any] = {
    "question_time_limit_sec": 30,
    "results_display_sec": 5,
    "auto_advance_sec": 5,
    "final_leaderboard_delay_sec": 2,
    "timer_tick_ms": 1000,
    "leaderboard_name": "TriviaScore",
    "local_player_id": "local",
    "log_file": "trivia_session.log",
    "db_path": None,
    "questions_path": None,
    "leaderboard_size": 5,
}

# Environment variable -> config key
ENV_MAPPINGS = {
    "TRIVIA_QUESTION_TIME_LIMIT_SEC": "question_time_limit_sec",
    "TRIVIA_RESULTS_DISPLAY_SEC": "results_display_sec",
    "TRIVIA_AUTO_ADVANCE_SEC": "auto_advance_sec",
    "TRIVIA_FINAL_LEADERBOARD_DELAY_SEC": "final_leaderboard_delay_sec",
    "TRIVIA_TIMER_TICK_MS": "timer_tick_ms",
    "TRIVIA_LEADERBOARD_NAME": "leaderboard_name",
    "TRIVIA_LOG_FILE": "log_file",
    "TRIVIA_DB_PATH": "db_path",
    "TRIVIA_QUESTIONS_PATH": "questions_path",
}

NUMERIC_KEYS = {
    "question_time_limit_sec",
    "results_display_sec",
    "auto_advance_sec",
    "final_leaderboard_delay_sec",
    "timer_tick_ms",
    "leaderboard_size",
}

# Keys that must be strictly positive; the rest may be zero
POSITIVE_KEYS = {"question_time_limit_sec", "timer_tick_ms", "leaderboard_size"}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load config from defaults, an optional JSON file, and the environment.

    Args:
        config_path: Path to a JSON config file; skipped if it does not exist

    Returns:
        Validated config dict

    Raises:
        ConfigError: If the file is malformed or a value is invalid
    """
    load_dotenv()
    config: Dict[str, Any] = dict(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    config.update(json.load(f))
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc
        else:
            logger.warning(f"Config file not found: {path}")

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            value: Any = os.environ[env_key]
            if config_key in NUMERIC_KEYS:
                try:
                    value = int(value)
                except ValueError as exc:
                    raise ConfigError(f"{env_key} must be an integer, got {value!r}") from exc
            config[config_key] = value

    validate_config(config)
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Check every known key has a usable value.

    Raises:
        ConfigError: On the first invalid value
    """
    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {unknown}")

    for key in NUMERIC_KEYS:
        value = config.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{key} must be a number, got {value!r}")
        if key in POSITIVE_KEYS and value <= 0:
            raise ConfigError(f"{key} must be positive, got {value}")
        if value < 0:
            raise ConfigError(f"{key} must not be negative, got {value}")

    if not config.get("leaderboard_name"):
        raise ConfigError("leaderboard_name must not be empty")
