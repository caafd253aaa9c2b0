# Area: Shared Tests
"""Tests for config loading."""

import json
from unittest.mock import patch

import pytest

from trivia_session.config import DEFAULT_CONFIG, ENV_MAPPINGS, load_config, validate_config
from trivia_session.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """No stray TRIVIA_* variables or .env file."""
    for env_key in ENV_MAPPINGS:
        monkeypatch.delenv(env_key, raising=False)
    with patch("trivia_session.config.load_dotenv"):
        yield


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self):
        assert load_config() == DEFAULT_CONFIG

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"results_display_sec": 3, "leaderboard_name": "Weekly"}))
        config = load_config(str(path))
        assert config["results_display_sec"] == 3
        assert config["leaderboard_name"] == "Weekly"
        assert config["question_time_limit_sec"] == 30

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"timer_tick_ms": 500}))
        monkeypatch.setenv("TRIVIA_TIMER_TICK_MS", "250")
        monkeypatch.setenv("TRIVIA_LEADERBOARD_NAME", "EnvBoard")
        config = load_config(str(path))
        assert config["timer_tick_ms"] == 250
        assert config["leaderboard_name"] == "EnvBoard"

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "nope.json")) == DEFAULT_CONFIG

    def test_bad_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_non_integer_env(self, monkeypatch):
        monkeypatch.setenv("TRIVIA_RESULTS_DISPLAY_SEC", "soon")
        with pytest.raises(ConfigError):
            load_config()

    def test_loads_dotenv(self):
        with patch("trivia_session.config.load_dotenv") as mock_load:
            load_config()
        mock_load.assert_called_once()


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_zero_delay_allowed(self):
        validate_config({**DEFAULT_CONFIG, "auto_advance_sec": 0})

    @pytest.mark.parametrize("key,value", [
        ("question_time_limit_sec", 0),
        ("timer_tick_ms", -5),
        ("results_display_sec", -1),
        ("leaderboard_size", "5"),
        ("auto_advance_sec", True),
    ])
    def test_rejects_bad_numbers(self, key, value):
        with pytest.raises(ConfigError):
            validate_config({**DEFAULT_CONFIG, key: value})

    def test_rejects_empty_leaderboard_name(self):
        with pytest.raises(ConfigError):
            validate_config({**DEFAULT_CONFIG, "leaderboard_name": ""})

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_config({**DEFAULT_CONFIG, "timer_tick_ms": 0})
