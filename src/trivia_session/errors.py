"""
trivia_session.errors — Custom exception classes
================================================

Defines the exception hierarchy for the trivia session core.

The state managers never raise for unknown players or exhausted device
capacity; those are ordinary outcomes. Exceptions are reserved for
malformed events at the publish boundary, invalid round transitions,
and bad configuration.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class TriviaSessionError(Exception):
    """Base exception for all trivia_session errors."""
    pass


class UnknownEventError(TriviaSessionError):
    """Raised when an event name is not part of the catalog."""

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(f"Unknown event '{event_name}'")


class EventValidationError(TriviaSessionError):
    """Raised when an event payload fails schema validation."""

    def __init__(
        self,
        event_name: str,
        payload: Dict[str, Any],
        validation_errors: List[str],
    ):
        self.event_name = event_name
        self.payload = payload
        self.validation_errors = validation_errors
        super().__init__(
            f"Event '{event_name}' payload failed validation: {validation_errors}"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="EVENT_VALIDATION_FAILURE",
            event_name=self.event_name,
            payload=self.payload,
            validation_errors=self.validation_errors,
        )


class InvalidTransitionError(TriviaSessionError, ValueError):
    """Raised when the round state machine receives an invalid event."""

    def __init__(self, event: str, state: str):
        self.event = event
        self.state = state
        super().__init__(f"Invalid transition: {event} from {state}")


class ConfigError(TriviaSessionError, ValueError):
    """Raised when session configuration is invalid."""
    pass


def _format_error_block(
    error_type: str,
    event_name: str,
    payload: Optional[Dict[str, Any]],
    validation_errors: Optional[List[str]],
) -> str:
    """Format a structured error block for the log."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " EVENT ERROR — PUBLISH REJECTED",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Event:        {event_name}",
    ]

    if payload is not None:
        lines.append("")
        lines.append(" ── PAYLOAD " + "─" * 52)
        lines.append(_indent_json(payload))

    if validation_errors:
        lines.append("")
        lines.append(" ── VALIDATION ERRORS " + "─" * 42)
        for error in validation_errors:
            lines.append(f" • {error}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
