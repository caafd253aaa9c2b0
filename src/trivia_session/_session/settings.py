# Area: Session
"""
trivia_session._session.settings — Host-editable game settings
==============================================================

Partial settings updates from the host's settings screen are merged
onto the current GameSettings and re-validated as a whole.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .._events.catalog import GameSettings, Modifiers
from ..errors import EventValidationError

logger = logging.getLogger("trivia_session.settings")


def merge_settings(current: GameSettings, changes: Dict[str, Any]) -> GameSettings:
    """
    Apply a partial update to the current settings.

    ``changes`` may use either snake_case or wire (camelCase) keys.
    The ``modifiers`` sub-dict is merged key by key.

    Raises:
        EventValidationError: If the merged settings are invalid
    """
    merged = current.model_dump()
    aliases = {info.alias: name for name, info in GameSettings.model_fields.items() if info.alias}

    for key, value in changes.items():
        name = aliases.get(key, key)
        if name == "modifiers" and isinstance(value, dict):
            modifiers = dict(merged["modifiers"])
            modifiers.update(_snake_keys(value))
            merged["modifiers"] = modifiers
        else:
            merged[name] = value

    try:
        return GameSettings.model_validate(merged)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        raise EventValidationError("triviaSettingsUpdate", dict(changes), errors) from exc


def settings_change_refusal(
    current: GameSettings, changes: Dict[str, Any], game_running: bool
) -> Optional[str]:
    """
    Reason a settings change must be refused, or None if it is allowed.

    Settings are frozen while a game runs. When locked, the only change
    accepted is the one that unlocks them.
    """
    if game_running:
        return "game in progress"
    if current.is_locked:
        unlock = changes.get("is_locked", changes.get("isLocked"))
        if unlock is not False:
            return "settings are locked"
    return None


def _snake_keys(values: Dict[str, Any]) -> Dict[str, Any]:
    """Map wire names of Modifiers fields back to attribute names."""
    aliases = {info.alias: name for name, info in Modifiers.model_fields.items() if info.alias}
    return {aliases.get(key, key): value for key, value in values.items()}
