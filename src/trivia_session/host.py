# Area: Shared
"""
trivia_session.host — Host platform capability interfaces
=========================================================

The core never touches engine entities or player objects. Everything it
needs from the host world is expressed as one of these small protocols,
keyed by opaque player and device identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, List, Optional, Protocol, Union

PlayerId = Union[str, int]
DeviceId = Hashable
TimerHandle = Any

# Non-networked fallback client; bypasses opt-out when answering.
LOCAL_PLAYER_ID = "local"


@dataclass(frozen=True)
class PlayerRef:
    """A player identifier paired with a display name."""
    player_id: PlayerId
    name: str


class PresenceSource(Protocol):
    """Anything that can list the players currently in the session."""

    def list_present_ids(self) -> List[PlayerId]:
        ...


class TimerBackend(Protocol):
    """The platform's delayed-callback primitive."""

    def set_timeout(self, callback: Callable[[], None], delay_ms: float) -> TimerHandle:
        ...

    def clear_timeout(self, handle: TimerHandle) -> None:
        ...


class LeaderboardStore(Protocol):
    """Persistent/global leaderboard the platform exposes."""

    def set_score_for_player(
        self,
        leaderboard_name: str,
        player_id: PlayerId,
        score: int,
        overwrite: bool,
    ) -> None:
        ...


class DeviceController(Protocol):
    """Ownership and visibility hooks for a physical device entity."""

    def show_for(self, device_id: DeviceId, player_id: PlayerId) -> None:
        ...

    def hide(self, device_id: DeviceId) -> None:
        ...


def player_key(player_id: Optional[PlayerId]) -> Optional[str]:
    """Normalise an id to the string form used on the wire."""
    if player_id is None:
        return None
    return str(player_id)
