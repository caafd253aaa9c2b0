# Area: Core
"""
trivia_session._core.roster — Player roster
===========================================

Tracks who is in the session, who has opted out of answering, who has
answered the current question (and with which choice), and who holds
the host role.

Every operation is total: an id never seen before is simply absent.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from ..host import LOCAL_PLAYER_ID, PlayerId

logger = logging.getLogger("trivia_session.roster")


class PlayerRoster:
    """
    Per-session player bookkeeping.

    ``present`` keeps join order (a dict used as an ordered set) so that
    host promotion and device retries are deterministic.

    Attributes:
        local_player_id: Reserved id of the non-networked fallback client
    """

    def __init__(self, local_player_id: PlayerId = LOCAL_PLAYER_ID):
        self.local_player_id = local_player_id
        self._present: Dict[PlayerId, None] = {}
        self._opted_out: Dict[PlayerId, None] = {}
        self._answered: Dict[PlayerId, None] = {}
        self._answer_choice: Dict[PlayerId, int] = {}
        self._host: Optional[PlayerId] = None

    # ── Presence ─────────────────────────────────────────────

    def set_present(self, players: Iterable[PlayerId]) -> None:
        """
        Replace the present set wholesale.

        Used on periodic resync. Opt-outs, answers and the host are left
        untouched; departures must still go through remove_player().
        """
        self._present = {pid: None for pid in players}
        logger.debug("Presence resynced: %d players", len(self._present))

    def add_player(self, player_id: PlayerId) -> None:
        """Mark a player as present. No-op if already present."""
        if player_id not in self._present:
            self._present[player_id] = None
            logger.info("Player joined: %s", player_id)

    def is_present(self, player_id: PlayerId) -> bool:
        return player_id in self._present

    def list_present_ids(self) -> List[PlayerId]:
        return list(self._present)

    def remove_player(self, player_id: PlayerId) -> None:
        """Purge a departing player from every set and mapping."""
        self._present.pop(player_id, None)
        self._opted_out.pop(player_id, None)
        self._answered.pop(player_id, None)
        self._answer_choice.pop(player_id, None)
        if self._host == player_id:
            self._host = None
            logger.info("Host %s left; host slot cleared", player_id)
        logger.info("Player removed: %s", player_id)

    # ── Opt-out ──────────────────────────────────────────────

    def opt_out(self, player_id: PlayerId) -> Optional[int]:
        """
        Withdraw a player from answering until they rejoin.

        Args:
            player_id: The player opting out

        Returns:
            The answer index discarded from the current question, so the
            caller can decrement its tally, or None if there was none
        """
        self._opted_out[player_id] = None
        removed: Optional[int] = None
        if player_id in self._answered:
            del self._answered[player_id]
            removed = self._answer_choice.pop(player_id, None)
        return removed

    def rejoin(self, player_id: PlayerId) -> None:
        self._opted_out.pop(player_id, None)

    def is_opted_out(self, player_id: PlayerId) -> bool:
        return player_id in self._opted_out

    # ── Answers ──────────────────────────────────────────────

    def record_answer(self, player_id: PlayerId, choice_index: Optional[int] = None) -> bool:
        """
        Record that a player answered the current question.

        Answers from absent or opted-out players are dropped. The local
        fallback id bypasses the opt-out check only.

        Returns:
            True if the answer was recorded
        """
        if player_id not in self._present:
            logger.debug("Answer from absent player %s dropped", player_id)
            return False
        if player_id in self._opted_out and player_id != self.local_player_id:
            logger.debug("Answer from opted-out player %s dropped", player_id)
            return False
        self._answered[player_id] = None
        if choice_index is not None:
            self._answer_choice[player_id] = choice_index
        return True

    def has_answered(self, player_id: PlayerId) -> bool:
        return player_id in self._answered

    def answer_choice(self, player_id: PlayerId) -> Optional[int]:
        return self._answer_choice.get(player_id)

    def answer_choices(self) -> Dict[PlayerId, int]:
        return dict(self._answer_choice)

    def clear_round(self) -> None:
        """Forget the current question's answers. Opt-outs and host survive."""
        self._answered.clear()
        self._answer_choice.clear()

    # ── Host ─────────────────────────────────────────────────

    def set_host(self, player_id: PlayerId) -> bool:
        """
        Make a player the host, replacing any previous host.

        Last call wins. The player must be present; otherwise the host
        slot is left unchanged.

        Returns:
            True if the host was set
        """
        if player_id not in self._present:
            logger.warning("Refusing host for absent player %s", player_id)
            return False
        previous, self._host = self._host, player_id
        if previous != player_id:
            logger.info("Host changed: %s -> %s", previous, player_id)
        return True

    def clear_host(self) -> None:
        self._host = None

    def is_host(self, player_id: PlayerId) -> bool:
        return self._host is not None and self._host == player_id

    def get_host(self) -> Optional[PlayerId]:
        return self._host

    # ── Derived reads ────────────────────────────────────────

    def count(self) -> int:
        return len(self._present)

    def active_players(self) -> List[PlayerId]:
        """Present players who have not opted out, in join order."""
        return [pid for pid in self._present if pid not in self._opted_out]

    def active_count(self) -> int:
        return len(self.active_players())

    def answered_count(self) -> int:
        return len(self._answered)

    def present_players(self) -> List[PlayerId]:
        return list(self._present)

    def answered_players(self) -> List[PlayerId]:
        return list(self._answered)

    def opted_out_players(self) -> List[PlayerId]:
        return list(self._opted_out)

    def stats(self) -> Dict[str, object]:
        """Counts for debugging displays."""
        return {
            "total_players": self.count(),
            "active_players": self.active_count(),
            "opted_out_players": len(self._opted_out),
            "answered_players": len(self._answered),
            "host_id": self._host,
        }

    def reset(self) -> None:
        """Drop all roster state."""
        self._present.clear()
        self._opted_out.clear()
        self._answered.clear()
        self._answer_choice.clear()
        self._host = None
