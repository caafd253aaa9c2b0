# Area: Core
"""
trivia_session._core.devices — Phone assignment
===============================================

Keeps a fixed pool of in-world phone devices and hands at most one to
each present player. Running out of devices is a normal outcome: the
player stays unassigned until a later release frees one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from ..host import DeviceController, DeviceId, PlayerId, PresenceSource

logger = logging.getLogger("trivia_session.devices")


@dataclass
class DeviceRecord:
    """One pooled device and who holds it."""
    device_id: DeviceId
    assigned_player: Optional[PlayerId] = None
    in_use: bool = False


class DeviceAssignmentManager:
    """
    Assigns pooled devices to players.

    Args:
        presence: Source of present player ids, used when retrying
            players who are still waiting for a device
        controller: Optional hooks that show/hide the device entity
    """

    def __init__(
        self,
        presence: PresenceSource,
        controller: Optional[DeviceController] = None,
    ):
        self._presence = presence
        self._controller = controller
        self._devices: List[DeviceRecord] = []

    def register_device(self, device_id: DeviceId) -> None:
        """Add a new unassigned device to the pool."""
        if self._find_device(device_id) is not None:
            logger.debug("Device %s already registered", device_id)
            return
        self._devices.append(DeviceRecord(device_id=device_id))
        self._hide(device_id)

    def assign(self, player_id: PlayerId) -> Optional[DeviceId]:
        """
        Give a player a device.

        Returns:
            The player's device id (existing or newly assigned), or None
            if the pool is exhausted
        """
        existing = self._find_player(player_id)
        if existing is not None:
            existing.in_use = True
            self._show(existing.device_id, player_id)
            return existing.device_id

        for record in self._devices:
            if not record.in_use:
                if record.assigned_player is not None:
                    logger.info("Device %s taken over from %s", record.device_id, record.assigned_player)
                record.assigned_player = player_id
                record.in_use = True
                self._show(record.device_id, player_id)
                logger.info("Device %s assigned to %s", record.device_id, player_id)
                return record.device_id

        logger.warning("No free device for player %s", player_id)
        return None

    def release(self, player_id: PlayerId) -> None:
        """Return a player's device to the pool. No-op if they have none."""
        record = self._find_player(player_id)
        if record is None:
            return
        record.assigned_player = None
        record.in_use = False
        self._hide(record.device_id)
        logger.info("Device %s released by %s", record.device_id, player_id)

    def release_by_device(self, device_id: DeviceId) -> None:
        """
        Mark a device as no longer in use, then retry waiting players.

        Only the in-use flag changes. The device stays recorded against
        its player until a waiting player takes it over.
        """
        record = self._find_device(device_id)
        if record is None or not record.in_use:
            return
        record.in_use = False
        self.assign_waiting()

    def assign_waiting(self) -> List[Tuple[PlayerId, DeviceId]]:
        """Try to assign a device to every present player without one."""
        made: List[Tuple[PlayerId, DeviceId]] = []
        for player_id in self._presence.list_present_ids():
            if self._find_player(player_id) is not None:
                continue
            device_id = self.assign(player_id)
            if device_id is None:
                break
            made.append((player_id, device_id))
        return made

    def refresh_all(self) -> None:
        """Release every device and reassign present players in order."""
        for record in self._devices:
            if record.assigned_player is not None:
                record.assigned_player = None
                record.in_use = False
                self._hide(record.device_id)
        self.assign_waiting()

    def lookup(self, player_id: PlayerId) -> Optional[DeviceId]:
        record = self._find_player(player_id)
        return record.device_id if record is not None else None

    def available_count(self) -> int:
        return sum(1 for record in self._devices if not record.in_use)

    def total_count(self) -> int:
        return len(self._devices)

    def assignments(self) -> List[DeviceRecord]:
        """Copies of every device record, in registration order."""
        return [replace(record) for record in self._devices]

    # ── Internals ────────────────────────────────────────────

    def _find_player(self, player_id: PlayerId) -> Optional[DeviceRecord]:
        for record in self._devices:
            if record.assigned_player is not None and record.assigned_player == player_id:
                return record
        return None

    def _find_device(self, device_id: DeviceId) -> Optional[DeviceRecord]:
        for record in self._devices:
            if record.device_id == device_id:
                return record
        return None

    def _show(self, device_id: DeviceId, player_id: PlayerId) -> None:
        if self._controller is None:
            return
        try:
            self._controller.show_for(device_id, player_id)
        except Exception:
            logger.error("Could not hand device %s to %s", device_id, player_id, exc_info=True)

    def _hide(self, device_id: DeviceId) -> None:
        if self._controller is None:
            return
        try:
            self._controller.hide(device_id)
        except Exception:
            logger.error("Could not hide device %s", device_id, exc_info=True)
