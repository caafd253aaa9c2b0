# Area: Core
"""
trivia_session._core.timeouts — Tracked timeouts
================================================

Wraps the platform timer so every outstanding callback can be cancelled
in one call at a round or session boundary. A timer leaked past a reset
would otherwise fire into freshly reset state.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Dict

from ..host import TimerBackend

logger = logging.getLogger("trivia_session.timeouts")


class TimeoutRegistry:
    """
    Tracks scheduled callbacks so they can be bulk-cancelled.

    Handles returned by schedule() are registry-owned integers; the
    backend's own handles stay private. A callback untracks itself
    before running.
    """

    def __init__(self, backend: TimerBackend) -> None:
        self._backend = backend
        self._pending: Dict[int, Any] = {}
        self._ids = itertools.count(1)

    def schedule(self, callback: Callable[[], None], delay_ms: float) -> int:
        """Schedule a callback after delay_ms; return a handle."""
        handle = next(self._ids)

        def _fire() -> None:
            if handle not in self._pending:
                return
            del self._pending[handle]
            callback()

        self._pending[handle] = self._backend.set_timeout(_fire, delay_ms)
        return handle

    def cancel(self, handle: int) -> bool:
        """Cancel one timeout. Returns False if it already fired or was cancelled."""
        if handle not in self._pending:
            return False
        backend_handle = self._pending.pop(handle)
        self._backend.clear_timeout(backend_handle)
        return True

    def cancel_all(self) -> None:
        """Cancel every tracked timeout. Safe with nothing pending."""
        if self._pending:
            logger.debug("Cancelling %d pending timeouts", len(self._pending))
        for backend_handle in self._pending.values():
            self._backend.clear_timeout(backend_handle)
        self._pending.clear()

    def pending_count(self) -> int:
        return len(self._pending)
