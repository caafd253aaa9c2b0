# Area: Core
"""
trivia_session._core.timer_backends — Cooperative timer backends
================================================================

Single-threaded implementations of the TimerBackend protocol. Nothing
fires on its own: the owner polls run_due() (real clock) or advance()
(virtual clock), so callbacks always run on the caller's thread.
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger("trivia_session.timers")


class PollingTimerBackend:
    """
    Timer backend driven by periodic polling.

    Each timeout stores the clock reading at which it becomes due.
    Clock units are seconds, as returned by time.monotonic().
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._timers: Dict[int, Tuple[float, int, Callable[[], None]]] = {}
        self._ids = itertools.count(1)

    def set_timeout(self, callback: Callable[[], None], delay_ms: float) -> int:
        """Schedule a callback; return its handle."""
        handle = next(self._ids)
        due_at = self._clock() + max(delay_ms, 0) / 1000.0
        self._timers[handle] = (due_at, handle, callback)
        return handle

    def clear_timeout(self, handle: int) -> None:
        """Cancel a timeout. No-op if it already fired or is unknown."""
        self._timers.pop(handle, None)

    def pending(self) -> int:
        return len(self._timers)

    def next_due_in_ms(self) -> Optional[float]:
        """Milliseconds until the earliest timeout, or None if idle."""
        if not self._timers:
            return None
        due_at = min(entry[0] for entry in self._timers.values())
        return max(0.0, (due_at - self._clock()) * 1000.0)

    def _pop_next_due(self, now: float) -> Optional[Callable[[], None]]:
        if not self._timers:
            return None
        due_at, handle, callback = min(self._timers.values())
        if due_at > now:
            return None
        del self._timers[handle]
        return callback

    def run_due(self) -> int:
        """
        Fire every timeout that is due, earliest first.

        Callbacks may schedule further timeouts; those fire in the same
        call if they are already due.

        Returns:
            Number of callbacks fired
        """
        fired = 0
        while True:
            callback = self._pop_next_due(self._clock())
            if callback is None:
                return fired
            callback()
            fired += 1


class VirtualTimerBackend(PollingTimerBackend):
    """Polling backend on a virtual clock that only moves via advance()."""

    def __init__(self) -> None:
        self._now = 0.0
        super().__init__(clock=lambda: self._now)

    @property
    def now_ms(self) -> float:
        return self._now * 1000.0

    def advance(self, ms: float) -> int:
        """
        Move the clock forward, firing timeouts in due order.

        The clock is set to each timeout's due time before it fires, so
        timeouts scheduled from a callback are measured from that point.

        Returns:
            Number of callbacks fired
        """
        target = self._now + ms / 1000.0
        fired = 0
        while self._timers:
            due_at, handle, callback = min(self._timers.values())
            if due_at > target:
                break
            del self._timers[handle]
            self._now = max(self._now, due_at)
            callback()
            fired += 1
        self._now = target
        return fired
