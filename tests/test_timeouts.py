# Area: Core Tests
"""Tests for TimeoutRegistry and the cooperative timer backends."""

from unittest.mock import Mock

import pytest

from trivia_session._core.timeouts import TimeoutRegistry
from trivia_session._core.timer_backends import PollingTimerBackend, VirtualTimerBackend


class TestVirtualTimerBackend:
    """Tests for the virtual clock backend."""

    def test_fires_in_due_order(self):
        backend = VirtualTimerBackend()
        fired = []
        backend.set_timeout(lambda: fired.append("late"), 300)
        backend.set_timeout(lambda: fired.append("early"), 100)
        backend.set_timeout(lambda: fired.append("middle"), 200)

        assert backend.advance(1000) == 3
        assert fired == ["early", "middle", "late"]

    def test_not_due_yet(self):
        backend = VirtualTimerBackend()
        callback = Mock()
        backend.set_timeout(callback, 500)
        backend.advance(499)
        callback.assert_not_called()
        backend.advance(1)
        callback.assert_called_once()

    def test_chained_timeout_measured_from_fire_time(self):
        backend = VirtualTimerBackend()
        times = []

        def first():
            times.append(backend.now_ms)
            backend.set_timeout(lambda: times.append(backend.now_ms), 100)

        backend.set_timeout(first, 100)
        backend.advance(250)
        assert times == [100.0, 200.0]
        assert backend.now_ms == 250.0

    def test_clear_timeout(self):
        backend = VirtualTimerBackend()
        callback = Mock()
        handle = backend.set_timeout(callback, 10)
        backend.clear_timeout(handle)
        backend.clear_timeout(handle)
        backend.advance(100)
        callback.assert_not_called()
        assert backend.pending() == 0

    def test_next_due_in_ms(self):
        backend = VirtualTimerBackend()
        assert backend.next_due_in_ms() is None
        backend.set_timeout(Mock(), 300)
        backend.advance(100)
        assert backend.next_due_in_ms() == pytest.approx(200.0)


class TestPollingTimerBackend:
    """Tests for the real-clock polling backend."""

    def test_run_due_uses_clock(self):
        now = [10.0]
        backend = PollingTimerBackend(clock=lambda: now[0])
        callback = Mock()
        backend.set_timeout(callback, 1500)

        assert backend.run_due() == 0
        now[0] = 11.5
        assert backend.run_due() == 1
        callback.assert_called_once()

    def test_run_due_fires_newly_due_callbacks(self):
        backend = PollingTimerBackend(clock=lambda: 0.0)
        fired = []
        backend.set_timeout(lambda: backend.set_timeout(lambda: fired.append(2), 0), 0)
        assert backend.run_due() == 2
        assert fired == [2]


class TestTimeoutRegistry:
    """Tests for tracked, bulk-cancellable timeouts."""

    def test_schedule_tracks_until_fired(self):
        backend = VirtualTimerBackend()
        registry = TimeoutRegistry(backend)
        callback = Mock()
        registry.schedule(callback, 100)
        assert registry.pending_count() == 1

        backend.advance(100)

        callback.assert_called_once()
        assert registry.pending_count() == 0

    def test_cancel_single(self):
        backend = VirtualTimerBackend()
        registry = TimeoutRegistry(backend)
        callback = Mock()
        handle = registry.schedule(callback, 100)

        assert registry.cancel(handle) is True
        assert registry.cancel(handle) is False
        backend.advance(500)
        callback.assert_not_called()

    def test_cancel_all_on_empty_registry(self):
        registry = TimeoutRegistry(VirtualTimerBackend())
        registry.cancel_all()
        assert registry.pending_count() == 0

    def test_cancel_all_stops_chained_round_timers(self):
        """question -> results -> next question; cancel after the first fires."""
        backend = VirtualTimerBackend()
        registry = TimeoutRegistry(backend)
        fired = []

        def next_question():
            fired.append("next")

        def results():
            fired.append("results")
            registry.schedule(next_question, 5000)

        def question_over():
            fired.append("question_over")
            registry.schedule(results, 5000)

        registry.schedule(question_over, 30000)
        backend.advance(30000)
        assert fired == ["question_over"]

        registry.cancel_all()
        backend.advance(60000)

        assert fired == ["question_over"]
        assert backend.pending() == 0

    def test_cancel_all_from_inside_callback(self):
        backend = VirtualTimerBackend()
        registry = TimeoutRegistry(backend)
        later = Mock()

        def abort():
            registry.cancel_all()

        registry.schedule(abort, 100)
        registry.schedule(later, 200)
        backend.advance(1000)
        later.assert_not_called()

    def test_stale_backend_fire_is_ignored(self):
        """A backend that cannot cancel still never runs a cancelled callback."""
        backend = Mock()
        backend.set_timeout.side_effect = lambda cb, ms: cb
        registry = TimeoutRegistry(backend)
        callback = Mock()
        registry.schedule(callback, 100)
        fire = backend.set_timeout.call_args[0][0]

        registry.cancel_all()
        fire()

        callback.assert_not_called()
