# Area: Core Tests
"""Tests for DeviceAssignmentManager."""

from unittest.mock import Mock

from trivia_session._core.devices import DeviceAssignmentManager
from trivia_session._core.roster import PlayerRoster


def _manager(devices=("d1", "d2"), players=(), controller=None):
    roster = PlayerRoster()
    for player in players:
        roster.add_player(player)
    manager = DeviceAssignmentManager(presence=roster, controller=controller)
    for device in devices:
        manager.register_device(device)
    return manager, roster


class TestAssign:
    """Tests for handing out devices."""

    def test_distinct_players_get_distinct_devices(self):
        manager, _ = _manager(players=("a", "b"))
        first = manager.assign("a")
        second = manager.assign("b")
        assert {first, second} == {"d1", "d2"}

    def test_assign_is_idempotent(self):
        manager, _ = _manager(players=("a",))
        assert manager.assign("a") == manager.assign("a")
        assert manager.available_count() == 1

    def test_exhausted_pool_returns_none(self, caplog):
        manager, _ = _manager(devices=("d1",), players=("a", "b"))
        manager.assign("a")
        assert manager.assign("b") is None
        assert "No free device" in caplog.text

    def test_release_allows_reuse(self):
        manager, _ = _manager(devices=("d1",), players=("a", "b"))
        device = manager.assign("a")
        manager.release("a")
        assert manager.lookup("a") is None
        assert manager.assign("b") == device

    def test_release_unknown_player_is_noop(self):
        manager, _ = _manager()
        manager.release("ghost")
        assert manager.available_count() == 2

    def test_duplicate_register_ignored(self):
        manager, _ = _manager(devices=("d1", "d1"))
        assert manager.total_count() == 1

    def test_record_invariant(self):
        manager, _ = _manager(players=("a",))
        manager.assign("a")
        manager.release("a")
        for record in manager.assignments():
            if record.assigned_player is None:
                assert record.in_use is False


class TestWaitingPlayers:
    """Tests for retrying players left without a device."""

    def test_assign_waiting_after_player_leaves(self):
        manager, roster = _manager(devices=("d1", "d2"), players=("a", "b", "c"))
        manager.assign("a")
        manager.assign("b")
        assert manager.assign("c") is None

        roster.remove_player("a")
        manager.release("a")
        made = manager.assign_waiting()

        assert made == [("c", "d1")]
        assert manager.lookup("c") == "d1"

    def test_release_by_device_keeps_owner_without_waiters(self):
        manager, _ = _manager(devices=("d1",), players=("a",))
        manager.assign("a")
        manager.release_by_device("d1")

        record = manager.assignments()[0]
        assert record.assigned_player == "a"
        assert record.in_use is False
        assert manager.available_count() == 1

    def test_release_by_device_hands_device_to_waiting_player(self):
        manager, _ = _manager(devices=("d1",), players=("a", "b"))
        manager.assign("a")
        assert manager.assign("b") is None

        manager.release_by_device("d1")

        assert manager.lookup("b") == "d1"
        assert manager.lookup("a") is None
        assert manager.available_count() == 0

    def test_reassign_reclaims_own_released_device(self):
        manager, _ = _manager(devices=("d1", "d2"), players=("a",))
        manager.assign("a")
        manager.release_by_device("d1")

        assert manager.assign("a") == "d1"
        assert manager.assignments()[0].in_use is True

    def test_refresh_all_reassigns_in_join_order(self):
        manager, _ = _manager(devices=("d1", "d2"), players=("a", "b"))
        manager.assign("b")
        manager.assign("a")
        manager.refresh_all()
        assert manager.lookup("a") == "d1"
        assert manager.lookup("b") == "d2"


class TestController:
    """Tests for the optional device controller hooks."""

    def test_show_and_hide_called(self):
        controller = Mock()
        manager, _ = _manager(devices=("d1",), players=("a",), controller=controller)
        controller.hide.assert_called_once_with("d1")

        manager.assign("a")
        controller.show_for.assert_called_once_with("d1", "a")

        manager.release("a")
        assert controller.hide.call_count == 2

    def test_controller_failure_is_logged_not_raised(self, caplog):
        controller = Mock()
        controller.show_for.side_effect = RuntimeError("entity gone")
        manager, _ = _manager(devices=("d1",), players=("a",), controller=controller)

        assert manager.assign("a") == "d1"
        assert "Could not hand device" in caplog.text
