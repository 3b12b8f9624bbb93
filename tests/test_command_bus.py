"""
Tests for the command bus.
"""

import pytest

from lexdesk.commands.bus import CommandBus, SubscriptionGroup, get_command_bus


class TestDispatch:
    """Test synchronous, ordered dispatch."""

    def test_handlers_run_in_subscription_order(self, bus):
        calls = []
        bus.subscribe("view-legal-text", lambda payload: calls.append(("a", payload['textId'])))
        bus.subscribe("view-legal-text", lambda payload: calls.append(("b", payload['textId'])))

        bus.dispatch("view-legal-text", {'textId': "t1"})

        assert calls == [("a", "t1"), ("b", "t1")]

    def test_dispatch_without_handlers_is_a_no_op(self, bus):
        bus.dispatch("nobody-listens", {'x': 1})
        assert bus.subscriber_count("nobody-listens") == 0

    def test_payload_defaults_to_empty_dict(self, bus):
        received = []
        bus.subscribe("export-data", received.append)
        bus.dispatch("export-data")
        assert received == [{}]

    def test_non_mapping_payload_is_rejected(self, bus):
        bus.subscribe("export-data", lambda payload: None)
        with pytest.raises(TypeError):
            bus.dispatch("export-data", ["not", "a", "mapping"])

    def test_each_handler_gets_its_own_copy(self, bus):
        """Test that a handler mutating its payload does not affect the next one."""
        seen = []

        def mutate(payload):
            payload['title'] = "changed"

        bus.subscribe("cmd", mutate)
        bus.subscribe("cmd", lambda payload: seen.append(payload['title']))

        original = {'title': "Loi X"}
        bus.dispatch("cmd", original)

        assert seen == ["Loi X"]
        assert original == {'title': "Loi X"}

    def test_failing_handler_does_not_stop_the_others(self, bus):
        calls = []

        def broken(payload):
            raise RuntimeError("boom")

        bus.subscribe("cmd", broken)
        bus.subscribe("cmd", lambda payload: calls.append("after"))

        bus.dispatch("cmd", {})

        assert calls == ["after"]

    def test_nested_dispatch_completes_before_outer_continues(self, bus):
        calls = []
        bus.subscribe("outer", lambda payload: (calls.append("outer-1"), bus.dispatch("inner", {})))
        bus.subscribe("outer", lambda payload: calls.append("outer-2"))
        bus.subscribe("inner", lambda payload: calls.append("inner"))

        bus.dispatch("outer", {})

        assert calls == ["outer-1", "inner", "outer-2"]

    def test_handler_added_during_dispatch_waits_for_next_dispatch(self, bus):
        calls = []

        def first(payload):
            calls.append("first")
            bus.subscribe("cmd", lambda p: calls.append("late"))

        bus.subscribe("cmd", first)
        bus.dispatch("cmd", {})
        assert calls == ["first"]

        bus.dispatch("cmd", {})
        assert calls == ["first", "first", "late"]

    def test_handler_cancelled_during_dispatch_is_skipped(self, bus):
        calls = []
        later = None

        def first(payload):
            calls.append("first")
            later.cancel()

        bus.subscribe("cmd", first)
        later = bus.subscribe("cmd", lambda payload: calls.append("second"))

        bus.dispatch("cmd", {})

        assert calls == ["first"]


class TestSubscriptions:
    """Test cancellation and one-shot subscriptions."""

    def test_cancel_removes_handler_and_is_idempotent(self, bus):
        calls = []
        subscription = bus.subscribe("cmd", calls.append)

        subscription.cancel()
        subscription.cancel()
        bus.dispatch("cmd", {'n': 1})

        assert calls == []
        assert not subscription.active
        assert bus.subscriber_count("cmd") == 0
        assert "cmd" not in bus.commands()

    def test_unsubscribe_is_cancel(self, bus):
        subscription = bus.subscribe("cmd", lambda payload: None)
        bus.unsubscribe(subscription)
        assert bus.subscriber_count("cmd") == 0

    def test_subscribe_once_fires_a_single_time(self, bus):
        calls = []
        bus.subscribe_once("confirm-delete", calls.append)

        bus.dispatch("confirm-delete", {'id': "a"})
        bus.dispatch("confirm-delete", {'id': "b"})

        assert calls == [{'id': "a"}]
        assert bus.subscriber_count("confirm-delete") == 0

    def test_once_subscription_can_be_cancelled_before_firing(self, bus):
        calls = []
        subscription = bus.subscribe_once("confirm-delete", calls.append)

        subscription.cancel()
        bus.dispatch("confirm-delete", {'id': "a"})

        assert calls == []

    def test_failing_once_handler_is_still_removed(self, bus):
        def broken(payload):
            raise ValueError("boom")

        bus.subscribe_once("cmd", broken)
        bus.dispatch("cmd", {})

        assert bus.subscriber_count("cmd") == 0

    def test_group_cancels_everything(self, bus):
        group = SubscriptionGroup()
        group.add(bus.subscribe("a", lambda payload: None))
        group.add(bus.subscribe("b", lambda payload: None))
        assert len(group) == 2

        group.cancel_all()

        assert len(group) == 0
        assert bus.commands() == []


class TestGlobalBus:

    def test_get_command_bus_returns_singleton(self):
        first = get_command_bus()
        assert isinstance(first, CommandBus)
        assert get_command_bus() is first
