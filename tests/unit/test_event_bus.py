"""
Unit Tests for EventBus

Tests subscription by class, by name and by wildcard, and handler isolation.
"""
import pytest
from unittest.mock import MagicMock

from tweenline.application.events import (
    ALL_EVENTS,
    BeforeObjectDelete,
    EventBus,
    KeyframeAdded,
    TweenAdded,
)


class TestEventBus:
    """Tests for EventBus."""

    @pytest.fixture
    def bus(self):
        return EventBus()

    def test_subscribe_by_class_and_name_share_channel(self, bus):
        """Class and name subscriptions resolve to the same event name."""
        by_class, by_name = MagicMock(), MagicMock()
        bus.subscribe(KeyframeAdded, by_class)
        bus.subscribe("keyframe.added", by_name)

        event = KeyframeAdded(data={"layer_id": "layer-1", "frame": 3})
        bus.publish(event)

        by_class.assert_called_once_with(event)
        by_name.assert_called_once_with(event)
        assert bus.get_subscriber_count(KeyframeAdded) == 2

    def test_handlers_only_receive_their_event(self, bus):
        handler = MagicMock()
        bus.subscribe(TweenAdded, handler)

        bus.publish(KeyframeAdded())

        handler.assert_not_called()

    def test_wildcard_receives_everything(self, bus):
        handler = MagicMock()
        bus.subscribe(ALL_EVENTS, handler)

        bus.publish_all([KeyframeAdded(), TweenAdded()])

        assert [call.args[0].kind for call in handler.call_args_list] == ["keyframe.added", "tween.added"]

    def test_wildcard_and_specific_handler_called_once(self, bus):
        handler = MagicMock()
        bus.subscribe(ALL_EVENTS, handler)
        bus.subscribe(KeyframeAdded, handler)

        bus.publish(KeyframeAdded())

        assert handler.call_count == 1

    def test_duplicate_subscription_is_ignored(self, bus):
        handler = MagicMock()
        bus.subscribe(KeyframeAdded, handler)
        bus.subscribe(KeyframeAdded, handler)
        assert bus.get_subscriber_count(KeyframeAdded) == 1

    def test_unsubscribe(self, bus):
        handler = MagicMock()
        bus.subscribe(KeyframeAdded, handler)
        bus.unsubscribe(KeyframeAdded, handler)

        bus.publish(KeyframeAdded())

        handler.assert_not_called()
        assert bus.get_subscriber_count(KeyframeAdded) == 0

    def test_failing_handler_does_not_stop_others(self, bus):
        """A handler that raises is logged and skipped."""
        failing = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        bus.subscribe(KeyframeAdded, failing)
        bus.subscribe(KeyframeAdded, healthy)

        bus.publish(KeyframeAdded())

        failing.assert_called_once()
        healthy.assert_called_once()

    def test_clear_removes_all_subscribers(self, bus):
        bus.subscribe(KeyframeAdded, MagicMock())
        bus.subscribe(ALL_EVENTS, MagicMock())
        bus.clear()
        assert bus.get_subscriber_count(KeyframeAdded) == 0
        assert bus.get_subscriber_count(ALL_EVENTS) == 0


def test_before_delete_is_cancellable():
    event = BeforeObjectDelete(data={"id": "layer-1"})
    assert event.cancelled is False
    event.cancel()
    assert event.cancelled is True
    assert event.kind == "object.before_delete"
