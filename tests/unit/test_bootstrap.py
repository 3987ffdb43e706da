"""
Tests for bootstrap wiring and the time-related facade surface.
"""
import pytest
from unittest.mock import MagicMock

from tweenline import create_timeline, initialize_services
from tweenline.application.events import ALL_EVENTS, CurrentTimeChanged, EventBus


class TestBootstrap:
    """Tests for create_timeline() / initialize_services()."""

    def test_timelines_are_independent(self):
        first = create_timeline()
        second = create_timeline()

        layer = first.add_layer().data
        first.insert_keyframe(layer.id, 0)
        first.copy_keyframes([f"{layer.id}:0"])

        assert second.get_layers() == []
        assert not second.has_clipboard()
        assert first.timeline.id != second.timeline.id

    def test_services_share_timeline_and_bus(self):
        container = initialize_services()
        assert container.keyframe_service.timeline is container.timeline
        assert container.facade.event_bus is container.event_bus

    def test_shared_bus_can_be_injected(self):
        bus = EventBus()
        handler = MagicMock()
        bus.subscribe(ALL_EVENTS, handler)
        first = create_timeline(event_bus=bus)
        second = create_timeline(event_bus=bus)

        first.add_layer()
        second.add_layer()

        timeline_ids = [call.args[0].timeline_id for call in handler.call_args_list]
        assert timeline_ids == [first.timeline.id, second.timeline.id]

    def test_create_from_snapshot(self):
        source = create_timeline()
        source.add_layer("Box")

        copy = create_timeline(snapshot=source.export_snapshot())

        assert [node.name for node in copy.get_layers()] == ["Box"]

    def test_create_from_bad_snapshot_raises(self):
        with pytest.raises(ValueError):
            create_timeline(snapshot={"layers": "nope"})

    def test_cleanup_drops_subscribers(self):
        container = initialize_services()
        container.event_bus.subscribe(ALL_EVENTS, MagicMock())
        container.cleanup()
        assert container.event_bus.get_subscriber_count(ALL_EVENTS) == 0


class TestTimeState:
    """Tests for current time, duration and time scale."""

    @pytest.fixture
    def timeline(self):
        return create_timeline()

    def test_current_time_is_clamped(self, timeline):
        timeline.current_time = 700
        assert timeline.current_time == 600
        timeline.current_time = -3
        assert timeline.current_time == 0

    def test_shrinking_duration_pulls_playhead_back(self, timeline):
        timeline.current_time = 300
        timeline.duration = 100
        assert timeline.current_time == 100

    def test_negative_duration_rejected(self, timeline):
        assert timeline.time.set_duration(-1).failed
        assert timeline.duration == 600

    def test_extend_duration_if_needed(self, timeline):
        assert timeline.extend_duration_if_needed(500) is False
        assert timeline.extend_duration_if_needed(650) is True
        assert timeline.duration == 660
        assert timeline.extend_duration_if_needed(700, padding=0) is True
        assert timeline.duration == 700

    def test_extend_duration_counts_padding(self, timeline):
        assert timeline.extend_duration_if_needed(590) is False
        assert timeline.duration == 600

        assert timeline.extend_duration_if_needed(595, padding=10) is True
        assert timeline.duration == 605

    def test_time_scale_minimum(self, timeline):
        timeline.time_scale = 0.01
        assert timeline.time_scale == pytest.approx(0.1)
        timeline.time_scale = 2
        assert timeline.time_scale == 2

    def test_current_time_event_only_on_change(self, timeline):
        handler = MagicMock()
        timeline.subscribe(CurrentTimeChanged, handler)

        timeline.current_time = 5
        timeline.current_time = 5

        assert handler.call_count == 1
        assert handler.call_args.args[0].data == {"old_value": 0.0, "new_value": 5.0}

    def test_debug_info_counts(self, timeline):
        folder = timeline.add_folder().data
        layer = timeline.add_layer(parent_id=folder.id).data
        timeline.insert_keyframe(layer.id, 0)
        timeline.insert_keyframe(layer.id, 5)
        timeline.create_motion_tween(layer.id, 0, 5)

        info = timeline.get_debug_info()

        assert info["layer_count"] == 1
        assert info["folder_count"] == 1
        assert info["keyframe_count"] == 2
        assert info["tween_count"] == 1
