"""
Tests for SnapshotService: export shape, JSON round trip and atomic import.
"""
import json

import pytest
from unittest.mock import MagicMock

from tweenline import ErrorKind, create_timeline
from tweenline.application.events import TimelineLoaded


@pytest.fixture
def timeline():
    return create_timeline()


@pytest.fixture
def populated(timeline):
    folder = timeline.add_folder("Group").data
    layer = timeline.add_layer("Box", parent_id=folder.id).data
    timeline.insert_keyframe(layer.id, 0, {"x": 0})
    timeline.insert_keyframe(layer.id, 10, {"x": 100})
    timeline.create_motion_tween(layer.id, 0, 10, "easeOutQuad")
    timeline.add_layer("Top")
    timeline.current_time = 4
    return timeline


def layer_entry(layer_id, keyframes=None, tweens=None, name="L"):
    return {
        "id": layer_id,
        "name": name,
        "type": "layer",
        "keyframes": keyframes or [],
        "tweens": tweens or [],
    }


class TestExport:
    """Tests for export_snapshot() / to_json()."""

    def test_snapshot_shape(self, populated):
        snapshot = populated.export_snapshot()

        assert set(snapshot) == {"layers", "duration", "currentTime", "timeScale"}
        assert snapshot["duration"] == 600.0
        assert snapshot["currentTime"] == 4
        folder = snapshot["layers"][0]
        assert folder["type"] == "folder"
        box = folder["children"][0]
        assert box["keyframes"][1] == {"id": box["keyframes"][1]["id"], "frame": 10, "isEmpty": False,
                                       "properties": {"x": 100}}
        assert box["tweens"][0]["easing"] == "easeOutQuad"
        assert snapshot["layers"][1]["name"] == "Top"

    def test_snapshot_is_detached(self, populated):
        snapshot = populated.export_snapshot()
        snapshot["layers"][0]["children"][0]["keyframes"][0]["properties"]["x"] = 42
        box = populated.get_layers()[1]
        assert box.keyframes[0].properties == {"x": 0}

    def test_json_round_trip_into_new_timeline(self, populated):
        text = populated.to_json()

        restored = create_timeline()
        result = restored.from_json(text)

        assert result.success
        assert restored.export_snapshot() == json.loads(text)
        box = restored.get_layers()[1]
        assert restored.evaluate_layer_at_time(box.id, 5).properties["x"] == pytest.approx(75)


class TestImport:
    """Tests for import_snapshot() / from_json()."""

    def test_import_replaces_tree_and_publishes(self, populated):
        handler = MagicMock()
        populated.subscribe(TimelineLoaded, handler)

        result = populated.import_snapshot({"layers": [layer_entry("only")], "duration": 50})

        assert result.success
        assert [node.id for node in populated.get_layers()] == ["only"]
        assert populated.duration == 50
        assert handler.call_count == 1

    def test_import_sorts_keyframes_and_tweens(self, timeline):
        timeline.import_snapshot({"layers": [layer_entry(
            "L",
            keyframes=[{"frame": 9}, {"frame": 1}, {"time": 5}],
            tweens=[{"startFrame": 5, "endFrame": 9}, {"startFrame": 1, "endFrame": 4, "type": "easeInQuad"}],
        )]})

        layer = timeline.get_layer("L")
        assert [kf.frame for kf in layer.keyframes] == [1, 5, 9]
        assert [tw.start_frame for tw in layer.tweens] == [1, 5]

    def test_import_clamps_time_state(self, timeline):
        timeline.import_snapshot({"layers": [], "duration": 10, "currentTime": 30, "timeScale": 0})
        assert timeline.current_time == 10
        assert timeline.time_scale == pytest.approx(0.1)

    @pytest.mark.parametrize("snapshot", [
        "not a dict",
        {"layers": "nope"},
        {"layers": [layer_entry("dup"), layer_entry("dup")]},
        {"layers": [layer_entry("L", keyframes=[{"frame": 2}, {"frame": 2}])]},
        {"layers": [layer_entry("L", keyframes=[{"frame": -1}])]},
        {"layers": [layer_entry("L", tweens=[{"startFrame": 0, "endFrame": 4}, {"startFrame": 4, "endFrame": 8}])]},
        {"layers": [layer_entry("L", tweens=[{"startFrame": 4}])]},
        {"layers": [{"id": "x", "name": "x", "type": "group"}]},
        {"layers": [], "duration": -5},
        {"layers": [
            layer_entry("A", keyframes=[{"id": "kf", "frame": 0}]),
            layer_entry("B", keyframes=[{"id": "kf", "frame": 0}]),
        ]},
    ])
    def test_invalid_snapshot_leaves_state_untouched(self, populated, snapshot):
        before = populated.export_snapshot()

        result = populated.import_snapshot(snapshot)

        assert result.failed
        assert result.error_kind == ErrorKind.INVALID_ARGUMENT
        assert populated.export_snapshot() == before

    def test_invalid_json(self, populated):
        before = populated.export_snapshot()
        assert populated.from_json("{broken").failed
        assert populated.export_snapshot() == before
