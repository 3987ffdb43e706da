"""
Tests for ClipboardService: move, copy and paste of keyframes.
"""
import pytest
from unittest.mock import MagicMock

from tweenline import ErrorKind, ResultStatus, create_timeline
from tweenline.application.events import ALL_EVENTS, KeyframesMoved, KeyframesPasted


@pytest.fixture
def timeline():
    return create_timeline()


@pytest.fixture
def layers(timeline):
    a = timeline.add_layer("A").data
    b = timeline.add_layer("B").data
    return a, b


def frames(layer):
    return [kf.frame for kf in layer.keyframes]


class TestMoveKeyframes:
    """Tests for move_keyframes()."""

    def test_offset_comes_from_first_id(self, timeline, layers):
        a, _ = layers
        for frame in (2, 4):
            timeline.insert_keyframe(a.id, frame)

        result = timeline.move_keyframes([f"{a.id}:4", f"{a.id}:2"], a.id, 10)

        assert result.success
        assert frames(a) == [8, 10]

    def test_move_across_layers_keeps_ids(self, timeline, layers):
        a, b = layers
        keyframe = timeline.insert_keyframe(a.id, 3, {"x": 1}).data
        handler = MagicMock()
        timeline.subscribe(KeyframesMoved, handler)

        timeline.move_keyframes([f"{a.id}:3"], b.id, 7)

        assert a.keyframes == []
        assert b.keyframes[0] is keyframe
        assert keyframe.frame == 7
        moves = handler.call_args.args[0].data["moves"]
        assert moves == [{"id": keyframe.id, "old_layer_id": a.id, "old_frame": 3, "new_frame": 7}]

    def test_overlap_with_moved_set_is_allowed(self, timeline, layers):
        """Shifting 2,3 right by one lands 2 on 3, which is itself moving."""
        a, _ = layers
        for frame in (2, 3):
            timeline.insert_keyframe(a.id, frame)

        assert timeline.move_keyframes([f"{a.id}:2", f"{a.id}:3"], a.id, 3).success
        assert frames(a) == [3, 4]

    def test_conflict_is_all_or_nothing(self, timeline, layers):
        a, b = layers
        for frame in (1, 2):
            timeline.insert_keyframe(a.id, frame)
        timeline.insert_keyframe(b.id, 6)
        handler = MagicMock()
        timeline.subscribe(ALL_EVENTS, handler)

        result = timeline.move_keyframes([f"{a.id}:1", f"{a.id}:2"], b.id, 5)

        assert result.error_kind == ErrorKind.CONFLICT
        assert frames(a) == [1, 2]
        assert frames(b) == [6]
        handler.assert_not_called()

    def test_invalid_requests(self, timeline, layers):
        a, _ = layers
        timeline.insert_keyframe(a.id, 2)

        assert timeline.move_keyframes([], a.id, 0).error_kind == ErrorKind.INVALID_ARGUMENT
        assert timeline.move_keyframes([f"{a.id}:2"], "missing", 0).error_kind == ErrorKind.NOT_FOUND
        assert timeline.move_keyframes([f"{a.id}:9"], a.id, 0).error_kind == ErrorKind.NOT_FOUND
        assert timeline.move_keyframes([f"{a.id}:2"], a.id, -1).error_kind == ErrorKind.INVALID_ARGUMENT
        assert frames(a) == [2]


class TestCopyPaste:
    """Tests for copy_keyframes() and paste_keyframes()."""

    def test_paste_skips_collisions(self, timeline, layers):
        """Copy A:2, A:4 and paste on B at 10 where B already has 12."""
        a, b = layers
        timeline.insert_keyframe(a.id, 2, {"x": 1})
        timeline.insert_keyframe(a.id, 4, {"x": 2})
        timeline.insert_keyframe(b.id, 12, {"x": 9})

        assert timeline.copy_keyframes([f"{a.id}:2", f"{a.id}:4"]).data == 2
        result = timeline.paste_keyframes(b.id, 10)

        assert result.status == ResultStatus.WARNING
        assert result.applied
        assert result.data["applied"] == 1
        assert result.data["skipped"] == 1
        assert frames(b) == [10, 12]
        assert timeline.get_keyframe(b.id, 10).properties == {"x": 1}
        assert timeline.get_keyframe(b.id, 12).properties == {"x": 9}

    def test_pasted_keyframes_are_independent(self, timeline, layers):
        a, b = layers
        source = timeline.insert_keyframe(a.id, 0, {"pos": [1, 2]}).data
        timeline.copy_keyframes([f"{a.id}:0"])

        pasted = timeline.paste_keyframes(b.id, 5).data["keyframes"][0]

        assert pasted.id != source.id
        pasted.properties["pos"].append(3)
        assert source.properties == {"pos": [1, 2]}

    def test_copy_is_a_snapshot(self, timeline, layers):
        a, b = layers
        timeline.insert_keyframe(a.id, 0, {"x": 1})
        timeline.copy_keyframes([f"{a.id}:0"])
        timeline.update_keyframe(a.id, 0, {"x": 5})

        timeline.paste_keyframes(b.id, 0)

        assert timeline.get_keyframe(b.id, 0).properties == {"x": 1}

    def test_all_collisions_is_conflict(self, timeline, layers):
        a, _ = layers
        timeline.insert_keyframe(a.id, 1)
        timeline.copy_keyframes([f"{a.id}:1"])
        handler = MagicMock()
        timeline.subscribe(KeyframesPasted, handler)

        result = timeline.paste_keyframes(a.id, 1)

        assert result.error_kind == ErrorKind.CONFLICT
        handler.assert_not_called()

    def test_empty_clipboard(self, timeline, layers):
        a, _ = layers
        assert not timeline.has_clipboard()
        assert timeline.paste_keyframes(a.id, 0).error_kind == ErrorKind.NOT_FOUND
        assert timeline.copy_keyframes([f"{a.id}:7", "garbage"]).error_kind == ErrorKind.NOT_FOUND

    def test_clear_clipboard(self, timeline, layers):
        a, _ = layers
        timeline.insert_keyframe(a.id, 1)
        timeline.copy_keyframes([f"{a.id}:1"])
        assert timeline.has_clipboard()

        timeline.clear_clipboard()

        assert not timeline.has_clipboard()

    def test_copy_selection(self, timeline, layers):
        a, b = layers
        timeline.insert_keyframe(a.id, 3)
        timeline.selection.select_frame(f"{a.id}:3")

        assert timeline.copy_selection().success
        assert timeline.paste_keyframes(b.id, 0).success
        assert frames(b) == [0]
