"""
Tests for TimelineEvaluator.
"""
import math

import numpy as np
import pytest

from tweenline import create_timeline


@pytest.fixture
def timeline():
    return create_timeline()


@pytest.fixture
def tweened(timeline):
    """Layer with x: 0 at frame 0, x: 100 at frame 10 and a linear tween."""
    layer = timeline.add_layer("L").data
    timeline.insert_keyframe(layer.id, 0, {"x": 0})
    timeline.insert_keyframe(layer.id, 10, {"x": 100})
    timeline.create_motion_tween(layer.id, 0, 10)
    return layer


def state_of(timeline, layer_id, time):
    return {state.layer_id: state for state in timeline.evaluate_at_time(time)}[layer_id]


class TestEvaluateAtTime:
    """Tests for evaluate_at_time()."""

    def test_linear_midpoint(self, timeline, tweened):
        assert state_of(timeline, tweened.id, 5).properties == {"x": 50}

    def test_easing_is_applied(self, timeline, tweened):
        timeline.update_tween(tweened.id, 0, 10, easing="easeInQuad")
        assert state_of(timeline, tweened.id, 5).properties["x"] == pytest.approx(25)

    def test_exact_hit_returns_keyframe_copy(self, timeline, tweened):
        state = state_of(timeline, tweened.id, 10.0005)

        assert state.properties == {"x": 100}
        state.properties["x"] = -1
        assert timeline.get_keyframe(tweened.id, 10).properties == {"x": 100}

    def test_just_below_first_keyframe_is_empty(self, timeline):
        layer = timeline.add_layer().data
        timeline.insert_keyframe(layer.id, 5, {"x": 1})
        assert state_of(timeline, layer.id, 4.9995).properties == {}

    def test_just_below_keyframe_holds_previous(self, timeline):
        layer = timeline.add_layer().data
        timeline.insert_keyframe(layer.id, 0, {"x": 0})
        timeline.insert_keyframe(layer.id, 5, {"x": 1})
        assert state_of(timeline, layer.id, 4.9995).properties == {"x": 0}

    def test_boundaries(self, timeline, tweened):
        assert state_of(timeline, tweened.id, 0).properties == {"x": 0}
        assert state_of(timeline, tweened.id, 10).properties == {"x": 100}

    def test_before_first_keyframe_is_empty(self, timeline):
        layer = timeline.add_layer().data
        timeline.insert_keyframe(layer.id, 4, {"x": 1})
        assert state_of(timeline, layer.id, 2).properties == {}

    def test_without_tween_holds_previous(self, timeline):
        layer = timeline.add_layer().data
        timeline.insert_keyframe(layer.id, 0, {"x": 0})
        timeline.insert_keyframe(layer.id, 10, {"x": 100})

        assert state_of(timeline, layer.id, 7).properties == {"x": 0}
        assert state_of(timeline, layer.id, 30).properties == {"x": 100}

    def test_tween_must_link_adjacent_keyframes(self, timeline, tweened):
        """A keyframe inserted inside a tween splits the pair; the tween no longer applies."""
        timeline.insert_keyframe(tweened.id, 4, {"x": 10})
        assert state_of(timeline, tweened.id, 7).properties == {"x": 10}

    def test_non_numeric_snap(self, timeline):
        layer = timeline.add_layer().data
        timeline.insert_keyframe(layer.id, 0, {"label": "a", "only_start": 1})
        timeline.insert_keyframe(layer.id, 10, {"label": "b", "only_end": 2})
        timeline.create_motion_tween(layer.id, 0, 10)

        assert state_of(timeline, layer.id, 4).properties == {"label": "a", "only_start": 1, "only_end": 2}
        assert state_of(timeline, layer.id, 5).properties["label"] == "b"

    def test_hidden_layers_and_folders_skipped(self, timeline, tweened):
        folder = timeline.add_folder().data
        nested = timeline.add_layer(parent_id=folder.id).data
        hidden = timeline.add_layer().data
        timeline.toggle_visibility(hidden.id)
        timeline.toggle_visibility(folder.id)

        ids = [state.layer_id for state in timeline.evaluate_at_time(5)]

        assert ids == [tweened.id]
        assert nested.visible is True

    def test_order_is_depth_first(self, timeline):
        folder = timeline.add_folder().data
        inner = timeline.add_layer(parent_id=folder.id).data
        outer = timeline.add_layer().data
        assert [s.layer_id for s in timeline.evaluate_at_time(0)] == [inner.id, outer.id]

    def test_evaluation_is_idempotent(self, timeline, tweened):
        first = [s.to_dict() for s in timeline.evaluate_at_time(3.3)]
        second = [s.to_dict() for s in timeline.evaluate_at_time(3.3)]
        assert first == second


class TestQueries:
    """Tests for single-layer evaluation, keyframe lookup by time and sampling."""

    def test_evaluate_layer_ignores_visibility(self, timeline, tweened):
        timeline.toggle_visibility(tweened.id)
        assert timeline.evaluate_layer_at_time(tweened.id, 5).properties == {"x": 50}
        assert timeline.evaluate_layer_at_time("missing", 5) is None

    def test_get_keyframes_at_time(self, timeline, tweened):
        hits = timeline.get_keyframes_at_time(9.95)
        assert [(layer_id, kf.frame) for layer_id, kf in hits] == [(tweened.id, 10)]
        assert timeline.get_keyframes_at_time(9.5) == []
        assert len(timeline.get_keyframes_at_time(9.5, tolerance=1)) == 1

    def test_sample_property(self, timeline, tweened):
        samples = timeline.sample_property(tweened.id, "x", np.linspace(0, 10, 5))
        np.testing.assert_allclose(samples, [0, 25, 50, 75, 100])

    def test_sample_undefined_is_nan(self, timeline):
        layer = timeline.add_layer().data
        timeline.insert_keyframe(layer.id, 2, {"x": 1, "label": "a"})

        samples = timeline.sample_property(layer.id, "x", [0, 2, 4])
        labels = timeline.sample_property(layer.id, "label", [2])

        assert math.isnan(samples[0])
        assert samples[1:].tolist() == [1.0, 1.0]
        assert math.isnan(labels[0])
        assert np.isnan(timeline.sample_property("missing", "x", [0, 1])).all()
