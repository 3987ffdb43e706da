"""
Timeline Evaluator

Reconstructs each layer's property state at an arbitrary (real-valued) time
from its keyframes and tweens. Read-only: never mutates the timeline and
publishes no events.
"""
from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from tweenline.application.settings import TimelineSettings
from tweenline.domain.easing import interpolate_properties, is_numeric
from tweenline.domain.entities import Keyframe, Layer, Timeline
from tweenline.utils.message import Log


@dataclass
class LayerState:
    """Interpolated properties of one layer at one time."""
    layer_id: str
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"layerId": self.layer_id, "name": self.name, "properties": dict(self.properties)}


class TimelineEvaluator:
    """
    Evaluates layers of a Timeline at a given time.

    For each layer, with prev = last keyframe at or before the time and
    next = first keyframe after it:
    - time within the exact-hit tolerance of prev: prev's properties
    - a tween spans exactly prev..next: eased interpolation
    - otherwise prev's properties held, or {} before the first keyframe
    """

    def __init__(self, timeline: Timeline, settings: Optional[TimelineSettings] = None):
        self._timeline = timeline
        self._settings = settings or TimelineSettings()

    def evaluate_at_time(self, time: float) -> List[LayerState]:
        """State of every effectively visible non-folder layer, in display order."""
        states = [
            self._evaluate(layer, time)
            for layer in self._timeline.iter_layers()
            if self._timeline.is_effectively_visible(layer.id)
        ]
        Log.debug(f"TimelineEvaluator: Evaluated {len(states)} layer(s) at t={time}")
        return states

    def evaluate_layer_at_time(self, layer_id: str, time: float) -> Optional[LayerState]:
        """
        State of a single layer, regardless of its visibility.

        Returns:
            None if the id is unknown or names a folder
        """
        layer = self._timeline.get(layer_id)
        if layer is None or layer.is_folder:
            return None
        return self._evaluate(layer, time)

    def get_keyframes_at_time(
        self,
        time: float,
        tolerance: Optional[float] = None
    ) -> List[Tuple[str, Keyframe]]:
        """
        (layer_id, keyframe) pairs with ``|frame - time| < tolerance`` over
        all non-folder layers, visible or not.
        """
        if tolerance is None:
            tolerance = self._settings.keyframes_at_time_tolerance
        return [
            (layer.id, keyframe)
            for layer in self._timeline.iter_layers()
            for keyframe in layer.keyframes
            if abs(keyframe.frame - time) < tolerance
        ]

    def sample_property(self, layer_id: str, key: str, times: Iterable[float]) -> np.ndarray:
        """
        Sample one numeric property of a layer over a grid of times.

        Args:
            layer_id: Layer to sample (visibility is ignored)
            key: Property name
            times: Sample times, e.g. ``np.linspace(0, 10, 101)``

        Returns:
            float64 array aligned with ``times``; NaN where the property is
            absent or not numeric (and everywhere for an unknown layer)
        """
        grid = np.asarray(list(times) if not isinstance(times, np.ndarray) else times, dtype=float)
        samples = np.full(grid.shape, np.nan)
        layer = self._timeline.get(layer_id)
        if layer is None or layer.is_folder:
            return samples

        for index, time in enumerate(grid):
            value = self._evaluate(layer, float(time)).properties.get(key)
            if is_numeric(value):
                samples[index] = value
        return samples

    def _evaluate(self, layer: Layer, time: float) -> LayerState:
        return LayerState(layer_id=layer.id, name=layer.name, properties=self._properties_at(layer, time))

    def _properties_at(self, layer: Layer, time: float) -> Dict[str, Any]:
        keyframes = layer.keyframes
        split = bisect_right([kf.frame for kf in keyframes], time)
        prev_kf = keyframes[split - 1] if split > 0 else None
        next_kf = keyframes[split] if split < len(keyframes) else None

        if prev_kf is None:
            return {}

        if abs(prev_kf.frame - time) < self._settings.exact_hit_tolerance:
            return dict(prev_kf.properties)

        if next_kf is not None:
            tween = layer.find_tween(prev_kf.frame, next_kf.frame)
            if tween is not None:
                progress = (time - prev_kf.frame) / (next_kf.frame - prev_kf.frame)
                return interpolate_properties(prev_kf.properties, next_kf.properties, progress, tween.easing)

        return dict(prev_kf.properties)
