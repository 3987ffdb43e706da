"""
Tween Service

Motion tween creation, validation and lookup.

Tweens on one layer never share a frame: intervals are compared closed, so
[0, 10] and [10, 20] conflict.
"""
from __future__ import annotations

from typing import List, Optional

from tweenline.application.api.result_types import CommandResult
from tweenline.application.events import TweenAdded, TweenRemoved, TweenUpdated
from tweenline.application.services.service_base import TimelineServiceBase
from tweenline.domain.easing import LINEAR
from tweenline.domain.entities import Frame, FrameType, Layer, Tween


class TweenService(TimelineServiceBase):
    """Tween operations for the layers of one Timeline."""

    def create_motion_tween(
        self,
        layer_id: str,
        start_frame: Frame,
        end_frame: Frame,
        easing: str = LINEAR
    ) -> CommandResult[Tween]:
        """
        Create a tween between two existing keyframes.

        Returns:
            CommandResult with the new Tween. INVALID_ARGUMENT if the range
            is empty or an endpoint has no keyframe, CONFLICT if it overlaps
            another tween.
        """
        layer, failure = self._require_layer(layer_id, editable=True)
        if failure is not None:
            return failure

        problem = self._validate_span(layer, start_frame, end_frame)
        if problem is not None:
            return problem

        tween = Tween(start_frame=start_frame, end_frame=end_frame, easing=easing)
        layer.tweens.append(tween)
        layer.sort_tweens()

        self._publish(
            TweenAdded,
            id=tween.id,
            layer_id=layer_id,
            start_frame=start_frame,
            end_frame=end_frame,
            easing=easing,
        )
        return CommandResult.success_result(f"Tween created {start_frame}-{end_frame}", data=tween)

    def remove_tween(self, layer_id: str, start_frame: Frame, end_frame: Frame) -> CommandResult[Tween]:
        layer, failure = self._require_layer(layer_id, editable=True)
        if failure is not None:
            return failure
        tween = layer.find_tween(start_frame, end_frame)
        if tween is None:
            return self._fail(CommandResult.not_found(f"No tween {start_frame}-{end_frame} on layer {layer_id}"))

        layer.tweens.remove(tween)
        self._publish(TweenRemoved, id=tween.id, layer_id=layer_id, start_frame=start_frame, end_frame=end_frame)
        return CommandResult.success_result(f"Tween {start_frame}-{end_frame} removed", data=tween)

    def update_tween(
        self,
        layer_id: str,
        start_frame: Frame,
        end_frame: Frame,
        new_start: Optional[Frame] = None,
        new_end: Optional[Frame] = None,
        easing: Optional[str] = None
    ) -> CommandResult[Tween]:
        """
        Change a tween's span and/or easing.

        The new span is validated like a new tween, ignoring the tween being
        edited.
        """
        layer, failure = self._require_layer(layer_id, editable=True)
        if failure is not None:
            return failure
        tween = layer.find_tween(start_frame, end_frame)
        if tween is None:
            return self._fail(CommandResult.not_found(f"No tween {start_frame}-{end_frame} on layer {layer_id}"))

        start = tween.start_frame if new_start is None else new_start
        end = tween.end_frame if new_end is None else new_end
        new_easing = tween.easing if easing is None else easing

        problem = self._validate_span(layer, start, end, ignore=tween)
        if problem is not None:
            return problem

        old = tween.to_dict()
        tween.start_frame = start
        tween.end_frame = end
        tween.easing = new_easing
        layer.sort_tweens()

        self._publish(
            TweenUpdated,
            id=tween.id,
            layer_id=layer_id,
            old_start_frame=old["startFrame"],
            old_end_frame=old["endFrame"],
            start_frame=start,
            end_frame=end,
            easing=new_easing,
        )
        return CommandResult.success_result(f"Tween updated to {start}-{end}", data=tween)

    def _validate_span(
        self,
        layer: Layer,
        start_frame: Frame,
        end_frame: Frame,
        ignore: Optional[Tween] = None
    ) -> Optional[CommandResult]:
        if start_frame >= end_frame:
            return self._fail(
                CommandResult.invalid(f"Tween start {start_frame} must be before end {end_frame}")
            )
        if not (layer.has_keyframe_at(start_frame) and layer.has_keyframe_at(end_frame)):
            return self._fail(
                CommandResult.invalid(f"Tween {start_frame}-{end_frame} needs keyframes at both ends")
            )

        clashes = [
            tw for tw in layer.tweens
            if tw is not ignore and tw.overlaps(start_frame, end_frame)
        ]
        if clashes:
            return self._fail(CommandResult.conflict(
                f"Tween {start_frame}-{end_frame} overlaps an existing tween",
                errors=[f"Overlaps tween {tw.start_frame}-{tw.end_frame}" for tw in clashes],
            ))
        return None

    # =========================================================================
    # Queries
    # =========================================================================

    def get_tween_at_frame(self, layer_id: str, frame: Frame) -> Optional[Tween]:
        """The tween whose span covers ``frame`` (start excluded, end included)."""
        for tween in self._tweens(layer_id):
            if tween.contains_frame(frame):
                return tween
        return None

    def get_tweens(self, layer_id: str) -> List[Tween]:
        return list(self._tweens(layer_id))

    def is_frame_in_tween(self, layer_id: str, frame: Frame) -> bool:
        return self.get_tween_at_frame(layer_id, frame) is not None

    def get_frame_type(self, layer_id: str, frame: Frame) -> FrameType:
        """
        Classify a frame cell: a keyframe wins, then any tween span (ends
        included), then STANDARD if an earlier keyframe holds, else EMPTY.
        """
        layer = self._timeline.get(layer_id)
        if layer is None or layer.is_folder:
            return FrameType.EMPTY
        if layer.has_keyframe_at(frame):
            return FrameType.KEYFRAME
        if any(tw.start_frame <= frame <= tw.end_frame for tw in layer.tweens):
            return FrameType.TWEEN
        if any(kf.frame < frame for kf in layer.keyframes):
            return FrameType.STANDARD
        return FrameType.EMPTY

    def _tweens(self, layer_id: str) -> List[Tween]:
        layer = self._timeline.get(layer_id)
        if layer is None or layer.is_folder:
            return []
        return layer.tweens
