"""
Keyframe Service

Frame-indexed editing of a layer's keyframes: insertion, exact deletion,
property updates, and the ripple operations that shift later content
(insert_frame / delete_frames).

Ripple rules for tweens:
- insert_frame(F): tweens starting at or after F move by +1; a tween that
  starts before F and ends at or after F only grows its end.
- delete_frames(S, E): tweens with an endpoint inside [S, E] are dropped;
  tweens starting after E move by -count; a tween that starts before S and
  ends after E shrinks its end by count.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from tweenline.application.api.result_types import CommandResult
from tweenline.application.events import (
    FrameInserted,
    FramesDeleted,
    KeyframeAdded,
    KeyframeDeleted,
    KeyframeUpdated,
)
from tweenline.application.services.service_base import TimelineServiceBase, is_valid_frame
from tweenline.domain.entities import Frame, Keyframe, Layer
from tweenline.utils.message import Log


class KeyframeService(TimelineServiceBase):
    """Keyframe store operations for the layers of one Timeline."""

    # =========================================================================
    # Insertion
    # =========================================================================

    def insert_keyframe(
        self,
        layer_id: str,
        frame: int,
        properties: Optional[Dict[str, Any]] = None
    ) -> CommandResult[Keyframe]:
        """
        Insert a content keyframe.

        Args:
            layer_id: Target layer
            frame: Integer frame >= 0
            properties: Initial property map (copied)

        Returns:
            CommandResult with the new Keyframe; CONFLICT if one already
            exists at that frame
        """
        return self._insert(layer_id, frame, dict(properties or {}), is_empty=False)

    def insert_blank_keyframe(self, layer_id: str, frame: int) -> CommandResult[Keyframe]:
        """Insert a keyframe with no properties, marked blank."""
        return self._insert(layer_id, frame, {}, is_empty=True)

    def _insert(self, layer_id: str, frame: int, properties: Dict[str, Any], is_empty: bool) -> CommandResult[Keyframe]:
        layer, failure = self._require_layer(layer_id, editable=True)
        if failure is not None:
            return failure
        if not is_valid_frame(frame):
            return self._fail(CommandResult.invalid(f"Frame must be an integer >= 0, got {frame!r}"))
        if layer.has_keyframe_at(frame):
            return self._fail(CommandResult.conflict(f"Keyframe already exists at frame {frame}"))

        keyframe = Keyframe(frame=frame, is_empty=is_empty, properties=properties)
        layer.keyframes.append(keyframe)
        layer.sort_keyframes()

        self._publish(KeyframeAdded, id=keyframe.id, layer_id=layer_id, frame=frame, type=keyframe.kind)
        Log.debug(f"KeyframeService: Added {keyframe.kind} keyframe at {frame} on '{layer.name}'")
        return CommandResult.success_result(f"Keyframe added at frame {frame}", data=keyframe)

    # =========================================================================
    # Ripple edits
    # =========================================================================

    def insert_frame(self, layer_id: str, frame: int) -> CommandResult[None]:
        """Insert one empty frame at ``frame``, pushing later content right."""
        layer, failure = self._require_layer(layer_id, editable=True)
        if failure is not None:
            return failure
        if not is_valid_frame(frame):
            return self._fail(CommandResult.invalid(f"Frame must be an integer >= 0, got {frame!r}"))

        shifted = 0
        for keyframe in layer.keyframes:
            if keyframe.frame >= frame:
                keyframe.frame += 1
                shifted += 1

        for tween in layer.tweens:
            if tween.start_frame >= frame:
                tween.start_frame += 1
                tween.end_frame += 1
            elif tween.end_frame >= frame:
                tween.end_frame += 1

        self._publish(FrameInserted, layer_id=layer_id, frame=frame, shifted=shifted)
        return CommandResult.success_result(f"Inserted frame at {frame} ({shifted} keyframe(s) shifted)")

    def delete_frames(self, layer_id: str, frame_start: int, frame_end: int) -> CommandResult[List[str]]:
        """
        Cut the inclusive range [frame_start, frame_end] and close the gap.

        Returns:
            CommandResult whose data lists the removed keyframe ids
        """
        layer, failure = self._require_layer(layer_id, editable=True)
        if failure is not None:
            return failure
        if not (is_valid_frame(frame_start) and is_valid_frame(frame_end)):
            return self._fail(CommandResult.invalid("Frame range bounds must be integers >= 0"))
        if frame_start > frame_end:
            return self._fail(
                CommandResult.invalid(f"Invalid frame range {frame_start}-{frame_end}: start after end")
            )

        count = frame_end - frame_start + 1

        removed = [kf.id for kf in layer.keyframes if frame_start <= kf.frame <= frame_end]
        layer.keyframes = [kf for kf in layer.keyframes if not frame_start <= kf.frame <= frame_end]
        for keyframe in layer.keyframes:
            if keyframe.frame > frame_end:
                keyframe.frame -= count

        kept = []
        for tween in layer.tweens:
            if frame_start <= tween.start_frame <= frame_end or frame_start <= tween.end_frame <= frame_end:
                continue
            if tween.start_frame > frame_end:
                tween.start_frame -= count
                tween.end_frame -= count
            elif tween.start_frame < frame_start and tween.end_frame > frame_end:
                tween.end_frame -= count
            kept.append(tween)
        layer.tweens = kept

        self._publish(
            FramesDeleted,
            layer_id=layer_id,
            frame_start=frame_start,
            frame_end=frame_end,
            ids=removed,
        )
        Log.debug(
            f"KeyframeService: Deleted frames {frame_start}-{frame_end} on '{layer.name}' "
            f"({len(removed)} keyframe(s) removed)"
        )
        return CommandResult.success_result(f"Deleted frames {frame_start}-{frame_end}", data=removed)

    # =========================================================================
    # Exact edits
    # =========================================================================

    def delete_keyframe(self, layer_id: str, frame: Frame) -> CommandResult[Keyframe]:
        """Remove the keyframe at exactly ``frame``. Nothing shifts."""
        layer, failure = self._require_layer(layer_id, editable=True)
        if failure is not None:
            return failure
        keyframe = layer.find_keyframe(frame)
        if keyframe is None:
            return self._fail(CommandResult.not_found(f"No keyframe at frame {frame}"))

        layer.keyframes.remove(keyframe)
        self._publish(KeyframeDeleted, id=keyframe.id, layer_id=layer_id, frame=frame)
        return CommandResult.success_result(f"Keyframe at frame {frame} deleted", data=keyframe)

    def update_keyframe(
        self,
        layer_id: str,
        frame: Frame,
        properties: Dict[str, Any],
        replace: bool = False
    ) -> CommandResult[Keyframe]:
        """
        Merge ``properties`` into a keyframe, or replace its map entirely.

        Writing properties clears the blank flag.
        """
        layer, failure = self._require_layer(layer_id, editable=True)
        if failure is not None:
            return failure
        if not isinstance(properties, dict):
            return self._fail(CommandResult.invalid("Properties must be a mapping"))
        keyframe = layer.find_keyframe(frame)
        if keyframe is None:
            return self._fail(CommandResult.not_found(f"No keyframe at frame {frame}"))

        old_properties = dict(keyframe.properties)
        if replace:
            keyframe.properties = dict(properties)
        else:
            keyframe.properties.update(properties)
        if keyframe.properties:
            keyframe.is_empty = False

        self._publish(
            KeyframeUpdated,
            id=keyframe.id,
            layer_id=layer_id,
            frame=frame,
            old_properties=old_properties,
            new_properties=dict(keyframe.properties),
        )
        return CommandResult.success_result(f"Keyframe at frame {frame} updated", data=keyframe)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_keyframe(self, layer_id: str, frame: Frame) -> Optional[Keyframe]:
        layer = self._timeline.get(layer_id)
        if layer is None or layer.is_folder:
            return None
        return layer.find_keyframe(frame)

    def get_keyframes(self, layer_id: str) -> List[Keyframe]:
        layer = self._timeline.get(layer_id)
        if layer is None or layer.is_folder:
            return []
        return list(layer.keyframes)

    def get_keyframes_at_frame(self, frame: Frame) -> List[Tuple[Layer, Keyframe]]:
        """Every (layer, keyframe) sitting exactly on ``frame``, in display order."""
        hits = []
        for layer in self._timeline.iter_layers():
            keyframe = layer.find_keyframe(frame)
            if keyframe is not None:
                hits.append((layer, keyframe))
        return hits
