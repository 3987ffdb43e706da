"""
Clipboard Service

Moves keyframes between frames and layers, and copies/pastes them through a
per-timeline clipboard slot. Keyframes are addressed by "layerId:frame" ids.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from tweenline.application.api.result_types import CommandResult
from tweenline.application.events import EventBus, KeyframesCopied, KeyframesMoved, KeyframesPasted
from tweenline.application.services.service_base import TimelineServiceBase, is_valid_frame
from tweenline.domain.entities import Keyframe, Layer, Timeline, make_frame_id, parse_frame_id
from tweenline.utils.message import Log


@dataclass
class ClipboardEntry:
    """A copied keyframe and where it was copied from."""
    layer_id: str
    frame: int
    keyframe: Keyframe


class ClipboardService(TimelineServiceBase):
    """Keyframe transfer operations and the clipboard slot of one Timeline."""

    def __init__(self, timeline: Timeline, event_bus: EventBus):
        super().__init__(timeline, event_bus)
        self._clipboard: List[ClipboardEntry] = []

    def _resolve(self, frame_id: str) -> Optional[Tuple[Layer, Keyframe]]:
        """Look up a "layerId:frame" id; None if it does not address a keyframe."""
        try:
            layer_id, frame = parse_frame_id(frame_id)
        except ValueError:
            Log.warning(f"ClipboardService: Ignoring malformed frame id '{frame_id}'")
            return None
        layer = self._timeline.get(layer_id)
        if layer is None or layer.is_folder:
            return None
        keyframe = layer.find_keyframe(frame)
        if keyframe is None:
            return None
        return layer, keyframe

    # =========================================================================
    # Move
    # =========================================================================

    def move_keyframes(
        self,
        frame_ids: List[str],
        target_layer_id: str,
        target_frame: int
    ) -> CommandResult[List[Dict[str, Any]]]:
        """
        Move keyframes so that the FIRST id lands on ``target_frame`` in the
        target layer; the others keep their relative offsets.

        All-or-nothing: if any moved keyframe would land on a target-layer
        keyframe that is not itself being moved, nothing changes.

        Returns:
            CommandResult whose data lists the moves as dicts
            {id, old_layer_id, old_frame, new_frame}
        """
        if not frame_ids:
            return self._fail(CommandResult.invalid("No keyframes to move"))
        try:
            _, anchor_frame = parse_frame_id(frame_ids[0])
        except ValueError as e:
            return self._fail(CommandResult.invalid(str(e)))

        if not is_valid_frame(target_frame):
            return self._fail(CommandResult.invalid(f"Frame must be an integer >= 0, got {target_frame!r}"))
        target, failure = self._require_layer(target_layer_id, editable=True)
        if failure is not None:
            return failure

        offset = target_frame - anchor_frame
        resolved: List[Tuple[Layer, Keyframe]] = []
        seen = set()
        for frame_id in frame_ids:
            hit = self._resolve(frame_id)
            if hit is not None and hit[1].id not in seen:
                seen.add(hit[1].id)
                resolved.append(hit)
        if not resolved:
            return self._fail(CommandResult.not_found("None of the frame ids address a keyframe"))

        locked = [layer.name for layer, _ in resolved if layer.locked]
        if locked:
            return self._fail(CommandResult.invalid(f"Source layer '{locked[0]}' is locked"))

        landing = [kf.frame + offset for _, kf in resolved]
        if min(landing) < 0:
            return self._fail(CommandResult.invalid("Move would place a keyframe before frame 0"))

        moving_in_target = {make_frame_id(target_layer_id, kf.frame) for layer, kf in resolved if layer is target}
        clashes = [
            frame for frame in landing
            if target.has_keyframe_at(frame)
            and make_frame_id(target_layer_id, frame) not in moving_in_target
        ]
        if len(set(landing)) != len(landing):
            clashes.extend(frame for frame in landing if landing.count(frame) > 1)
        if clashes:
            return self._fail(CommandResult.conflict(
                f"Move conflicts with existing keyframes on '{target.name}'",
                errors=[f"Frame {frame} is occupied" for frame in sorted(set(clashes))],
            ))

        moves: List[Dict[str, Any]] = []
        for layer, keyframe in resolved:
            layer.keyframes.remove(keyframe)
        for (layer, keyframe), new_frame in zip(resolved, landing):
            moves.append({
                "id": keyframe.id,
                "old_layer_id": layer.id,
                "old_frame": keyframe.frame,
                "new_frame": new_frame,
            })
            keyframe.frame = new_frame
            target.keyframes.append(keyframe)
        target.sort_keyframes()

        self._publish(
            KeyframesMoved,
            layer_id=target_layer_id,
            target_frame=target_frame,
            frame_offset=offset,
            moves=moves,
        )
        Log.debug(f"ClipboardService: Moved {len(moves)} keyframe(s) to '{target.name}' (offset {offset})")
        return CommandResult.success_result(f"Moved {len(moves)} keyframe(s)", data=moves)

    # =========================================================================
    # Copy / paste
    # =========================================================================

    def copy_keyframes(self, frame_ids: List[str]) -> CommandResult[int]:
        """Snapshot the addressed keyframes into the clipboard, replacing its content."""
        entries = []
        for frame_id in frame_ids:
            hit = self._resolve(frame_id)
            if hit is not None:
                layer, keyframe = hit
                entries.append(ClipboardEntry(layer_id=layer.id, frame=keyframe.frame, keyframe=keyframe.clone()))
        if not entries:
            return self._fail(CommandResult.not_found("No valid keyframes to copy"))

        self._clipboard = entries
        self._publish(KeyframesCopied, count=len(entries), frame_ids=[
            make_frame_id(entry.layer_id, entry.frame) for entry in entries
        ])
        Log.info(f"ClipboardService: Copied {len(entries)} keyframe(s) to clipboard")
        return CommandResult.success_result(f"Copied {len(entries)} keyframe(s)", data=len(entries))

    def paste_keyframes(self, target_layer_id: str, target_frame: int) -> CommandResult[Dict[str, Any]]:
        """
        Paste the clipboard so its earliest keyframe lands on ``target_frame``.

        Entries landing on an occupied frame are skipped. Pasted keyframes
        get fresh ids; the clipboard keeps its content for further pastes.

        Returns:
            CommandResult with data {applied, skipped, keyframes}. WARNING
            status when some entries were skipped, CONFLICT when all were.
        """
        if not self._clipboard:
            return self._fail(CommandResult.not_found("No keyframes in clipboard"))
        target, failure = self._require_layer(target_layer_id, editable=True)
        if failure is not None:
            return failure
        if not is_valid_frame(target_frame):
            return self._fail(CommandResult.invalid(f"Frame must be an integer >= 0, got {target_frame!r}"))

        offset = target_frame - min(entry.frame for entry in self._clipboard)
        pasted: List[Keyframe] = []
        skipped: List[int] = []
        for entry in self._clipboard:
            new_frame = entry.frame + offset
            if target.has_keyframe_at(new_frame):
                Log.warning(f"ClipboardService: Skipping frame {new_frame} - conflict detected")
                skipped.append(new_frame)
                continue
            keyframe = entry.keyframe.clone(frame=new_frame, new_id=True)
            target.keyframes.append(keyframe)
            pasted.append(keyframe)

        if not pasted:
            return self._fail(CommandResult.conflict(
                "All frames conflict - nothing pasted",
                errors=[f"Frame {frame} is occupied" for frame in skipped],
            ))
        target.sort_keyframes()

        self._publish(
            KeyframesPasted,
            layer_id=target_layer_id,
            target_frame=target_frame,
            count=len(pasted),
            skipped=skipped,
            ids=[kf.id for kf in pasted],
        )
        data = {"applied": len(pasted), "skipped": len(skipped), "keyframes": pasted}
        message = f"Pasted {len(pasted)} keyframe(s)"
        if skipped:
            return CommandResult.warning_result(
                f"{message}, skipped {len(skipped)}",
                data=data,
                warnings=[f"Frame {frame} is occupied" for frame in skipped],
            )
        return CommandResult.success_result(message, data=data)

    def has_clipboard(self) -> bool:
        return bool(self._clipboard)

    def get_clipboard(self) -> List[ClipboardEntry]:
        return list(self._clipboard)

    def clear_clipboard(self) -> None:
        self._clipboard = []
