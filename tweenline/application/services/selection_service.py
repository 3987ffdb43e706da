"""
Selection Service

Tracks which frame cells ("layerId:frame" ids) are selected. Selection is
editing state only: it never changes the timeline data.
"""
from __future__ import annotations

from typing import List, Optional

from tweenline.application.api.result_types import CommandResult
from tweenline.application.events import EventBus, SelectionChanged
from tweenline.application.services.service_base import TimelineServiceBase
from tweenline.domain.entities import Timeline, make_frame_id, parse_frame_id


class SelectionService(TimelineServiceBase):
    """Ordered frame selection with a last-selected anchor for range selection."""

    def __init__(self, timeline: Timeline, event_bus: EventBus):
        super().__init__(timeline, event_bus)
        self._selected: List[str] = []
        self._last_selected: Optional[str] = None

    def select_frame(self, frame_id: str) -> CommandResult[List[str]]:
        """Replace the selection with a single frame."""
        failure = self._check(frame_id)
        if failure is not None:
            return failure
        self._selected = [frame_id]
        self._last_selected = frame_id
        return self._changed()

    def deselect_frame(self, frame_id: str) -> CommandResult[List[str]]:
        if frame_id not in self._selected:
            return CommandResult.success_result("Frame was not selected", data=self.get_selected_frames())
        self._selected.remove(frame_id)
        if self._last_selected == frame_id:
            self._last_selected = None
        return self._changed()

    def toggle_selection(self, frame_id: str) -> CommandResult[List[str]]:
        """Add a frame to the selection, or remove it if already selected."""
        if frame_id in self._selected:
            return self.deselect_frame(frame_id)
        failure = self._check(frame_id)
        if failure is not None:
            return failure
        self._selected.append(frame_id)
        self._last_selected = frame_id
        return self._changed()

    def select_range(self, start_id: str, end_id: str) -> CommandResult[List[str]]:
        """
        Select every frame between two frame ids of the same layer,
        inclusive and in either order, replacing the current selection.
        """
        try:
            start_layer, start_frame = parse_frame_id(start_id)
            end_layer, end_frame = parse_frame_id(end_id)
        except ValueError as e:
            return self._fail(CommandResult.invalid(str(e)))
        if start_layer != end_layer:
            return self._fail(CommandResult.invalid("Range selection across layers is not supported"))
        if start_layer not in self._timeline:
            return self._fail(CommandResult.not_found(f"Layer {start_layer} not found"))

        low, high = sorted((start_frame, end_frame))
        if low < 0:
            return self._fail(CommandResult.invalid(f"Frame must be >= 0, got {low}"))
        self._selected = [make_frame_id(start_layer, frame) for frame in range(low, high + 1)]
        self._last_selected = end_id
        return self._changed()

    def clear_selection(self) -> CommandResult[List[str]]:
        self._selected = []
        self._last_selected = None
        return self._changed()

    def get_selected_frames(self) -> List[str]:
        """Selected frame ids in the order they were selected."""
        return list(self._selected)

    def is_selected(self, frame_id: str) -> bool:
        return frame_id in self._selected

    @property
    def last_selected(self) -> Optional[str]:
        return self._last_selected

    def _check(self, frame_id: str) -> Optional[CommandResult]:
        try:
            layer_id, frame = parse_frame_id(frame_id)
        except ValueError as e:
            return self._fail(CommandResult.invalid(str(e)))
        if layer_id not in self._timeline:
            return self._fail(CommandResult.not_found(f"Layer {layer_id} not found"))
        if frame < 0:
            return self._fail(CommandResult.invalid(f"Frame must be >= 0, got {frame}"))
        return None

    def _changed(self) -> CommandResult[List[str]]:
        selected = self.get_selected_frames()
        self._publish(SelectionChanged, selected=selected, last_selected=self._last_selected)
        return CommandResult.success_result(f"{len(selected)} frame(s) selected", data=selected)
