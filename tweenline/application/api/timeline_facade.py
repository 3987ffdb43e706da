"""
Timeline Facade

Unified interface for all operations on one timeline instance.
Used by hosts (editors, scripts, tests) instead of wiring services by hand.

Mutating methods return CommandResult[T] where T is the type of data returned:
- CommandResult[Layer] for layer/folder operations
- CommandResult[Keyframe] for single keyframe edits
- CommandResult[Tween] for tween operations
- etc.
Queries return plain values.
"""
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, Union

import numpy as np

from tweenline.application.api.result_types import CommandResult
from tweenline.application.events import DomainEvent
from tweenline.application.services import LayerState
from tweenline.domain.entities import Frame, FrameType, Keyframe, Layer, Timeline, Tween


class TimelineFacade:
    """
    Single entry point over the services sharing one Timeline and EventBus.

    Built by create_timeline(); several facades can coexist, each with its
    own timeline, bus, clipboard and selection.
    """

    def __init__(self, services):
        """
        Initialize timeline facade.

        Args:
            services: ServiceContainer with all timeline services
        """
        self.timeline: Timeline = services.timeline
        self.event_bus = services.event_bus
        self.settings = services.settings
        self.layer_tree = services.layer_tree_service
        self.keyframes = services.keyframe_service
        self.tweens = services.tween_service
        self.evaluator = services.evaluator
        self.clipboard = services.clipboard_service
        self.selection = services.selection_service
        self.snapshots = services.snapshot_service
        self.time = services.time_service

    # =========================================================================
    # Events
    # =========================================================================

    def subscribe(self, event: Union[str, Type[DomainEvent]], handler: Callable[[DomainEvent], None]) -> None:
        self.event_bus.subscribe(event, handler)

    def unsubscribe(self, event: Union[str, Type[DomainEvent]], handler: Callable[[DomainEvent], None]) -> None:
        self.event_bus.unsubscribe(event, handler)

    # =========================================================================
    # Layer tree
    # =========================================================================

    def add_layer(self, name: Optional[str] = None, parent_id: Optional[str] = None) -> CommandResult[Layer]:
        return self.layer_tree.add_layer(name, parent_id)

    def add_folder(self, name: Optional[str] = None, parent_id: Optional[str] = None) -> CommandResult[Layer]:
        return self.layer_tree.add_folder(name, parent_id)

    def delete_object(self, object_id: str) -> CommandResult[List[str]]:
        return self.layer_tree.delete_object(object_id)

    def rename_object(self, object_id: str, new_name: str) -> CommandResult[Layer]:
        return self.layer_tree.rename_object(object_id, new_name)

    def reorder_object(self, object_id: str, new_index: int) -> CommandResult[Layer]:
        return self.layer_tree.reorder_object(object_id, new_index)

    def reparent_object(self, object_id: str, new_parent_id: Optional[str]) -> CommandResult[Layer]:
        return self.layer_tree.reparent_object(object_id, new_parent_id)

    def toggle_visibility(self, object_id: str) -> CommandResult[Layer]:
        return self.layer_tree.toggle_visibility(object_id)

    def toggle_lock(self, object_id: str) -> CommandResult[Layer]:
        return self.layer_tree.toggle_lock(object_id)

    def get_layer(self, object_id: str) -> Optional[Layer]:
        return self.layer_tree.get_layer(object_id)

    def get_layers(self, flatten: bool = True) -> List[Any]:
        return self.layer_tree.get_layers(flatten)

    def get_layer_hierarchy(self) -> List[Dict[str, Any]]:
        return self.layer_tree.get_layer_hierarchy()

    def get_parent_children(self, object_id: str) -> List[Layer]:
        return self.layer_tree.get_parent_children(object_id)

    # =========================================================================
    # Keyframes
    # =========================================================================

    def insert_keyframe(
        self,
        layer_id: str,
        frame: int,
        properties: Optional[Dict[str, Any]] = None
    ) -> CommandResult[Keyframe]:
        return self.keyframes.insert_keyframe(layer_id, frame, properties)

    def insert_blank_keyframe(self, layer_id: str, frame: int) -> CommandResult[Keyframe]:
        return self.keyframes.insert_blank_keyframe(layer_id, frame)

    def insert_frame(self, layer_id: str, frame: int) -> CommandResult[None]:
        return self.keyframes.insert_frame(layer_id, frame)

    def delete_frames(self, layer_id: str, frame_start: int, frame_end: int) -> CommandResult[List[str]]:
        return self.keyframes.delete_frames(layer_id, frame_start, frame_end)

    def delete_keyframe(self, layer_id: str, frame: Frame) -> CommandResult[Keyframe]:
        return self.keyframes.delete_keyframe(layer_id, frame)

    def update_keyframe(
        self,
        layer_id: str,
        frame: Frame,
        properties: Dict[str, Any],
        replace: bool = False
    ) -> CommandResult[Keyframe]:
        return self.keyframes.update_keyframe(layer_id, frame, properties, replace)

    def get_keyframe(self, layer_id: str, frame: Frame) -> Optional[Keyframe]:
        return self.keyframes.get_keyframe(layer_id, frame)

    def get_keyframes(self, layer_id: str) -> List[Keyframe]:
        return self.keyframes.get_keyframes(layer_id)

    def get_keyframes_at_frame(self, frame: Frame) -> List[Tuple[Layer, Keyframe]]:
        return self.keyframes.get_keyframes_at_frame(frame)

    # =========================================================================
    # Tweens
    # =========================================================================

    def create_motion_tween(
        self,
        layer_id: str,
        start_frame: Frame,
        end_frame: Frame,
        easing: Optional[str] = None
    ) -> CommandResult[Tween]:
        return self.tweens.create_motion_tween(
            layer_id, start_frame, end_frame, easing or self.settings.default_easing
        )

    def remove_tween(self, layer_id: str, start_frame: Frame, end_frame: Frame) -> CommandResult[Tween]:
        return self.tweens.remove_tween(layer_id, start_frame, end_frame)

    def update_tween(
        self,
        layer_id: str,
        start_frame: Frame,
        end_frame: Frame,
        new_start: Optional[Frame] = None,
        new_end: Optional[Frame] = None,
        easing: Optional[str] = None
    ) -> CommandResult[Tween]:
        return self.tweens.update_tween(layer_id, start_frame, end_frame, new_start, new_end, easing)

    def get_tween_at_frame(self, layer_id: str, frame: Frame) -> Optional[Tween]:
        return self.tweens.get_tween_at_frame(layer_id, frame)

    def is_frame_in_tween(self, layer_id: str, frame: Frame) -> bool:
        return self.tweens.is_frame_in_tween(layer_id, frame)

    def get_frame_type(self, layer_id: str, frame: Frame) -> FrameType:
        return self.tweens.get_frame_type(layer_id, frame)

    # =========================================================================
    # Evaluation
    # =========================================================================

    def evaluate_at_time(self, time: float) -> List[LayerState]:
        return self.evaluator.evaluate_at_time(time)

    def evaluate_layer_at_time(self, layer_id: str, time: float) -> Optional[LayerState]:
        return self.evaluator.evaluate_layer_at_time(layer_id, time)

    def get_keyframes_at_time(self, time: float, tolerance: Optional[float] = None) -> List[Tuple[str, Keyframe]]:
        return self.evaluator.get_keyframes_at_time(time, tolerance)

    def sample_property(self, layer_id: str, key: str, times: Iterable[float]) -> np.ndarray:
        return self.evaluator.sample_property(layer_id, key, times)

    # =========================================================================
    # Clipboard and selection
    # =========================================================================

    def move_keyframes(self, frame_ids: List[str], target_layer_id: str, target_frame: int) -> CommandResult:
        return self.clipboard.move_keyframes(frame_ids, target_layer_id, target_frame)

    def copy_keyframes(self, frame_ids: List[str]) -> CommandResult[int]:
        return self.clipboard.copy_keyframes(frame_ids)

    def paste_keyframes(self, target_layer_id: str, target_frame: int) -> CommandResult:
        return self.clipboard.paste_keyframes(target_layer_id, target_frame)

    def has_clipboard(self) -> bool:
        return self.clipboard.has_clipboard()

    def clear_clipboard(self) -> None:
        self.clipboard.clear_clipboard()

    def copy_selection(self) -> CommandResult[int]:
        """Copy whatever keyframes the current selection addresses."""
        return self.clipboard.copy_keyframes(self.selection.get_selected_frames())

    # =========================================================================
    # Snapshot
    # =========================================================================

    def export_snapshot(self) -> Dict[str, Any]:
        return self.snapshots.export_snapshot()

    def import_snapshot(self, data: Dict[str, Any]) -> CommandResult[Timeline]:
        return self.snapshots.import_snapshot(data)

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.snapshots.to_json(indent)

    def from_json(self, text: str) -> CommandResult[Timeline]:
        return self.snapshots.from_json(text)

    # =========================================================================
    # Time
    # =========================================================================

    @property
    def current_time(self) -> float:
        return self.time.current_time

    @current_time.setter
    def current_time(self, value: float) -> None:
        self.time.set_current_time(value)

    @property
    def duration(self) -> float:
        return self.time.duration

    @duration.setter
    def duration(self, value: float) -> None:
        self.time.set_duration(value)

    @property
    def time_scale(self) -> float:
        return self.time.time_scale

    @time_scale.setter
    def time_scale(self, value: float) -> None:
        self.time.set_time_scale(value)

    def extend_duration_if_needed(self, time: float, padding: Optional[float] = None) -> bool:
        return self.time.extend_duration_if_needed(time, padding)

    def get_debug_info(self) -> Dict[str, Any]:
        return self.time.get_debug_info()
