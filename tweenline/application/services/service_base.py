"""
Service Base

Shared plumbing for services that edit one Timeline: layer lookup with
structured failures, and event publishing tagged with the timeline id.
"""
from typing import Any, Optional, Tuple, Type

from tweenline.application.api.result_types import CommandResult, ErrorKind
from tweenline.application.events import DomainEvent, EventBus
from tweenline.domain.entities import Layer, Timeline
from tweenline.utils.message import Log


def is_valid_frame(frame: Any) -> bool:
    """Editing operations address whole frames >= 0."""
    return isinstance(frame, int) and not isinstance(frame, bool) and frame >= 0


class TimelineServiceBase:
    """Base class for services operating on an injected Timeline and EventBus."""

    def __init__(self, timeline: Timeline, event_bus: EventBus):
        self._timeline = timeline
        self._event_bus = event_bus

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    def _publish(self, event_cls: Type[DomainEvent], **data) -> DomainEvent:
        event = event_cls(timeline_id=self._timeline.id, data=data)
        self._event_bus.publish(event)
        return event

    def _fail(self, result: CommandResult) -> CommandResult:
        """Log a failure at the level its kind deserves and hand it back."""
        text = f"{type(self).__name__}: {result.message}"
        if result.error_kind in (ErrorKind.CONFLICT, ErrorKind.CANCELLED):
            Log.warning(text)
        else:
            Log.error(text)
        return result

    def _require_layer(
        self,
        layer_id: str,
        editable: bool = False
    ) -> Tuple[Optional[Layer], Optional[CommandResult]]:
        """
        Resolve a non-folder layer.

        Args:
            layer_id: Layer to resolve
            editable: Also refuse locked layers

        Returns:
            (layer, None) on success, (None, failure result) otherwise
        """
        layer = self._timeline.get(layer_id)
        if layer is None:
            return None, self._fail(CommandResult.not_found(f"Layer {layer_id} not found"))
        if layer.is_folder:
            return None, self._fail(CommandResult.invalid(f"'{layer_id}' is a folder and holds no keyframes"))
        if editable and layer.locked:
            return None, self._fail(CommandResult.invalid(f"Layer {layer_id} is locked"))
        return layer, None
