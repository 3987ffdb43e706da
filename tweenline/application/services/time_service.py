"""
Time Service

Playhead, duration and display time-scale of a timeline. Values are clamped
rather than rejected: current time to [0, duration], time scale to the
configured minimum.
"""
from typing import Any, Dict, Optional

from tweenline.application.api.result_types import CommandResult
from tweenline.application.events import CurrentTimeChanged, DurationChanged, EventBus, TimeScaleChanged
from tweenline.application.services.service_base import TimelineServiceBase
from tweenline.application.settings import TimelineSettings
from tweenline.domain.entities import LayerType, Timeline


class TimeService(TimelineServiceBase):
    """Time-related state of one Timeline."""

    def __init__(
        self,
        timeline: Timeline,
        event_bus: EventBus,
        settings: Optional[TimelineSettings] = None
    ):
        super().__init__(timeline, event_bus)
        self._settings = settings or TimelineSettings()

    @property
    def current_time(self) -> float:
        return self._timeline.current_time

    @property
    def duration(self) -> float:
        return self._timeline.duration

    @property
    def time_scale(self) -> float:
        return self._timeline.time_scale

    def set_current_time(self, time: float) -> CommandResult[float]:
        clamped = max(0.0, min(float(time), self._timeline.duration))
        old = self._timeline.current_time
        self._timeline.current_time = clamped
        if clamped != old:
            self._publish(CurrentTimeChanged, old_value=old, new_value=clamped)
        return CommandResult.success_result(f"Current time set to {clamped}", data=clamped)

    def set_duration(self, duration: float) -> CommandResult[float]:
        """Change the duration; the playhead is pulled back inside the new range."""
        if duration < 0:
            return self._fail(CommandResult.invalid(f"Duration must be >= 0, got {duration}"))
        old = self._timeline.duration
        self._timeline.duration = float(duration)
        self._timeline.current_time = min(self._timeline.current_time, self._timeline.duration)
        if self._timeline.duration != old:
            self._publish(DurationChanged, old_value=old, new_value=self._timeline.duration)
        return CommandResult.success_result(f"Duration set to {self._timeline.duration}", data=self._timeline.duration)

    def extend_duration_if_needed(self, time: float, padding: Optional[float] = None) -> bool:
        """
        Grow the duration to ``time + padding`` when that passes the current end.

        Returns:
            True if the duration changed
        """
        if padding is None:
            padding = self._settings.auto_extend_padding
        if time + padding <= self._timeline.duration:
            return False
        self.set_duration(time + padding)
        return True

    def set_time_scale(self, scale: float) -> CommandResult[float]:
        clamped = max(self._settings.min_time_scale, float(scale))
        old = self._timeline.time_scale
        self._timeline.time_scale = clamped
        if clamped != old:
            self._publish(TimeScaleChanged, old_value=old, new_value=clamped)
        return CommandResult.success_result(f"Time scale set to {clamped}", data=clamped)

    def get_debug_info(self) -> Dict[str, Any]:
        """Counts and time state for diagnostics."""
        nodes = self._timeline.nodes.values()
        return {
            "timeline_id": self._timeline.id,
            "layer_count": sum(1 for node in nodes if node.type == LayerType.LAYER),
            "folder_count": sum(1 for node in nodes if node.type == LayerType.FOLDER),
            "keyframe_count": sum(len(node.keyframes) for node in nodes),
            "tween_count": sum(len(node.tweens) for node in nodes),
            "duration": self._timeline.duration,
            "current_time": self._timeline.current_time,
            "time_scale": self._timeline.time_scale,
        }
