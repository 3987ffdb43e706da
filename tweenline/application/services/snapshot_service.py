"""
Snapshot Service

Exports the whole timeline as a plain snapshot dict (or JSON text) and
restores it. A restore either replaces the entire tree or leaves the
current state untouched.

Snapshot shape:
    {
        "layers": [ {id, name, type, ..., children | keyframes + tweens}, ... ],
        "duration": 600.0,
        "currentTime": 0.0,
        "timeScale": 1.0
    }
"""
import json
from typing import Any, Dict, Optional

from tweenline.application.api.result_types import CommandResult
from tweenline.application.events import EventBus, TimelineLoaded
from tweenline.application.services.service_base import TimelineServiceBase
from tweenline.application.settings import TimelineSettings
from tweenline.domain.entities import Timeline
from tweenline.domain.invariants import timeline_violations
from tweenline.utils.message import Log


class SnapshotError(Exception):
    """Raised when a snapshot cannot be turned into a valid timeline."""


class SnapshotService(TimelineServiceBase):
    """Service for exporting and restoring timeline snapshots."""

    def __init__(
        self,
        timeline: Timeline,
        event_bus: EventBus,
        settings: Optional[TimelineSettings] = None
    ):
        super().__init__(timeline, event_bus)
        self._settings = settings or TimelineSettings()

    def export_snapshot(self) -> Dict[str, Any]:
        """Deep, detached copy of the timeline state."""
        return self._timeline.to_dict()

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.export_snapshot(), indent=indent)

    def import_snapshot(self, data: Dict[str, Any]) -> CommandResult[Timeline]:
        """
        Replace the whole timeline with the content of a snapshot.

        Keyframes and tweens are re-sorted. Duplicate ids, duplicate frames
        on a layer, overlapping tweens and malformed entries reject the
        snapshot and leave the current timeline unchanged.
        """
        try:
            loaded = self._build(data)
        except SnapshotError as e:
            return self._fail(CommandResult.invalid(f"Invalid snapshot: {e}"))

        self._timeline.replace_with(loaded)
        self._publish(
            TimelineLoaded,
            layer_count=len(self._timeline),
            duration=self._timeline.duration,
        )
        Log.info(f"SnapshotService: Loaded snapshot with {len(self._timeline)} object(s)")
        return CommandResult.success_result("Snapshot loaded", data=self._timeline)

    def from_json(self, text: str) -> CommandResult[Timeline]:
        try:
            data = json.loads(text)
        except (TypeError, json.JSONDecodeError) as e:
            return self._fail(CommandResult.invalid(f"Invalid snapshot JSON: {e}"))
        return self.import_snapshot(data)

    def _build(self, data: Dict[str, Any]) -> Timeline:
        """
        Parse and validate a snapshot into a new, unattached Timeline.

        Raises:
            SnapshotError: If the snapshot is malformed or breaks an invariant
        """
        try:
            loaded = Timeline.from_dict(data, id=self._timeline.id)
        except (ValueError, KeyError, TypeError) as e:
            raise SnapshotError(str(e) or type(e).__name__) from e

        keyframe_ids = set()
        for layer in loaded.iter_layers():
            for keyframe in layer.keyframes:
                if keyframe.id in keyframe_ids:
                    raise SnapshotError(f"Duplicate keyframe id '{keyframe.id}'")
                keyframe_ids.add(keyframe.id)

        problems = timeline_violations(loaded)
        if problems:
            raise SnapshotError("; ".join(problems))

        if loaded.duration < 0:
            raise SnapshotError(f"Duration must be >= 0, got {loaded.duration}")
        loaded.current_time = max(0.0, min(loaded.current_time, loaded.duration))
        loaded.time_scale = max(self._settings.min_time_scale, loaded.time_scale)
        return loaded
