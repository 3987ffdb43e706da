"""
Application Bootstrap

Service initialization and dependency injection for one timeline.
Nothing here is a singleton: every call builds a fresh Timeline, EventBus
and set of services, so independent timelines coexist in one process.
"""
from typing import Any, Dict, Optional

from tweenline.application.api.timeline_facade import TimelineFacade
from tweenline.application.events import EventBus
from tweenline.application.services import (
    ClipboardService,
    KeyframeService,
    LayerTreeService,
    SelectionService,
    SnapshotService,
    TimeService,
    TimelineEvaluator,
    TweenService,
)
from tweenline.application.settings import TimelineSettings
from tweenline.domain.entities import Timeline
from tweenline.utils.message import Log


class ServiceContainer:
    """Container for the services sharing one Timeline"""

    def __init__(
        self,
        timeline: Timeline,
        event_bus: EventBus,
        settings: TimelineSettings,
        layer_tree_service: LayerTreeService,
        keyframe_service: KeyframeService,
        tween_service: TweenService,
        evaluator: TimelineEvaluator,
        clipboard_service: ClipboardService,
        selection_service: SelectionService,
        snapshot_service: SnapshotService,
        time_service: TimeService,
    ):
        self.timeline = timeline
        self.event_bus = event_bus
        self.settings = settings
        self.layer_tree_service = layer_tree_service
        self.keyframe_service = keyframe_service
        self.tween_service = tween_service
        self.evaluator = evaluator
        self.clipboard_service = clipboard_service
        self.selection_service = selection_service
        self.snapshot_service = snapshot_service
        self.time_service = time_service
        self.facade: Optional[TimelineFacade] = None

    def cleanup(self) -> None:
        """Drop subscribers and transient editing state."""
        self.event_bus.clear()
        self.clipboard_service.clear_clipboard()
        self.selection_service.clear_selection()
        Log.debug(f"ServiceContainer: Cleaned up timeline {self.timeline.id}")


def initialize_services(
    settings: Optional[TimelineSettings] = None,
    event_bus: Optional[EventBus] = None
) -> ServiceContainer:
    """
    Initialize all services for a new, empty timeline.

    Args:
        settings: Engine defaults. Validated before use.
        event_bus: Bus to publish on; a new one is created if None

    Returns:
        ServiceContainer with all initialized services and its facade

    Raises:
        ValueError: If the settings fail validation
    """
    settings = settings or TimelineSettings()
    validation = settings.validate()
    if not validation.valid:
        raise ValueError(f"Invalid timeline settings: {'; '.join(validation.errors)}")

    timeline = Timeline(
        duration=settings.default_duration,
        time_scale=max(settings.min_time_scale, settings.default_time_scale),
    )
    event_bus = event_bus or EventBus()

    container = ServiceContainer(
        timeline=timeline,
        event_bus=event_bus,
        settings=settings,
        layer_tree_service=LayerTreeService(timeline, event_bus, settings),
        keyframe_service=KeyframeService(timeline, event_bus),
        tween_service=TweenService(timeline, event_bus),
        evaluator=TimelineEvaluator(timeline, settings),
        clipboard_service=ClipboardService(timeline, event_bus),
        selection_service=SelectionService(timeline, event_bus),
        snapshot_service=SnapshotService(timeline, event_bus, settings),
        time_service=TimeService(timeline, event_bus, settings),
    )
    container.facade = TimelineFacade(container)

    Log.info(f"Timeline {timeline.id} initialized (duration={timeline.duration})")
    return container


def create_timeline(
    settings: Optional[TimelineSettings] = None,
    snapshot: Optional[Dict[str, Any]] = None,
    event_bus: Optional[EventBus] = None
) -> TimelineFacade:
    """
    Build a ready-to-use timeline.

    Args:
        settings: Engine defaults
        snapshot: Optional snapshot dict to load into the new timeline
        event_bus: Optional bus to publish on

    Returns:
        TimelineFacade over the new timeline

    Raises:
        ValueError: If the settings are invalid or the snapshot cannot be loaded
    """
    container = initialize_services(settings, event_bus)
    if snapshot is not None:
        result = container.snapshot_service.import_snapshot(snapshot)
        if not result.success:
            raise ValueError(result.message)
    return container.facade
