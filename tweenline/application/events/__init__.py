"""Event system for application layer"""

from tweenline.application.events.events import (
    DomainEvent,
    # Layer tree events
    ObjectAdded,
    BeforeObjectDelete,
    ObjectDeleted,
    ObjectRenamed,
    ObjectReordered,
    ObjectReparented,
    ObjectVisibilityChanged,
    ObjectLockChanged,
    # Keyframe events
    KeyframeAdded,
    KeyframeDeleted,
    KeyframeUpdated,
    FrameInserted,
    FramesDeleted,
    # Clipboard events
    KeyframesMoved,
    KeyframesCopied,
    KeyframesPasted,
    # Tween events
    TweenAdded,
    TweenRemoved,
    TweenUpdated,
    # Selection events
    SelectionChanged,
    # Timeline events
    TimelineLoaded,
    CurrentTimeChanged,
    DurationChanged,
    TimeScaleChanged,
)
from tweenline.application.events.event_bus import EventBus, ALL_EVENTS

__all__ = [
    'DomainEvent',
    'ObjectAdded',
    'BeforeObjectDelete',
    'ObjectDeleted',
    'ObjectRenamed',
    'ObjectReordered',
    'ObjectReparented',
    'ObjectVisibilityChanged',
    'ObjectLockChanged',
    'KeyframeAdded',
    'KeyframeDeleted',
    'KeyframeUpdated',
    'FrameInserted',
    'FramesDeleted',
    'KeyframesMoved',
    'KeyframesCopied',
    'KeyframesPasted',
    'TweenAdded',
    'TweenRemoved',
    'TweenUpdated',
    'SelectionChanged',
    'TimelineLoaded',
    'CurrentTimeChanged',
    'DurationChanged',
    'TimeScaleChanged',
    'EventBus',
    'ALL_EVENTS',
]
