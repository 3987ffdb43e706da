"""
Domain Events

Events that represent significant occurrences on a timeline.
Every successful mutation publishes exactly one of these; the class-level
``name`` is the operation kind consumers subscribe to.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional


@dataclass
class DomainEvent:
    """Base class for all domain events"""
    name: ClassVar[str] = "DomainEvent"
    timeline_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> str:
        return self.name


# Layer tree events
@dataclass
class ObjectAdded(DomainEvent):
    """
    Data fields:
        - id: New layer/folder id
        - type: "layer" or "folder"
        - parent_id: Parent folder id, None for root
    """
    name: ClassVar[str] = "object.added"


@dataclass
class BeforeObjectDelete(DomainEvent):
    """
    Cancellable notification raised before a layer or folder is deleted.

    Subscribers veto the delete by calling cancel(). This is the only
    cancellable event.

    Data fields:
        - id: Object about to be deleted
        - ids: Every id in the subtree that would be removed
    """
    name: ClassVar[str] = "object.before_delete"
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ObjectDeleted(DomainEvent):
    name: ClassVar[str] = "object.deleted"


@dataclass
class ObjectRenamed(DomainEvent):
    name: ClassVar[str] = "object.renamed"


@dataclass
class ObjectReordered(DomainEvent):
    name: ClassVar[str] = "object.reordered"


@dataclass
class ObjectReparented(DomainEvent):
    name: ClassVar[str] = "object.reparented"


@dataclass
class ObjectVisibilityChanged(DomainEvent):
    name: ClassVar[str] = "object.visibility_changed"


@dataclass
class ObjectLockChanged(DomainEvent):
    name: ClassVar[str] = "object.lock_changed"


# Keyframe events
@dataclass
class KeyframeAdded(DomainEvent):
    """
    Data fields:
        - id: Keyframe id
        - layer_id: Owning layer
        - frame: Frame the keyframe was inserted at
        - type: "content" or "blank"
    """
    name: ClassVar[str] = "keyframe.added"


@dataclass
class KeyframeDeleted(DomainEvent):
    name: ClassVar[str] = "keyframe.deleted"


@dataclass
class KeyframeUpdated(DomainEvent):
    name: ClassVar[str] = "keyframe.updated"


@dataclass
class FrameInserted(DomainEvent):
    name: ClassVar[str] = "frame.inserted"


@dataclass
class FramesDeleted(DomainEvent):
    """
    Data fields:
        - layer_id: Affected layer
        - frame_start / frame_end: Inclusive range that was cut
        - ids: Keyframe ids removed by the cut
    """
    name: ClassVar[str] = "frames.deleted"


# Clipboard events
@dataclass
class KeyframesMoved(DomainEvent):
    name: ClassVar[str] = "keyframes.moved"


@dataclass
class KeyframesCopied(DomainEvent):
    name: ClassVar[str] = "keyframes.copied"


@dataclass
class KeyframesPasted(DomainEvent):
    name: ClassVar[str] = "keyframes.pasted"


# Tween events
@dataclass
class TweenAdded(DomainEvent):
    name: ClassVar[str] = "tween.added"


@dataclass
class TweenRemoved(DomainEvent):
    name: ClassVar[str] = "tween.removed"


@dataclass
class TweenUpdated(DomainEvent):
    name: ClassVar[str] = "tween.updated"


# Selection events
@dataclass
class SelectionChanged(DomainEvent):
    name: ClassVar[str] = "selection.changed"


# Timeline events
@dataclass
class TimelineLoaded(DomainEvent):
    """Published after a snapshot import replaced the whole tree."""
    name: ClassVar[str] = "timeline.loaded"


@dataclass
class CurrentTimeChanged(DomainEvent):
    name: ClassVar[str] = "timeline.current_time_changed"


@dataclass
class DurationChanged(DomainEvent):
    name: ClassVar[str] = "timeline.duration_changed"


@dataclass
class TimeScaleChanged(DomainEvent):
    name: ClassVar[str] = "timeline.time_scale_changed"
