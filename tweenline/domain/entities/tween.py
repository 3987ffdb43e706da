"""
Tween entity

A declared interpolation span between two keyframes of the same layer.
"""
from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict

from tweenline.domain.easing import LINEAR
from tweenline.domain.entities.keyframe import Frame


def new_tween_id() -> str:
    return f"tw-{uuid.uuid4().hex[:12]}"


@dataclass
class Tween:
    """
    Motion tween.

    Intervals are closed: [start_frame, end_frame]. Two tweens on one layer
    may not share even a single frame.
    """
    start_frame: Frame
    end_frame: Frame
    easing: str = LINEAR
    id: str = field(default_factory=new_tween_id)
    properties: Dict[str, Any] = field(default_factory=dict)

    def overlaps(self, start: Frame, end: Frame) -> bool:
        """
        True if the closed interval [start, end] touches this tween:
        either endpoint falls inside it, or the interval contains it.
        """
        starts_inside = self.start_frame <= start <= self.end_frame
        ends_inside = self.start_frame <= end <= self.end_frame
        contains = start <= self.start_frame and end >= self.end_frame
        return starts_inside or ends_inside or contains

    def contains_frame(self, frame: Frame) -> bool:
        """Half-open on the left: the start frame belongs to its keyframe."""
        return self.start_frame < frame <= self.end_frame

    def matches(self, start: Frame, end: Frame) -> bool:
        return self.start_frame == start and self.end_frame == end

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "startFrame": self.start_frame,
            "endFrame": self.end_frame,
            "easing": self.easing,
            "properties": copy.deepcopy(self.properties),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Tween':
        """Create from dictionary. Accepts "type" as the easing name."""
        start = data["startFrame"]
        end = data["endFrame"]
        if start >= end:
            raise ValueError(f"Tween start {start} must be before end {end}")
        return cls(
            start_frame=start,
            end_frame=end,
            easing=data.get("easing") or data.get("type") or LINEAR,
            id=data.get("id") or new_tween_id(),
            properties=copy.deepcopy(data.get("properties") or {}),
        )

    def __repr__(self) -> str:
        return f"Tween(id='{self.id}', {self.start_frame}->{self.end_frame}, easing='{self.easing}')"
