"""
Keyframe entity

An authored property snapshot at one frame of a layer.
"""
from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

Frame = Union[int, float]


def new_keyframe_id() -> str:
    return f"kf-{uuid.uuid4().hex[:12]}"


def make_frame_id(layer_id: str, frame: Frame) -> str:
    """Build the external "layerId:frame" address of a keyframe."""
    if isinstance(frame, float) and frame.is_integer():
        frame = int(frame)
    return f"{layer_id}:{frame}"


def parse_frame_id(frame_id: str) -> Tuple[str, int]:
    """
    Split a "layerId:frame" address.

    The last colon separates the frame, so layer ids may contain colons.

    Raises:
        ValueError: If the address has no colon or the frame is not an integer
    """
    layer_id, sep, frame_str = frame_id.rpartition(":")
    if not sep or not layer_id:
        raise ValueError(f"Invalid frame id '{frame_id}', expected 'layerId:frame'")
    return layer_id, int(frame_str)


@dataclass
class Keyframe:
    """
    Keyframe on a layer.

    Attributes:
        frame: Position on the layer. Integer for frame editing; the
            evaluator also accepts real-valued times.
        id: Stable identifier
        is_empty: True for a blank keyframe (deliberately empty content)
        properties: Property name -> numeric or opaque value
    """
    frame: Frame
    id: str = field(default_factory=new_keyframe_id)
    is_empty: bool = False
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def time(self) -> Frame:
        return self.frame

    @property
    def kind(self) -> str:
        return "blank" if self.is_empty else "content"

    def clone(self, frame: Optional[Frame] = None, new_id: bool = False) -> 'Keyframe':
        """Deep copy, optionally relocated and/or re-identified."""
        return Keyframe(
            frame=self.frame if frame is None else frame,
            id=new_keyframe_id() if new_id else self.id,
            is_empty=self.is_empty,
            properties=copy.deepcopy(self.properties),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "frame": self.frame,
            "isEmpty": self.is_empty,
            "properties": copy.deepcopy(self.properties),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Keyframe':
        """Create from dictionary. Accepts "time" in place of "frame"."""
        frame = data["frame"] if "frame" in data else data["time"]
        if isinstance(frame, bool) or not isinstance(frame, (int, float)) or frame < 0:
            raise ValueError(f"Keyframe frame must be a number >= 0, got {frame!r}")
        properties = data.get("properties") or {}
        if not isinstance(properties, dict):
            raise ValueError("Keyframe properties must be a mapping")
        return cls(
            frame=frame,
            id=data.get("id") or new_keyframe_id(),
            is_empty=bool(data.get("isEmpty", False)),
            properties=copy.deepcopy(properties),
        )

    def __repr__(self) -> str:
        return f"Keyframe(id='{self.id}', frame={self.frame}, is_empty={self.is_empty})"
