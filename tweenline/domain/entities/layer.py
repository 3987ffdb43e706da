"""
Layer entity

A timeline track holding keyframes and tweens, or a folder grouping child
layers. Children are referenced by id; the Timeline arena owns the nodes.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from tweenline.domain.entities.keyframe import Frame, Keyframe
from tweenline.domain.entities.tween import Tween


class LayerType(Enum):
    LAYER = "layer"
    FOLDER = "folder"


class FrameType(Enum):
    """What occupies a frame cell of a layer."""
    EMPTY = "empty"
    STANDARD = "standard"
    KEYFRAME = "keyframe"
    TWEEN = "tween"


def new_layer_id(layer_type: LayerType = LayerType.LAYER) -> str:
    return f"{layer_type.value}-{uuid.uuid4().hex[:12]}"


@dataclass
class Layer:
    """
    Layer or folder node.

    Attributes:
        name: Display name
        type: LayerType.LAYER or LayerType.FOLDER
        id: Stable handle, unique within a timeline
        visible: Hidden layers (and everything under a hidden folder) are skipped by evaluation
        locked: Locked layers refuse keyframe and tween edits
        color: Display color
        parent_id: Back-reference to the owning folder, None at root
        children: Ordered child ids (folders only)
        keyframes: Sorted ascending by frame (layers only)
        tweens: Sorted ascending by start_frame (layers only)
    """
    name: str
    type: LayerType = LayerType.LAYER
    id: str = ""
    visible: bool = True
    locked: bool = False
    color: str = "#fff"
    parent_id: Optional[str] = None
    children: List[str] = field(default_factory=list)
    keyframes: List[Keyframe] = field(default_factory=list)
    tweens: List[Tween] = field(default_factory=list)
    is_expanded: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.id:
            self.id = new_layer_id(self.type)

    @property
    def is_folder(self) -> bool:
        return self.type == LayerType.FOLDER

    def find_keyframe(self, frame: Frame) -> Optional[Keyframe]:
        for keyframe in self.keyframes:
            if keyframe.frame == frame:
                return keyframe
        return None

    def has_keyframe_at(self, frame: Frame) -> bool:
        return self.find_keyframe(frame) is not None

    def find_tween(self, start_frame: Frame, end_frame: Frame) -> Optional[Tween]:
        for tween in self.tweens:
            if tween.matches(start_frame, end_frame):
                return tween
        return None

    def sort_keyframes(self) -> None:
        self.keyframes.sort(key=lambda kf: kf.frame)

    def sort_tweens(self) -> None:
        self.tweens.sort(key=lambda tw: tw.start_frame)

    def to_dict(self, children: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization.

        Args:
            children: Already-serialized child dicts to embed (folders)
        """
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "visible": self.visible,
            "locked": self.locked,
            "color": self.color,
            "parentId": self.parent_id,
            "isExpanded": self.is_expanded,
            "metadata": dict(self.metadata),
        }
        if self.is_folder:
            data["children"] = children if children is not None else []
        else:
            data["keyframes"] = [kf.to_dict() for kf in self.keyframes]
            data["tweens"] = [tw.to_dict() for tw in self.tweens]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Layer':
        """
        Create a node from dictionary, without its children.

        Children are attached by the Timeline, which owns the tree edges.
        """
        layer_type = LayerType(data.get("type", LayerType.LAYER.value))
        name = data.get("name")
        if not isinstance(name, str):
            raise ValueError(f"Layer name must be a string, got {name!r}")
        layer = cls(
            name=name,
            type=layer_type,
            id=data.get("id") or "",
            visible=bool(data.get("visible", True)),
            locked=bool(data.get("locked", False)),
            color=data.get("color") or "#fff",
            is_expanded=bool(data.get("isExpanded", True)),
            metadata=dict(data.get("metadata") or {}),
        )
        if not layer.is_folder:
            layer.keyframes = [Keyframe.from_dict(kf) for kf in data.get("keyframes") or []]
            layer.tweens = [Tween.from_dict(tw) for tw in data.get("tweens") or []]
            layer.sort_keyframes()
            layer.sort_tweens()
        return layer

    def __repr__(self) -> str:
        if self.is_folder:
            return f"Layer(id='{self.id}', name='{self.name}', folder, children={len(self.children)})"
        return (
            f"Layer(id='{self.id}', name='{self.name}', "
            f"keyframes={len(self.keyframes)}, tweens={len(self.tweens)})"
        )
