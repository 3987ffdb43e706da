"""
Timeline entity

Root of the data model: an arena of Layer nodes keyed by id, the ordered
root ids, and the playhead/duration/time-scale state.

Tree edges live in each folder's ``children`` id list (and ``root_ids`` at
the top); ``parent_id`` is only a back-reference. All walks are iterative.
"""
from __future__ import annotations

import uuid
from typing import Any, Dict, Iterator, List, Optional, Tuple

from tweenline.domain.entities.layer import Layer, LayerType


class Timeline:
    """
    Timeline data model.

    Attributes:
        id: Identifier carried on every published event
        nodes: Arena of every layer and folder, keyed by id
        root_ids: Ordered ids of root-level nodes
        current_time: Playhead position, kept within [0, duration]
        duration: Length of the timeline
        time_scale: Display zoom factor; not used by evaluation
    """

    def __init__(
        self,
        duration: float = 600.0,
        current_time: float = 0.0,
        time_scale: float = 1.0,
        id: Optional[str] = None
    ):
        self.id = id or f"timeline-{uuid.uuid4().hex[:12]}"
        self.nodes: Dict[str, Layer] = {}
        self.root_ids: List[str] = []
        self.duration = duration
        self.current_time = current_time
        self.time_scale = time_scale

    # =========================================================================
    # Lookup
    # =========================================================================

    def get(self, node_id: Optional[str]) -> Optional[Layer]:
        if node_id is None:
            return None
        return self.nodes.get(node_id)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def sibling_ids(self, layer: Layer) -> List[str]:
        """The list that owns the tree edge to ``layer`` (parent's children or root_ids)."""
        if layer.parent_id is None:
            return self.root_ids
        return self.nodes[layer.parent_id].children

    def ancestors(self, node_id: str) -> Iterator[Layer]:
        """Walk parent back-references upward, nearest first."""
        node = self.nodes.get(node_id)
        while node is not None and node.parent_id is not None:
            node = self.nodes.get(node.parent_id)
            if node is not None:
                yield node

    def is_descendant(self, node_id: str, ancestor_id: str) -> bool:
        return any(a.id == ancestor_id for a in self.ancestors(node_id))

    def is_effectively_visible(self, node_id: str) -> bool:
        """A node is visible only if it and every enclosing folder are visible."""
        node = self.nodes.get(node_id)
        if node is None or not node.visible:
            return False
        return all(a.visible for a in self.ancestors(node_id))

    def iter_depth_first(self, start_ids: Optional[List[str]] = None) -> Iterator[Layer]:
        """Pre-order walk in display order, using an explicit stack."""
        stack = list(reversed(self.root_ids if start_ids is None else start_ids))
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            if node.is_folder:
                stack.extend(reversed(node.children))

    def iter_layers(self) -> Iterator[Layer]:
        """Non-folder layers in display order."""
        return (node for node in self.iter_depth_first() if not node.is_folder)

    def subtree_ids(self, node_id: str) -> List[str]:
        return [node.id for node in self.iter_depth_first([node_id])]

    # =========================================================================
    # Structure
    # =========================================================================

    def attach(self, layer: Layer, parent_id: Optional[str] = None, index: Optional[int] = None) -> None:
        """Register a node in the arena and link it under ``parent_id`` (None = root)."""
        layer.parent_id = parent_id
        self.nodes[layer.id] = layer
        siblings = self.sibling_ids(layer)
        if index is None:
            siblings.append(layer.id)
        else:
            siblings.insert(index, layer.id)

    def detach(self, node_id: str) -> int:
        """Unlink a node from its parent list, keeping it in the arena. Returns its old index."""
        layer = self.nodes[node_id]
        siblings = self.sibling_ids(layer)
        index = siblings.index(node_id)
        siblings.pop(index)
        return index

    def remove_subtree(self, node_id: str) -> List[str]:
        """Unlink a node and drop it and all its descendants from the arena."""
        removed = self.subtree_ids(node_id)
        self.detach(node_id)
        for removed_id in removed:
            del self.nodes[removed_id]
        return removed

    def replace_with(self, other: 'Timeline') -> None:
        """Adopt another timeline's whole state in one step."""
        self.nodes = other.nodes
        self.root_ids = other.root_ids
        self.duration = other.duration
        self.current_time = other.current_time
        self.time_scale = other.time_scale

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """
        Snapshot: {layers, duration, currentTime, timeScale}, with folder
        children embedded recursively.
        """
        layers: List[Dict[str, Any]] = []
        stack: List[Tuple[str, List[Dict[str, Any]]]] = [
            (node_id, layers) for node_id in reversed(self.root_ids)
        ]
        while stack:
            node_id, target = stack.pop()
            node = self.nodes[node_id]
            data = node.to_dict(children=[])
            target.append(data)
            if node.is_folder:
                stack.extend((child_id, data["children"]) for child_id in reversed(node.children))
        return {
            "layers": layers,
            "duration": self.duration,
            "currentTime": self.current_time,
            "timeScale": self.time_scale,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], id: Optional[str] = None) -> 'Timeline':
        """
        Build a timeline from a snapshot dict.

        Raises:
            ValueError, KeyError, TypeError: On malformed input
        """
        if not isinstance(data, dict):
            raise ValueError("Snapshot must be a mapping")
        layers = data.get("layers") or []
        if not isinstance(layers, list):
            raise ValueError("Snapshot 'layers' must be a list")

        timeline = cls(
            duration=float(data.get("duration", 600.0)),
            current_time=float(data.get("currentTime", 0.0)),
            time_scale=float(data.get("timeScale", 1.0)),
            id=id,
        )

        stack: List[Tuple[Dict[str, Any], Optional[str]]] = [
            (layer_data, None) for layer_data in reversed(layers)
        ]
        while stack:
            layer_data, parent_id = stack.pop()
            if not isinstance(layer_data, dict):
                raise ValueError("Each layer entry must be a mapping")
            layer = Layer.from_dict(layer_data)
            if layer.id in timeline.nodes:
                raise ValueError(f"Duplicate layer id '{layer.id}'")
            timeline.attach(layer, parent_id)
            if layer.is_folder:
                children = layer_data.get("children") or []
                if not isinstance(children, list):
                    raise ValueError(f"Folder '{layer.id}' children must be a list")
                stack.extend((child, layer.id) for child in reversed(children))

        return timeline

    def __repr__(self) -> str:
        folders = sum(1 for node in self.nodes.values() if node.type == LayerType.FOLDER)
        return f"Timeline(id='{self.id}', layers={len(self.nodes) - folders}, folders={folders})"
