"""
Layer Tree Service

Creates, deletes, renames, reorders and reparents layers and folders of a
Timeline. Every walk over the tree uses an explicit stack.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from tweenline.application.api.result_types import CommandResult
from tweenline.application.events import (
    BeforeObjectDelete,
    EventBus,
    ObjectAdded,
    ObjectDeleted,
    ObjectLockChanged,
    ObjectRenamed,
    ObjectReordered,
    ObjectReparented,
    ObjectVisibilityChanged,
)
from tweenline.application.services.service_base import TimelineServiceBase
from tweenline.application.settings import TimelineSettings
from tweenline.domain.entities import Layer, LayerType, Timeline
from tweenline.utils.message import Log


class LayerTreeService(TimelineServiceBase):
    """Structural edits of the layer/folder hierarchy."""

    def __init__(
        self,
        timeline: Timeline,
        event_bus: EventBus,
        settings: Optional[TimelineSettings] = None
    ):
        super().__init__(timeline, event_bus)
        self._settings = settings or TimelineSettings()

    # =========================================================================
    # Creation
    # =========================================================================

    def add_layer(self, name: Optional[str] = None, parent_id: Optional[str] = None) -> CommandResult[Layer]:
        """
        Append a new layer at the end of ``parent_id``'s children (root if None).

        A parent that is not an existing folder falls back to the root.
        """
        return self._add(LayerType.LAYER, name, parent_id)

    def add_folder(self, name: Optional[str] = None, parent_id: Optional[str] = None) -> CommandResult[Layer]:
        """Append a new, empty folder. Same parent rules as add_layer()."""
        return self._add(LayerType.FOLDER, name, parent_id)

    def _add(self, layer_type: LayerType, name: Optional[str], parent_id: Optional[str]) -> CommandResult[Layer]:
        if parent_id is not None:
            parent = self._timeline.get(parent_id)
            if parent is None or not parent.is_folder:
                Log.warning(
                    f"LayerTreeService: Parent '{parent_id}' is not an existing folder, adding to root"
                )
                parent_id = None

        layer = Layer(
            name=name or self._default_name(layer_type),
            type=layer_type,
            color=self._settings.default_layer_color,
        )
        self._timeline.attach(layer, parent_id)

        self._publish(ObjectAdded, id=layer.id, type=layer_type.value, parent_id=parent_id, name=layer.name)
        Log.info(f"LayerTreeService: Added {layer_type.value} '{layer.name}' ({layer.id})")
        return CommandResult.success_result(f"Added {layer_type.value} '{layer.name}'", data=layer)

    def _default_name(self, layer_type: LayerType) -> str:
        count = sum(1 for node in self._timeline.nodes.values() if node.type == layer_type)
        if layer_type == LayerType.FOLDER:
            base = self._settings.default_folder_name
        else:
            base = self._settings.default_layer_name
        return f"{base} {count + 1}"

    # =========================================================================
    # Mutation
    # =========================================================================

    def delete_object(self, object_id: str) -> CommandResult[List[str]]:
        """
        Delete a layer or folder together with its whole subtree.

        Subscribers of BeforeObjectDelete may veto the delete; a vetoed
        delete returns a CANCELLED result and changes nothing.
        """
        node = self._timeline.get(object_id)
        if node is None:
            return self._fail(CommandResult.not_found(f"Object {object_id} not found"))

        subtree = self._timeline.subtree_ids(object_id)
        before = self._publish(BeforeObjectDelete, id=object_id, ids=list(subtree))
        if before.cancelled:
            return self._fail(CommandResult.cancelled(f"Delete of '{node.name}' was cancelled"))

        removed = self._timeline.remove_subtree(object_id)
        self._publish(ObjectDeleted, id=object_id, ids=removed, parent_id=node.parent_id)
        Log.info(f"LayerTreeService: Deleted '{node.name}' ({len(removed)} object(s))")
        return CommandResult.success_result(f"Deleted '{node.name}'", data=removed)

    def rename_object(self, object_id: str, new_name: str) -> CommandResult[Layer]:
        node = self._timeline.get(object_id)
        if node is None:
            return self._fail(CommandResult.not_found(f"Object {object_id} not found"))
        if not isinstance(new_name, str) or not new_name.strip():
            return self._fail(CommandResult.invalid("Name cannot be empty"))

        old_name = node.name
        node.name = new_name
        self._publish(ObjectRenamed, id=object_id, old_name=old_name, new_name=new_name)
        return CommandResult.success_result(f"Renamed '{old_name}' to '{new_name}'", data=node)

    def reorder_object(self, object_id: str, new_index: int) -> CommandResult[Layer]:
        """Move a node within its parent's children, clamping the index."""
        node = self._timeline.get(object_id)
        if node is None:
            return self._fail(CommandResult.not_found(f"Object {object_id} not found"))

        old_index = self._timeline.detach(object_id)
        siblings = self._timeline.sibling_ids(node)
        index = max(0, min(new_index, len(siblings)))
        siblings.insert(index, object_id)

        self._publish(
            ObjectReordered,
            id=object_id,
            parent_id=node.parent_id,
            old_index=old_index,
            new_index=index,
        )
        return CommandResult.success_result(f"Moved '{node.name}' to position {index}", data=node)

    def reparent_object(self, object_id: str, new_parent_id: Optional[str]) -> CommandResult[Layer]:
        """
        Move a node (and its subtree) to the end of another folder, or to the
        root when ``new_parent_id`` is None.
        """
        node = self._timeline.get(object_id)
        if node is None:
            return self._fail(CommandResult.not_found(f"Object {object_id} not found"))

        if new_parent_id is not None:
            parent = self._timeline.get(new_parent_id)
            if parent is None:
                return self._fail(CommandResult.not_found(f"Folder {new_parent_id} not found"))
            if not parent.is_folder:
                return self._fail(CommandResult.invalid(f"'{parent.name}' is not a folder"))
            if new_parent_id == object_id or self._timeline.is_descendant(new_parent_id, object_id):
                return self._fail(
                    CommandResult.invalid(f"Cannot move '{node.name}' into itself or one of its descendants")
                )

        old_parent_id = node.parent_id
        self._timeline.detach(object_id)
        self._timeline.attach(node, new_parent_id)

        self._publish(ObjectReparented, id=object_id, old_parent_id=old_parent_id, new_parent_id=new_parent_id)
        return CommandResult.success_result(f"Moved '{node.name}'", data=node)

    def toggle_visibility(self, object_id: str) -> CommandResult[Layer]:
        node = self._timeline.get(object_id)
        if node is None:
            return self._fail(CommandResult.not_found(f"Object {object_id} not found"))
        node.visible = not node.visible
        self._publish(ObjectVisibilityChanged, id=object_id, old_value=not node.visible, new_value=node.visible)
        return CommandResult.success_result(
            f"'{node.name}' is now {'visible' if node.visible else 'hidden'}", data=node
        )

    def toggle_lock(self, object_id: str) -> CommandResult[Layer]:
        node = self._timeline.get(object_id)
        if node is None:
            return self._fail(CommandResult.not_found(f"Object {object_id} not found"))
        node.locked = not node.locked
        self._publish(ObjectLockChanged, id=object_id, old_value=not node.locked, new_value=node.locked)
        return CommandResult.success_result(
            f"'{node.name}' is now {'locked' if node.locked else 'unlocked'}", data=node
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def get_layer(self, object_id: str) -> Optional[Layer]:
        return self._timeline.get(object_id)

    def get_layers(self, flatten: bool = True) -> List[Any]:
        """
        All nodes in display order.

        Args:
            flatten: True for a depth-first pre-order list of Layer objects,
                False for nested dicts (folders embed their children)
        """
        if flatten:
            return list(self._timeline.iter_depth_first())
        return self._timeline.to_dict()["layers"]

    def get_layer_hierarchy(self) -> List[Dict[str, Any]]:
        """
        Compact tree outline: [{id, name, type, depth, children: [...]}].
        """
        outline: List[Dict[str, Any]] = []
        stack: List[Tuple[str, int, List[Dict[str, Any]]]] = [
            (node_id, 0, outline) for node_id in reversed(self._timeline.root_ids)
        ]
        while stack:
            node_id, depth, target = stack.pop()
            node = self._timeline.nodes[node_id]
            entry: Dict[str, Any] = {
                "id": node.id,
                "name": node.name,
                "type": node.type.value,
                "depth": depth,
                "children": [],
            }
            target.append(entry)
            stack.extend((child_id, depth + 1, entry["children"]) for child_id in reversed(node.children))
        return outline

    def get_parent_children(self, object_id: str) -> List[Layer]:
        """The node and its siblings, in order. Empty if the id is unknown."""
        node = self._timeline.get(object_id)
        if node is None:
            return []
        return [self._timeline.nodes[sibling_id] for sibling_id in self._timeline.sibling_ids(node)]
