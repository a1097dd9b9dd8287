"""LayerManager - ordered layer stack plus layer groups.

All structural mutation of a document goes through this class: adding,
removing, reordering, duplicating and merging layers, and managing group
membership. Array order is compositing order (index 0 is the bottom).

Every mutating call emits ``layers_changed``; calls that move the active
layer also emit ``active_layer_changed``. Boundary conditions (unknown ids,
out-of-range moves, removing the last layer) are silent no-ops that return
a falsy value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal

from ascii_studio.core.events import Signal
from ascii_studio.document.group import GroupKind, LayerGroup
from ascii_studio.document.ids import IdGenerator
from ascii_studio.document.layer import Layer

logger = logging.getLogger(__name__)

Direction = Literal["up", "down"]


@dataclass
class LayerManagerState:
    """Deep, comparable snapshot of a LayerManager (for structural undo)."""
    layers: list[dict[str, Any]] = field(default_factory=list)
    groups: list[dict[str, Any]] = field(default_factory=list)
    active_layer_id: str = ""


@dataclass
class DisplayEntry:
    """One row of the top-to-bottom layer list: a group header or a layer."""
    group: LayerGroup | None = None
    layer: Layer | None = None
    array_index: int = -1

    @property
    def is_group(self) -> bool:
        return self.group is not None


class LayerManager:
    """
    Owns the layer list, the group list and the active layer id.

    Attributes:
        layers_changed: Signal emitted after any structural change
        active_layer_changed: Signal emitted with the new active layer id
    """

    def __init__(self, width: int, height: int, ids: IdGenerator | None = None) -> None:
        self._width = width
        self._height = height
        self._ids = ids or IdGenerator()
        self._layers: list[Layer] = []
        self._groups: list[LayerGroup] = []
        self._active_layer_id = ""
        self.layers_changed = Signal("layers_changed")
        self.active_layer_changed = Signal("active_layer_changed")

    def init(self) -> None:
        """Create the initial Background layer."""
        self.add_layer("Background")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def layers(self) -> tuple[Layer, ...]:
        """Layers bottom-to-top."""
        return tuple(self._layers)

    @property
    def groups(self) -> tuple[LayerGroup, ...]:
        return tuple(self._groups)

    @property
    def active_layer_id(self) -> str:
        return self._active_layer_id

    def get_layer(self, layer_id: str) -> Layer | None:
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        return None

    def index_of(self, layer_id: str) -> int:
        for i, layer in enumerate(self._layers):
            if layer.id == layer_id:
                return i
        return -1

    def get_active_layer(self) -> Layer | None:
        return self.get_layer(self._active_layer_id)

    def get_groups(self) -> list[LayerGroup]:
        return list(self._groups)

    def get_group(self, group_id: str | None) -> LayerGroup | None:
        if group_id is None:
            return None
        for group in self._groups:
            if group.id == group_id:
                return group
        return None

    def get_layers_in_group(self, group_id: str) -> list[Layer]:
        return [layer for layer in self._layers if layer.group_id == group_id]

    def get_highest_index_in_group(self, group_id: str) -> int:
        """Array index of the topmost member, or -1 for an empty group."""
        highest = -1
        for i, layer in enumerate(self._layers):
            if layer.group_id == group_id:
                highest = i
        return highest

    def get_group_anchor_index(self, group_id: str) -> int:
        """Sort position of a group: its top member, else its stored order."""
        highest = self.get_highest_index_in_group(group_id)
        if highest >= 0:
            return highest
        group = self.get_group(group_id)
        return group.order if group else -1

    def is_layer_effectively_visible(self, layer: Layer | str) -> bool:
        """Visible iff the layer is visible and its group (if any) is too."""
        resolved = self._resolve(layer)
        if resolved is None:
            return False
        group = self.get_group(resolved.group_id)
        return resolved.visible and (group is None or group.visible)

    def is_layer_effectively_locked(self, layer: Layer | str) -> bool:
        """Locked iff the layer is locked or its group (if any) is locked."""
        resolved = self._resolve(layer)
        if resolved is None:
            return False
        group = self.get_group(resolved.group_id)
        return resolved.locked or (group is not None and group.locked)

    def display_entries(self) -> list[DisplayEntry]:
        """
        Top-to-bottom visual ordering of groups and ungrouped layers.

        Groups and ungrouped layers are sorted by anchor (highest first).
        On equal anchors a group precedes a layer, groups tie-break on
        ``order``. Members follow their group header, highest index first,
        unless the group is collapsed.
        """
        members: dict[str, list[tuple[int, Layer]]] = {}
        blocks: list[tuple[tuple[int, int, int], DisplayEntry]] = []

        for i, layer in enumerate(self._layers):
            if self.get_group(layer.group_id) is not None:
                members.setdefault(layer.group_id, []).append((i, layer))
            else:
                blocks.append(((-i, 1, -i), DisplayEntry(layer=layer, array_index=i)))

        for group in self._groups:
            anchor = self.get_group_anchor_index(group.id)
            blocks.append(((-anchor, 0, -group.order), DisplayEntry(group=group)))

        blocks.sort(key=lambda block: block[0])

        entries: list[DisplayEntry] = []
        for _, entry in blocks:
            entries.append(entry)
            if entry.group is None or entry.group.collapsed:
                continue
            for i, layer in sorted(members.get(entry.group.id, []), key=lambda m: -m[0]):
                entries.append(DisplayEntry(layer=layer, array_index=i))
        return entries

    # -------------------------------------------------------------------------
    # Layer operations
    # -------------------------------------------------------------------------

    def add_layer(
        self,
        name: str | None = None,
        group_id: str | None = None,
        index: int | None = None,
    ) -> Layer:
        """Create a layer, insert it (default: on top) and make it active.

        An unknown ``group_id`` leaves the new layer ungrouped.
        """
        layer = Layer(
            self._width,
            self._height,
            name if name is not None else f"Layer {len(self._layers) + 1}",
            self._ids.next_layer_id(),
        )
        if group_id is not None:
            if self.get_group(group_id) is not None:
                layer.group_id = group_id
            else:
                logger.debug("add_layer: unknown group %s, creating ungrouped", group_id)

        if index is None:
            self._layers.append(layer)
        else:
            self._layers.insert(max(0, min(index, len(self._layers))), layer)

        self._active_layer_id = layer.id
        self._notify()
        self.active_layer_changed.emit(layer.id)
        return layer

    def remove_layer(self, layer_id: str) -> bool:
        if len(self._layers) <= 1:
            logger.debug("remove_layer: refusing to remove the last layer")
            return False
        idx = self.index_of(layer_id)
        if idx == -1:
            return False
        del self._layers[idx]
        active_moved = self._active_layer_id == layer_id
        if active_moved:
            self._active_layer_id = self._layers[min(idx, len(self._layers) - 1)].id
        self._notify()
        if active_moved:
            self.active_layer_changed.emit(self._active_layer_id)
        return True

    def set_active_layer(self, layer_id: str) -> bool:
        if self.get_layer(layer_id) is None:
            return False
        self._active_layer_id = layer_id
        self.active_layer_changed.emit(layer_id)
        return True

    def move_layer(self, layer_id: str, direction: Direction) -> bool:
        """Swap a layer with its neighbour; ``up`` is towards the top."""
        idx = self.index_of(layer_id)
        if idx == -1:
            return False
        new_idx = idx + 1 if direction == "up" else idx - 1
        if not 0 <= new_idx < len(self._layers):
            return False
        self._layers[idx], self._layers[new_idx] = self._layers[new_idx], self._layers[idx]
        self._notify()
        return True

    def move_layer_to_index(self, layer_id: str, new_index: int) -> bool:
        idx = self.index_of(layer_id)
        if idx == -1:
            return False
        new_index = max(0, min(new_index, len(self._layers) - 1))
        if idx == new_index:
            return False
        layer = self._layers.pop(idx)
        self._layers.insert(new_index, layer)
        self._notify()
        return True

    def move_layers_to_index(self, layer_ids: Iterable[str], start_index: int) -> bool:
        """Move a selection of layers so it begins at ``start_index``.

        The selection need not be contiguous; its relative order is kept.
        ``start_index`` is an index into the list with the selection removed,
        clamped to the valid range.
        """
        wanted = set(layer_ids)
        moving = [layer for layer in self._layers if layer.id in wanted]
        if not moving:
            return False
        remaining = [layer for layer in self._layers if layer.id not in wanted]
        start = max(0, min(start_index, len(remaining)))
        reordered = remaining[:start] + moving + remaining[start:]
        if [l.id for l in reordered] == [l.id for l in self._layers]:
            return False
        self._layers = reordered
        self._notify()
        return True

    def rename_layer(self, layer_id: str, name: str) -> bool:
        layer = self.get_layer(layer_id)
        if layer is None:
            return False
        layer.name = name
        self._notify()
        return True

    def toggle_visibility(self, layer_id: str) -> bool:
        layer = self.get_layer(layer_id)
        if layer is None:
            return False
        layer.visible = not layer.visible
        self._notify()
        return True

    def toggle_lock(self, layer_id: str) -> bool:
        layer = self.get_layer(layer_id)
        if layer is None:
            return False
        layer.locked = not layer.locked
        self._notify()
        return True

    def duplicate_layer(self, layer_id: str) -> Layer | None:
        """Copy a layer directly above its source and activate the copy."""
        idx = self.index_of(layer_id)
        if idx == -1:
            return None
        source = self._layers[idx]
        copy = source.clone(self._ids.next_layer_id())
        copy.name = f"{source.name} copy"
        self._layers.insert(idx + 1, copy)
        self._active_layer_id = copy.id
        self._notify()
        self.active_layer_changed.emit(copy.id)
        return copy

    def merge_down(self, layer_id: str) -> bool:
        """Paint a layer's non-absent cells onto the layer below, then drop it.

        Fails for the bottom layer and when the layer below is effectively
        locked.
        """
        idx = self.index_of(layer_id)
        if idx <= 0:
            return False
        upper = self._layers[idx]
        lower = self._layers[idx - 1]
        if self.is_layer_effectively_locked(lower):
            logger.debug("merge_down: %s is locked", lower.id)
            return False
        for x, y, cell in upper.iter_cells():
            lower.force_set_cell(x, y, cell.copy())
        del self._layers[idx]
        self._active_layer_id = lower.id
        self._notify()
        self.active_layer_changed.emit(lower.id)
        return True

    def resize(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        for layer in self._layers:
            layer.resize(width, height)
        self._notify()

    # -------------------------------------------------------------------------
    # Group operations
    # -------------------------------------------------------------------------

    def add_group(self, name: str | None = None, kind: GroupKind = GroupKind.LAYER) -> LayerGroup:
        """Create an empty group anchored above the current top layer."""
        group = LayerGroup(
            name if name is not None else f"Group {len(self._groups) + 1}",
            self._ids.next_group_id(),
            order=len(self._layers),
            kind=kind,
        )
        self._groups.append(group)
        self._notify()
        return group

    def remove_group(self, group_id: str) -> bool:
        """Delete a group; its member layers become ungrouped."""
        group = self.get_group(group_id)
        if group is None:
            return False
        for layer in self._layers:
            if layer.group_id == group_id:
                layer.group_id = None
        self._groups.remove(group)
        self._notify()
        return True

    def rename_group(self, group_id: str, name: str) -> bool:
        group = self.get_group(group_id)
        if group is None:
            return False
        group.name = name
        self._notify()
        return True

    def toggle_group_visibility(self, group_id: str) -> bool:
        group = self.get_group(group_id)
        if group is None:
            return False
        group.visible = not group.visible
        self._notify()
        return True

    def toggle_group_lock(self, group_id: str) -> bool:
        group = self.get_group(group_id)
        if group is None:
            return False
        group.locked = not group.locked
        self._notify()
        return True

    def toggle_group_collapsed(self, group_id: str) -> bool:
        group = self.get_group(group_id)
        if group is None:
            return False
        group.collapsed = not group.collapsed
        self._notify()
        return True

    def set_group_order(self, group_id: str, order: int) -> bool:
        """Set the fallback anchor of a group (only effective while empty)."""
        group = self.get_group(group_id)
        if group is None:
            return False
        group.order = order
        self._notify()
        return True

    def set_layer_group(self, layer_id: str, group_id: str | None) -> bool:
        """Put a layer into a group, or ungroup it with ``None``."""
        layer = self.get_layer(layer_id)
        if layer is None:
            return False
        if group_id is not None and self.get_group(group_id) is None:
            return False
        if layer.group_id == group_id:
            return False
        layer.group_id = group_id
        self._notify()
        return True

    def move_group_relative_to_group(self, dragged_id: str, target_id: str, above: bool) -> bool:
        """Move a group's members directly above or below another group."""
        dragged = self.get_group(dragged_id)
        target = self.get_group(target_id)
        if dragged is None or target is None or dragged is target:
            return False

        member_ids = [layer.id for layer in self.get_layers_in_group(dragged_id)]
        if not member_ids:
            anchor = self.get_group_anchor_index(target_id)
            return self.set_group_order(dragged_id, anchor + 1 if above else anchor - 1)

        remaining = [layer for layer in self._layers if layer.group_id != dragged_id]
        target_indices = [i for i, layer in enumerate(remaining) if layer.group_id == target_id]
        if target_indices:
            insert_at = target_indices[-1] + 1 if above else target_indices[0]
        else:
            anchor = max(0, min(target.order, len(remaining)))
            insert_at = anchor + 1 if above else anchor
        return self.move_layers_to_index(member_ids, insert_at)

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def get_state_snapshot(self) -> LayerManagerState:
        return LayerManagerState(
            layers=[layer.to_data() for layer in self._layers],
            groups=[group.to_data() for group in self._groups],
            active_layer_id=self._active_layer_id,
        )

    def restore_state(self, state: LayerManagerState) -> None:
        self.load_layers(state.layers, state.active_layer_id, state.groups)

    def load_layers(
        self,
        layers_data: list[dict[str, Any]],
        active_layer_id: str | None = None,
        groups_data: list[dict[str, Any]] | None = None,
    ) -> None:
        """Replace the whole stack from serialized data.

        Layer ``groupId`` references that do not resolve to a loaded group
        are dropped. An unknown ``active_layer_id`` falls back to the bottom
        layer. Layers whose grid differs from the stack size are resized to
        fit.
        """
        self._groups = [LayerGroup.from_data(g) for g in groups_data or []]
        self._layers = [Layer.from_data(d) for d in layers_data]
        known_groups = {g.id for g in self._groups}
        for group in self._groups:
            self._ids.observe(group.id)
        for layer in self._layers:
            self._ids.observe(layer.id)
            if (layer.width, layer.height) != (self._width, self._height):
                logger.debug("load_layers: resizing %s from %dx%d", layer.id, layer.width, layer.height)
                layer.resize(self._width, self._height)
            if layer.group_id is not None and layer.group_id not in known_groups:
                logger.debug("load_layers: dropping dangling group %s on %s", layer.group_id, layer.id)
                layer.group_id = None

        if active_layer_id and self.get_layer(active_layer_id) is not None:
            self._active_layer_id = active_layer_id
        elif self._layers:
            self._active_layer_id = self._layers[0].id
        else:
            self._active_layer_id = ""

        self._notify()
        self.active_layer_changed.emit(self._active_layer_id)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _resolve(self, layer: Layer | str) -> Layer | None:
        return self.get_layer(layer) if isinstance(layer, str) else layer

    def _sync_group_orders(self) -> None:
        for group in self._groups:
            highest = self.get_highest_index_in_group(group.id)
            if highest >= 0:
                group.order = highest

    def _notify(self) -> None:
        self._sync_group_orders()
        self.layers_changed.emit()

    def __repr__(self) -> str:
        return (
            f"LayerManager({self._width}x{self._height}, "
            f"layers={len(self._layers)}, groups={len(self._groups)}, "
            f"active={self._active_layer_id!r})"
        )
