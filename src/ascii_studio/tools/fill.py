"""Bucket fill and colour dropper."""

from __future__ import annotations

from ascii_studio.core.cell import NO_MODIFIERS, Modifiers, Position
from ascii_studio.draw.fill import flood_fill
from ascii_studio.render.composite import Compositor
from ascii_studio.tools.base import Tool


class FillTool(Tool):
    """Flood-fills the matching region under the pointer on the active layer."""

    name = "fill"
    icon = "▧"
    shortcut = "F"

    def on_pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        layer = self.writable_layer()
        if layer is None:
            return
        cell = self.settings.make_cell()
        region = flood_fill(layer, pos, cell)
        changes = self.placements_to_changes(layer, ((p, cell) for p in region))
        self.commit(layer.id, changes, "Fill")


class DropperTool(Tool):
    """Copies the composited char and colours under the pointer into the settings."""

    name = "dropper"
    icon = "◉"
    shortcut = "I"

    def on_pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.sample(pos)

    def on_pointer_drag(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.sample(pos)

    def sample(self, pos: Position) -> bool:
        doc = self.document
        if doc is None or not doc.in_bounds(pos.x, pos.y):
            return False
        cell = Compositor(doc.layers).get_cell(pos.x, pos.y)
        self.settings.char = cell.char
        self.settings.fg = cell.fg
        self.settings.bg = cell.bg
        return True
