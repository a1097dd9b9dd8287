"""Box-drawing line and box tools that weld onto existing glyphs."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from ascii_studio.core.cell import NO_MODIFIERS, Cell, Modifiers, Position
from ascii_studio.draw.box import resolve_points, smart_box_points, smart_line_points
from ascii_studio.tools.base import Tool, ToolSettings

if TYPE_CHECKING:
    from ascii_studio.history.session import EditorSession


class SmartTool(Tool):
    """
    Drag-to-draw with box glyphs.

    Each planned cell carries a connection mask. Before resolving, the mask
    picks up the directions of neighbouring same-style glyphs that point at
    the cell, then merges with whatever glyph the cell already holds.
    """

    description = "Smart"

    def __init__(
        self,
        session: EditorSession | None = None,
        settings: ToolSettings | None = None,
    ) -> None:
        super().__init__(session, settings)
        self.start: Position | None = None

    @abstractmethod
    def plan(self, start: Position, end: Position) -> list[tuple[Position, int]]:
        """(position, mask) pairs for the shape between anchor and ``end``."""
        pass

    def is_active(self) -> bool:
        return self.start is not None

    def on_pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.start = pos
        self._update_preview(pos)

    def on_pointer_drag(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.start is not None:
            self._update_preview(pos)

    def on_pointer_up(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.start is None:
            return
        start = self.start
        self.start = None
        self.preview.clear()

        layer = self.writable_layer()
        if layer is None:
            return
        changes = self.placements_to_changes(layer, self._cells(layer, start, pos))
        self.commit(layer.id, changes, self.description)

    def on_deactivate(self) -> None:
        self.start = None
        self.preview.clear()

    def _cells(self, layer, start: Position, end: Position) -> list[tuple[Position, Cell]]:
        resolved = resolve_points(layer, self.plan(start, end), self.settings.box_style)
        return [(pos, self.settings.make_cell(char)) for pos, char in resolved]

    def _update_preview(self, end: Position) -> None:
        doc = self.document
        layer = doc.layers.get_active_layer() if doc else None
        if layer is None or self.start is None:
            self.preview = {}
            return
        self.preview = dict(self._cells(layer, self.start, end))


class SmartLineTool(SmartTool):
    """Horizontal or vertical segment, whichever axis the drag favours."""

    name = "smartline"
    icon = "─"
    shortcut = "J"
    description = "Smart Line"

    def plan(self, start: Position, end: Position) -> list[tuple[Position, int]]:
        return smart_line_points(start, end)


class SmartBoxTool(SmartTool):
    name = "smartbox"
    icon = "┌"
    shortcut = "B"
    description = "Smart Box"

    def plan(self, start: Position, end: Position) -> list[tuple[Position, int]]:
        return smart_box_points(start, end)
