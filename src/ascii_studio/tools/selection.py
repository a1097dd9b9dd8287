"""Rectangular selection with move, clipboard, justify and recolour actions."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from ascii_studio.core.cell import NO_MODIFIERS, Cell, LayerCell, Modifiers, Position, copy_cell
from ascii_studio.draw import recolor
from ascii_studio.draw.justify import HorizontalAlign, VerticalAlign, justify_horizontal, justify_vertical
from ascii_studio.history.clipboard import Clipboard
from ascii_studio.history.command import CellChange
from ascii_studio.render.composite import DEFAULT_CELL, ExportRegion
from ascii_studio.tools.base import Tool, ToolSettings

if TYPE_CHECKING:
    from ascii_studio.history.session import EditorSession

logger = logging.getLogger(__name__)


class SelectionState(Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    READY_TO_MOVE = "ready_to_move"
    MOVING = "moving"


class SelectionTool(Tool):
    """
    Drag to select; drag from inside a selection to move its cells.

    A move captures the selected cells once, at the press, and commits a
    single diff on release: the old area is erased and the captured cells
    are placed at the new spot, merged by position. Cells that would land
    outside the grid are dropped.
    """

    name = "selection"
    icon = "⬚"
    shortcut = "S"

    def __init__(
        self,
        session: EditorSession | None = None,
        settings: ToolSettings | None = None,
        clipboard: Clipboard | None = None,
    ) -> None:
        super().__init__(session, settings)
        self.clipboard = clipboard or Clipboard()
        self.state = SelectionState.IDLE
        self.start: Position | None = None
        self.end: Position | None = None
        self._captured: list[list[LayerCell]] | None = None
        self._drag_start: Position | None = None
        self._offset = Position(0, 0)

    # -------------------------------------------------------------------------
    # Selection queries
    # -------------------------------------------------------------------------

    @property
    def selection(self) -> ExportRegion | None:
        """Normalized selection bounds, inclusive."""
        if self.start is None or self.end is None:
            return None
        return ExportRegion.from_points(self.start.x, self.start.y, self.end.x, self.end.y)

    def select(self, start: Position, end: Position) -> None:
        self.start = start
        self.end = end
        self.state = SelectionState.IDLE

    def clear_selection(self) -> None:
        self.start = None
        self.end = None
        self.state = SelectionState.IDLE
        self._captured = None
        self._drag_start = None
        self.preview.clear()

    def is_active(self) -> bool:
        return self.state in (SelectionState.SELECTING, SelectionState.MOVING)

    def _contains(self, pos: Position) -> bool:
        bounds = self.selection
        return bounds is not None and bounds.x1 <= pos.x <= bounds.x2 and bounds.y1 <= pos.y <= bounds.y2

    # -------------------------------------------------------------------------
    # Pointer
    # -------------------------------------------------------------------------

    def on_pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self._contains(pos):
            self.state = SelectionState.READY_TO_MOVE
            self._drag_start = pos
            self._offset = Position(0, 0)
            self._captured = self._capture()
        else:
            self.state = SelectionState.SELECTING
            self.start = pos
            self.end = pos
            self._captured = None
            self.preview.clear()

    def on_pointer_drag(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.state is SelectionState.SELECTING:
            self.end = pos
        elif self.state in (SelectionState.READY_TO_MOVE, SelectionState.MOVING):
            self.state = SelectionState.MOVING
            self._update_move_preview(pos)

    def on_pointer_up(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.state is SelectionState.SELECTING:
            self.end = pos
        elif self.state is SelectionState.MOVING:
            self._update_move_preview(pos)
            self._complete_move()
        self.state = SelectionState.IDLE

    def on_deactivate(self) -> None:
        self.clear_selection()

    # -------------------------------------------------------------------------
    # Keyboard and actions
    # -------------------------------------------------------------------------

    def on_key_down(self, key: str, modifiers: Modifiers = NO_MODIFIERS) -> None:
        command_key = modifiers.ctrl or modifiers.meta
        if command_key and key == "c":
            self.copy()
        elif command_key and key == "x":
            self.cut()
        elif command_key and key == "v":
            self.paste()
        elif key in ("Delete", "Backspace"):
            self.delete()
        elif key == "Escape":
            self.clear_selection()

    def copy(self) -> str | None:
        """Copy the selection from the active layer; returns it as text."""
        bounds = self.selection
        if bounds is None or self.session is None:
            return None
        return self.clipboard.copy(self.session, bounds.x1, bounds.y1, bounds.x2, bounds.y2)

    def cut(self) -> bool:
        if self.copy() is None:
            return False
        return self._erase("Cut")

    def paste(self) -> bool:
        """Paste at the selection's top-left corner, or at the origin."""
        if self.session is None or not self.clipboard.has_content():
            return False
        bounds = self.selection
        target = Position(bounds.x1, bounds.y1) if bounds else Position(0, 0)
        return self.clipboard.paste(self.session, target.x, target.y)

    def delete(self) -> bool:
        return self._erase("Delete")

    def justify(self, alignment: HorizontalAlign | VerticalAlign) -> bool:
        """Align the selected content: left, center, right, top or bottom."""
        bounds = self.selection
        layer = self.writable_layer()
        if bounds is None or layer is None:
            return False
        if alignment in ("top", "bottom"):
            changes = justify_vertical(layer, bounds, alignment)
        else:
            changes = justify_horizontal(layer, bounds, alignment)
        return self.commit(layer.id, changes, f"Justify {alignment}")

    def replace_colors(self, attribute: recolor.ColorChannel, from_color: int, to_color: int) -> bool:
        """Recolour one channel of the selection, or of the whole layer."""
        layer = self.writable_layer()
        if layer is None:
            return False
        bounds = self.selection or ExportRegion(0, 0, layer.width - 1, layer.height - 1)
        changes = recolor.replace_colors(layer, bounds, attribute, from_color, to_color)
        return self.commit(layer.id, changes, "Replace colors")

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _capture(self) -> list[list[LayerCell]] | None:
        bounds = self.selection
        doc = self.document
        layer = doc.layers.get_active_layer() if doc else None
        if bounds is None or layer is None:
            return None
        return [
            [copy_cell(layer.get_cell(x, y)) for x in range(bounds.x1, bounds.x2 + 1)]
            for y in range(bounds.y1, bounds.y2 + 1)
        ]

    def _placements(self) -> tuple[list[Position], list[tuple[Position, Cell]]]:
        """Positions vacated by the move and captured cells at their new spots."""
        bounds = self.selection
        doc = self.document
        if bounds is None or doc is None or self._captured is None:
            return [], []
        vacated = [
            Position(x, y)
            for y in range(bounds.y1, bounds.y2 + 1)
            for x in range(bounds.x1, bounds.x2 + 1)
        ]
        placed: list[tuple[Position, Cell]] = []
        new_x = bounds.x1 + self._offset.x
        new_y = bounds.y1 + self._offset.y
        for dy, row in enumerate(self._captured):
            for dx, cell in enumerate(row):
                target = Position(new_x + dx, new_y + dy)
                if cell is not None and doc.in_bounds(target.x, target.y):
                    placed.append((target, cell))
        return vacated, placed

    def _update_move_preview(self, pos: Position) -> None:
        if self._drag_start is None:
            return
        self._offset = Position(pos.x - self._drag_start.x, pos.y - self._drag_start.y)
        vacated, placed = self._placements()
        self.preview = {p: DEFAULT_CELL.copy() for p in vacated}
        for p, cell in placed:
            self.preview[p] = cell.copy()

    def _complete_move(self) -> None:
        bounds = self.selection
        layer = self.writable_layer()
        self.preview.clear()
        if layer is None or bounds is None:
            self._captured = None
            return

        vacated, placed = self._placements()
        merged: dict[Position, CellChange] = {}
        for p in vacated:
            merged[p] = CellChange(p.x, p.y, copy_cell(layer.get_cell(p.x, p.y)), None)
        for p, cell in placed:
            if p in merged:
                merged[p].new_cell = cell.copy()
            else:
                merged[p] = CellChange(p.x, p.y, copy_cell(layer.get_cell(p.x, p.y)), cell.copy())
        changes = [c for c in merged.values() if c.old_cell != c.new_cell]
        self.commit(layer.id, changes, "Move selection")

        self.start = Position(bounds.x1 + self._offset.x, bounds.y1 + self._offset.y)
        self.end = Position(bounds.x2 + self._offset.x, bounds.y2 + self._offset.y)
        self._captured = None
        self._drag_start = None

    def _erase(self, description: str) -> bool:
        bounds = self.selection
        layer = self.writable_layer()
        if bounds is None or layer is None:
            return False
        positions = (
            Position(x, y)
            for y in range(bounds.y1, bounds.y2 + 1)
            for x in range(bounds.x1, bounds.x2 + 1)
        )
        changes = self.placements_to_changes(layer, ((p, None) for p in positions))
        return self.commit(layer.id, changes, description)
