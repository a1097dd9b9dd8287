"""Freehand pencil."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ascii_studio.core.cell import NO_MODIFIERS, Modifiers, Position, copy_cell
from ascii_studio.history.command import CellChange
from ascii_studio.tools.base import Tool, ToolSettings

if TYPE_CHECKING:
    from ascii_studio.history.session import EditorSession


class PencilTool(Tool):
    """
    Paints the brush cell under the pointer while dragging.

    Cells land on the layer immediately so the stroke is visible as it is
    drawn; the whole stroke is recorded as one history entry on release.
    Revisiting a cell within a stroke keeps its first ``old_cell``.
    """

    name = "pencil"
    icon = "✏"
    shortcut = "P"
    description = "Draw"

    def __init__(
        self,
        session: EditorSession | None = None,
        settings: ToolSettings | None = None,
    ) -> None:
        super().__init__(session, settings)
        self._drawing = False
        self._layer_id: str | None = None
        self._pending: dict[Position, CellChange] = {}

    def is_active(self) -> bool:
        return self._drawing

    def on_pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self._commit_pending()
        self._drawing = True
        self._apply(pos)

    def on_pointer_drag(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self._drawing:
            self._apply(pos)

    def on_pointer_up(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self._commit_pending()
        self._drawing = False

    def on_deactivate(self) -> None:
        self._commit_pending()
        self._drawing = False
        self.preview.clear()

    def flush_pending_before_undo(self) -> None:
        self._commit_pending()

    def new_cell(self):
        return self.settings.make_cell()

    def _apply(self, pos: Position) -> None:
        layer = self.writable_layer()
        if layer is None or not layer.in_bounds(pos.x, pos.y):
            return
        if self._layer_id is not None and self._layer_id != layer.id:
            self._commit_pending()
        old_cell = layer.get_cell(pos.x, pos.y)
        new_cell = self.new_cell()
        if pos in self._pending:
            self._pending[pos].new_cell = copy_cell(new_cell)
        elif old_cell == new_cell:
            return
        else:
            self._pending[pos] = CellChange(pos.x, pos.y, copy_cell(old_cell), copy_cell(new_cell))
        self._layer_id = layer.id
        layer.set_cell(pos.x, pos.y, new_cell)
        self.document.notify_changed()

    def _commit_pending(self) -> None:
        if self._pending and self._layer_id is not None:
            self.commit(self._layer_id, list(self._pending.values()), self.description, applied=True)
        self._pending = {}
        self._layer_id = None


class EraserTool(PencilTool):
    """Pencil that makes cells absent. Already-absent cells are skipped."""

    name = "eraser"
    icon = "⌫"
    shortcut = "E"
    description = "Erase"

    def new_cell(self):
        return None
