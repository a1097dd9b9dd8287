"""Keyboard text entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ascii_studio.core.cell import NO_MODIFIERS, Modifiers, Position, copy_cell
from ascii_studio.history.command import CellChange
from ascii_studio.tools.base import Tool, ToolSettings

if TYPE_CHECKING:
    from ascii_studio.history.session import EditorSession


class TextTool(Tool):
    """
    Click to place a cursor, then type.

    Characters are written as they are typed and collected into one pending
    batch. The batch is committed on Escape, when Enter or typing runs past
    the last row, on the next click, on deactivation, and right before an
    undo or redo.
    """

    name = "text"
    icon = "T"
    shortcut = "T"

    def __init__(
        self,
        session: EditorSession | None = None,
        settings: ToolSettings | None = None,
    ) -> None:
        super().__init__(session, settings)
        self.cursor: Position | None = None
        self._start_x = 0
        self._typing = False
        self._layer_id: str | None = None
        self._pending: list[CellChange] = []

    def is_active(self) -> bool:
        return self._typing

    def on_pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self._commit_pending()
        self.cursor = pos
        self._start_x = pos.x
        self._typing = True

    def on_key_down(self, key: str, modifiers: Modifiers = NO_MODIFIERS) -> None:
        doc = self.document
        if not self._typing or self.cursor is None or doc is None:
            return
        if modifiers.ctrl or modifiers.meta or modifiers.alt:
            return

        if key == "Escape":
            self._stop()
        elif key == "Enter":
            self.cursor = Position(self._start_x, self.cursor.y + 1)
            if self.cursor.y >= doc.height:
                self._stop()
        elif key == "Backspace":
            if self.cursor.x > 0:
                back = Position(self.cursor.x - 1, self.cursor.y)
                self.cursor = back
                self._type(' ')
                self.cursor = back
        elif len(key) == 1:
            self._type(key)

    def on_deactivate(self) -> None:
        self._commit_pending()
        self._typing = False
        self.cursor = None
        self.preview.clear()

    def flush_pending_before_undo(self) -> None:
        if self._typing:
            self._commit_pending()

    def _type(self, char: str) -> None:
        doc = self.document
        layer = self.writable_layer()
        if layer is None or self.cursor is None or not layer.in_bounds(*self.cursor):
            return
        if self._layer_id is not None and self._layer_id != layer.id:
            self._commit_pending()

        x, y = self.cursor
        new_cell = self.settings.make_cell(char)
        self._pending.append(CellChange(x, y, copy_cell(layer.get_cell(x, y)), new_cell.copy()))
        self._layer_id = layer.id
        layer.set_cell(x, y, new_cell)
        doc.notify_changed()

        self.cursor = Position(x + 1, y)
        if self.cursor.x >= doc.width:
            self.cursor = Position(0, y + 1)
            if self.cursor.y >= doc.height:
                self._stop()

    def _stop(self) -> None:
        self._commit_pending()
        self._typing = False

    def _commit_pending(self) -> None:
        if self._pending and self._layer_id is not None:
            self.commit(self._layer_id, self._pending, "Text", applied=True)
        self._pending = []
        self._layer_id = None
