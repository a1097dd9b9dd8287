"""Internal cell clipboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ascii_studio.core.cell import Cell, LayerCell, copy_cell
from ascii_studio.history.command import CellChange, CellChangeCommand
from ascii_studio.history.session import EditorSession

logger = logging.getLogger(__name__)


@dataclass
class ClipboardRegion:
    """A rectangle of copied layer cells, absent cells included."""
    cells: list[list[LayerCell]]
    width: int
    height: int

    def to_text(self) -> str:
        return '\n'.join(''.join(c.char if c else ' ' for c in row) for row in self.cells)


class Clipboard:
    """
    Copy/paste of active-layer cells.

    The buffer keeps full cells (colours and absence). ``copy`` also returns
    the region as plain text for whatever system clipboard the host has.
    """

    def __init__(self) -> None:
        self.buffer: ClipboardRegion | None = None

    def has_content(self) -> bool:
        return self.buffer is not None

    def copy(self, session: EditorSession, x0: int, y0: int, x1: int, y1: int) -> str:
        """Copy the rectangle spanned by two corners from the active layer."""
        layer = session.document.layers.get_active_layer()
        if layer is None:
            return ""
        left, right = min(x0, x1), max(x0, x1)
        top, bottom = min(y0, y1), max(y0, y1)
        cells = [
            [copy_cell(layer.get_cell(x, y)) for x in range(left, right + 1)]
            for y in range(top, bottom + 1)
        ]
        self.buffer = ClipboardRegion(cells, right - left + 1, bottom - top + 1)
        return self.buffer.to_text()

    def paste(self, session: EditorSession, x: int, y: int) -> bool:
        """Paste the buffer with its top-left corner at (x, y).

        Absent cells do not overwrite anything. Cells landing outside the
        grid, or matching what is already there, are dropped.
        """
        if self.buffer is None:
            return False
        changes = []
        for dy, row in enumerate(self.buffer.cells):
            for dx, cell in enumerate(row):
                if cell is not None:
                    changes.append((x + dx, y + dy, cell.copy()))
        return self._commit(session, changes, "Paste")

    def paste_text(
        self,
        session: EditorSession,
        text: str,
        x: int,
        y: int,
        fg: int = 15,
        bg: int = 0,
    ) -> bool:
        """Paste plain text, one cell per character, in the given colours."""
        changes = []
        for dy, line in enumerate(text.split('\n')):
            for dx, char in enumerate(line.rstrip('\r')):
                changes.append((x + dx, y + dy, Cell.of(char, fg, bg)))
        return self._commit(session, changes, "Paste text")

    def _commit(
        self,
        session: EditorSession,
        placements: list[tuple[int, int, Cell]],
        description: str,
    ) -> bool:
        doc = session.document
        layer = doc.layers.get_active_layer()
        if layer is None or doc.layers.is_layer_effectively_locked(layer):
            logger.debug("%s: no writable active layer", description)
            return False
        changes = [
            CellChange(px, py, copy_cell(layer.get_cell(px, py)), cell)
            for px, py, cell in placements
            if doc.in_bounds(px, py) and layer.get_cell(px, py) != cell
        ]
        if not changes:
            return False
        session.history.perform(CellChangeCommand(doc, layer.id, changes, description))
        return True
