"""Import plain text onto the active layer."""

from __future__ import annotations

import logging

from ascii_studio.core.cell import Cell, copy_cell
from ascii_studio.document.document import Document
from ascii_studio.history.command import CellChange, CellChangeCommand
from ascii_studio.history.undo import UndoRedoManager

logger = logging.getLogger(__name__)


def import_plain_text(
    document: Document,
    history: UndoRedoManager,
    text: str,
    fg: int = 15,
    bg: int = 0,
) -> CellChangeCommand | None:
    """
    Write ``text`` onto the active layer from the top-left corner.

    Spaces are skipped so they leave whatever is underneath. Lines and
    columns beyond the grid are clipped. The import is one undoable step;
    nothing happens on a locked layer.
    """
    layer = document.layers.get_active_layer()
    if layer is None or document.layers.is_layer_effectively_locked(layer):
        logger.debug("import_plain_text: no writable active layer")
        return None

    changes: list[CellChange] = []
    for y, line in enumerate(text.splitlines()[:document.height]):
        for x, char in enumerate(line[:document.width]):
            new_cell = Cell.of(char, fg, bg)
            old_cell = layer.get_cell(x, y)
            if char == ' ' or old_cell == new_cell:
                continue
            changes.append(CellChange(x, y, copy_cell(old_cell), new_cell))

    if not changes:
        return None
    command = CellChangeCommand(document, layer.id, changes, "Import text")
    history.perform(command)
    return command
