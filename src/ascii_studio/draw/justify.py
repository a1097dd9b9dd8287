"""Align the content of a rectangular area of a layer."""

from __future__ import annotations

from typing import Literal

from ascii_studio.core.cell import LayerCell, copy_cell
from ascii_studio.document.layer import Layer
from ascii_studio.history.command import CellChange
from ascii_studio.render.composite import ExportRegion

HorizontalAlign = Literal["left", "center", "right"]
VerticalAlign = Literal["top", "bottom"]


def _has_content(cell: LayerCell) -> bool:
    return cell is not None and cell.char != ' '


def _diff(layer: Layer, x: int, y: int, new_cell: LayerCell, changes: list[CellChange]) -> None:
    old_cell = layer.get_cell(x, y)
    if old_cell != new_cell:
        changes.append(CellChange(x, y, copy_cell(old_cell), copy_cell(new_cell)))


def justify_horizontal(layer: Layer, bounds: ExportRegion, alignment: HorizontalAlign) -> list[CellChange]:
    """
    Shift each row's content span to the left, centre or right of ``bounds``.

    The span runs from the first to the last non-space cell of the row, and
    keeps its inner gaps and colours. Rows without content are left alone.
    Only cells that actually change are returned.
    """
    bounds = ExportRegion.from_points(bounds.x1, bounds.y1, bounds.x2, bounds.y2)
    width = bounds.width
    changes: list[CellChange] = []

    for y in range(bounds.y1, bounds.y2 + 1):
        row = [layer.get_cell(x, y) for x in range(bounds.x1, bounds.x2 + 1)]
        filled = [i for i, cell in enumerate(row) if _has_content(cell)]
        if not filled:
            continue
        content = row[filled[0]:filled[-1] + 1]

        if alignment == "left":
            offset = 0
        elif alignment == "right":
            offset = width - len(content)
        else:
            offset = (width - len(content)) // 2

        for i in range(width):
            new_cell = content[i - offset] if offset <= i < offset + len(content) else None
            _diff(layer, bounds.x1 + i, y, new_cell, changes)

    return changes


def justify_vertical(layer: Layer, bounds: ExportRegion, alignment: VerticalAlign) -> list[CellChange]:
    """
    Stack the rows that have content at the top or bottom of ``bounds``.

    Empty rows between content rows are squeezed out.
    """
    bounds = ExportRegion.from_points(bounds.x1, bounds.y1, bounds.x2, bounds.y2)
    rows = [
        [layer.get_cell(x, y) for x in range(bounds.x1, bounds.x2 + 1)]
        for y in range(bounds.y1, bounds.y2 + 1)
    ]
    content_rows = [row for row in rows if any(_has_content(cell) for cell in row)]
    if not content_rows:
        return []

    offset = 0 if alignment == "top" else bounds.height - len(content_rows)
    changes: list[CellChange] = []
    for row_idx in range(bounds.height):
        source = row_idx - offset
        for i in range(bounds.width):
            new_cell = content_rows[source][i] if 0 <= source < len(content_rows) else None
            _diff(layer, bounds.x1 + i, bounds.y1 + row_idx, new_cell, changes)
    return changes
