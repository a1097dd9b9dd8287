"""Swap one colour for another on a channel of a layer area."""

from __future__ import annotations

from typing import Literal

from ascii_studio.core.cell import Cell, CellAttributes
from ascii_studio.document.layer import Layer
from ascii_studio.history.command import CellChange
from ascii_studio.render.composite import ExportRegion

ColorChannel = Literal["fg", "bg"]


def replace_colors(
    layer: Layer,
    bounds: ExportRegion,
    attribute: ColorChannel,
    from_color: int,
    to_color: int,
) -> list[CellChange]:
    """
    Change ``from_color`` to ``to_color`` on one channel inside ``bounds``.

    Either colour may be TRANSPARENT. Absent cells and positions outside
    the layer are skipped; the other channel and the glyph are kept.
    """
    if from_color == to_color:
        return []
    bounds = ExportRegion.from_points(bounds.x1, bounds.y1, bounds.x2, bounds.y2)
    changes: list[CellChange] = []
    for y in range(bounds.y1, bounds.y2 + 1):
        for x in range(bounds.x1, bounds.x2 + 1):
            cell = layer.get_cell(x, y)
            if cell is None:
                continue
            if attribute == "fg":
                if cell.fg != from_color:
                    continue
                attributes = CellAttributes(to_color, cell.bg)
            else:
                if cell.bg != from_color:
                    continue
                attributes = CellAttributes(cell.fg, to_color)
            changes.append(CellChange(x, y, cell.copy(), Cell(cell.char, attributes)))
    return changes
