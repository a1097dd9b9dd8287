"""Layer - one full-size grid of cells with visibility and lock flags."""

from __future__ import annotations

from typing import Any, Iterator

from ascii_studio.core.cell import Cell, CellAttributes, LayerCell, copy_cell


def _empty_grid(width: int, height: int) -> list[list[LayerCell]]:
    return [[None for _ in range(width)] for _ in range(height)]


def cell_to_data(cell: LayerCell) -> dict[str, Any] | None:
    """Serialize a layer cell; absent cells become None."""
    if cell is None:
        return None
    return {
        "char": cell.char,
        "attributes": {
            "foreground": cell.attributes.foreground,
            "background": cell.attributes.background,
        },
    }


def cell_from_data(data: dict[str, Any] | None) -> LayerCell:
    """Inverse of cell_to_data."""
    if data is None:
        return None
    attrs = data["attributes"]
    return Cell(data["char"], CellAttributes(attrs["foreground"], attrs["background"]))


class Layer:
    """
    A mutable grid of LayerCells sized to its document.

    Attributes:
        id: Stable identifier, assigned once by the owning document
        name: Display name
        visible: Raw visibility flag (groups may still hide the layer)
        locked: Raw lock flag (groups may still lock the layer)
        group_id: Id of the owning LayerGroup, lookup only
        cells: Row-major grid, ``cells[y][x]``
    """

    def __init__(self, width: int, height: int, name: str = "Layer", layer_id: str = "layer") -> None:
        self.id = layer_id
        self.name = name
        self.visible = True
        self.locked = False
        self.group_id: str | None = None
        self._width = width
        self._height = height
        self.cells: list[list[LayerCell]] = _empty_grid(width, height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get_cell(self, x: int, y: int) -> LayerCell:
        """Cell at (x, y); None when absent or out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self.cells[y][x]

    def set_cell(self, x: int, y: int, cell: LayerCell) -> None:
        """Set a cell as a fresh edit. Ignored when out of bounds or locked."""
        if not self.in_bounds(x, y) or self.locked:
            return
        self.cells[y][x] = cell

    def force_set_cell(self, x: int, y: int, cell: LayerCell) -> None:
        """Set a cell regardless of the lock flag (undo/redo replay)."""
        if not self.in_bounds(x, y):
            return
        self.cells[y][x] = cell

    def clear(self) -> None:
        if self.locked:
            return
        self.cells = _empty_grid(self._width, self._height)

    def resize(self, width: int, height: int) -> None:
        """Resize the grid, keeping the overlapping region."""
        new_cells = _empty_grid(width, height)
        for y in range(min(self._height, height)):
            for x in range(min(self._width, width)):
                new_cells[y][x] = self.cells[y][x]
        self.cells = new_cells
        self._width = width
        self._height = height

    def iter_cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Iterate over non-absent cells as (x, y, cell) tuples."""
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                if cell is not None:
                    yield x, y, cell

    def is_empty(self) -> bool:
        return next(self.iter_cells(), None) is None

    def clone(self, layer_id: str) -> Layer:
        """Deep copy of this layer under a new id."""
        layer = Layer(self._width, self._height, self.name, layer_id)
        layer.visible = self.visible
        layer.locked = self.locked
        layer.group_id = self.group_id
        layer.cells = [[copy_cell(c) for c in row] for row in self.cells]
        return layer

    def to_data(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "visible": self.visible,
            "locked": self.locked,
            "cells": [[cell_to_data(c) for c in row] for row in self.cells],
        }
        if self.group_id is not None:
            data["groupId"] = self.group_id
        return data

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> Layer:
        cells = data["cells"]
        height = len(cells)
        width = len(cells[0]) if cells else 0
        layer = cls(width, height, data.get("name", "Layer"), data["id"])
        layer.visible = data.get("visible", True)
        layer.locked = data.get("locked", False)
        layer.group_id = data.get("groupId")
        layer.cells = [[cell_from_data(c) for c in row] for row in cells]
        return layer

    def __repr__(self) -> str:
        return (
            f"Layer(id={self.id!r}, name={self.name!r}, "
            f"visible={self.visible}, locked={self.locked}, group_id={self.group_id!r})"
        )
