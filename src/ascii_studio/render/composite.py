"""Flatten a layer stack into a single grid of resolved cells."""

from __future__ import annotations

from dataclasses import dataclass

from ascii_studio.core.cell import TRANSPARENT, Cell
from ascii_studio.document.manager import LayerManager

# What shows through where no layer contributes anything.
DEFAULT_CELL = Cell.of(' ', 7, 0)


@dataclass
class ExportRegion:
    """Inclusive rectangle of grid cells to export."""
    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_points(cls, x1: int, y1: int, x2: int, y2: int) -> ExportRegion:
        return cls(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))

    @classmethod
    def parse(cls, text: str) -> ExportRegion:
        """Parse ``"x1,y1,x2,y2"``."""
        parts = [int(p) for p in text.split(',')]
        if len(parts) != 4:
            raise ValueError(f"Region needs four integers, got {text!r}")
        return cls.from_points(*parts)

    @property
    def width(self) -> int:
        return self.x2 - self.x1 + 1

    @property
    def height(self) -> int:
        return self.y2 - self.y1 + 1

    def clamp(self, width: int, height: int) -> ExportRegion:
        """Intersect with a ``width`` x ``height`` grid.

        Raises ValueError when the region lies wholly outside the grid.
        """
        clamped = ExportRegion(
            max(0, self.x1), max(0, self.y1),
            min(width - 1, self.x2), min(height - 1, self.y2),
        )
        if clamped.x1 > clamped.x2 or clamped.y1 > clamped.y2:
            raise ValueError(f"Region {self.x1},{self.y1},{self.x2},{self.y2} is outside the {width}x{height} grid")
        return clamped

    def slice(self, rows: list[list]) -> list[list]:
        return [row[self.x1:self.x2 + 1] for row in rows[self.y1:self.y2 + 1]]


class Compositor:
    """
    Per-channel, bottom-to-top compositor.

    Nothing is cached: ``flatten`` is a pure function of the current layer
    contents. Layers hidden directly or through their group do not take part.
    Characters never blend; the topmost contributing layer wins. Foreground
    and background resolve independently, a TRANSPARENT channel keeps
    whatever has accumulated below.
    """

    def __init__(self, layer_manager: LayerManager) -> None:
        self.layer_manager = layer_manager
        self.transparency_map: list[list[bool]] = []

    def flatten(self) -> list[list[Cell]]:
        """Composite all effectively visible layers.

        Also rebuilds ``transparency_map``: True where no layer has supplied
        an opaque background yet.
        """
        manager = self.layer_manager
        width, height = manager.width, manager.height
        grid = [[DEFAULT_CELL.copy() for _ in range(width)] for _ in range(height)]
        unresolved = [[True] * width for _ in range(height)]

        for layer in manager.layers:
            if not manager.is_layer_effectively_visible(layer):
                continue
            for x, y, cell in layer.iter_cells():
                if x >= width or y >= height:
                    continue
                target = grid[y][x]
                target.char = cell.char
                if cell.fg != TRANSPARENT:
                    target.attributes.foreground = cell.fg
                if cell.bg != TRANSPARENT:
                    target.attributes.background = cell.bg
                    unresolved[y][x] = False

        self.transparency_map = unresolved
        return grid

    def get_cell(self, x: int, y: int) -> Cell:
        """Resolved cell at one position; the default cell outside the grid."""
        manager = self.layer_manager
        if not (0 <= x < manager.width and 0 <= y < manager.height):
            return DEFAULT_CELL.copy()
        result = DEFAULT_CELL.copy()
        for layer in manager.layers:
            if not manager.is_layer_effectively_visible(layer):
                continue
            cell = layer.get_cell(x, y)
            if cell is None:
                continue
            result.char = cell.char
            if cell.fg != TRANSPARENT:
                result.attributes.foreground = cell.fg
            if cell.bg != TRANSPARENT:
                result.attributes.background = cell.bg
        return result


def flatten_region(
    layer_manager: LayerManager,
    region: ExportRegion | None = None,
) -> tuple[list[list[Cell]], list[list[bool]]]:
    """Flatten, then cut out ``region`` (clamped to the grid) if given.

    A region wholly outside the grid raises ValueError.

    Returns the cell rows and the matching transparency rows.
    """
    compositor = Compositor(layer_manager)
    rows = compositor.flatten()
    transparency = compositor.transparency_map
    if region is not None:
        region = region.clamp(layer_manager.width, layer_manager.height)
        rows = region.slice(rows)
        transparency = region.slice(transparency)
    return rows, transparency
