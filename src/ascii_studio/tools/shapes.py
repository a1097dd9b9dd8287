"""Drag-to-draw shape tools: line, rectangle and ellipses."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, ClassVar

from ascii_studio.core.cell import NO_MODIFIERS, Modifiers, Position
from ascii_studio.draw.geometry import ellipse_points, line_points, rect_points
from ascii_studio.tools.base import Tool, ToolSettings

if TYPE_CHECKING:
    from ascii_studio.history.session import EditorSession


class ShapeTool(Tool):
    """
    Press sets the anchor, drag updates the preview, release commits.

    Nothing touches the document before release.
    """

    description = "Shape"

    def __init__(self, session: EditorSession | None = None, settings: ToolSettings | None = None) -> None:
        super().__init__(session, settings)
        self.start: Position | None = None

    @abstractmethod
    def points(self, start: Position, end: Position) -> list[Position]:
        """Cells the shape covers between the anchor and ``end``."""
        pass

    def is_active(self) -> bool:
        return self.start is not None

    def on_pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.start = pos
        self._update_preview(pos)

    def on_pointer_drag(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.start is None:
            return
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
        cell = self.settings.make_cell()
        changes = self.placements_to_changes(layer, ((p, cell) for p in self.points(start, pos)))
        self.commit(layer.id, changes, self.description)

    def on_deactivate(self) -> None:
        self.start = None
        self.preview.clear()

    def _update_preview(self, end: Position) -> None:
        doc = self.document
        self.preview = {}
        if doc is None or self.start is None:
            return
        for p in self.points(self.start, end):
            if doc.in_bounds(p.x, p.y):
                self.preview[p] = self.settings.make_cell()


class LineTool(ShapeTool):
    name = "line"
    icon = "/"
    shortcut = "L"
    description = "Line"

    def points(self, start: Position, end: Position) -> list[Position]:
        return line_points(start, end)


class RectangleTool(ShapeTool):
    """Rectangle outline; holding shift at press fills it."""

    name = "rectangle"
    icon = "□"
    shortcut = "R"
    description = "Rectangle"

    def __init__(self, session: EditorSession | None = None, settings: ToolSettings | None = None) -> None:
        super().__init__(session, settings)
        self.filled = False

    def on_pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.filled = modifiers.shift
        super().on_pointer_down(pos, modifiers)

    def points(self, start: Position, end: Position) -> list[Position]:
        return rect_points(start, end, self.filled)


class EllipseTool(ShapeTool):
    """Outline of the ellipse inscribed in the dragged box."""

    name = "circle"
    icon = "○"
    shortcut = "C"
    description = "Ellipse"
    filled: ClassVar[bool] = False

    def points(self, start: Position, end: Position) -> list[Position]:
        return ellipse_points(start, end, self.filled)


class FilledEllipseTool(EllipseTool):
    name = "filled-circle"
    icon = "●"
    filled: ClassVar[bool] = True
