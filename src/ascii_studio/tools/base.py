"""Tool - base class for the pointer/keyboard state machines."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Iterable

from ascii_studio.core.cell import NO_MODIFIERS, Cell, Modifiers, Position, copy_cell
from ascii_studio.draw.box import BoxStyle
from ascii_studio.history.command import CellChange, CellChangeCommand

if TYPE_CHECKING:
    from ascii_studio.document.document import Document
    from ascii_studio.document.layer import Layer
    from ascii_studio.history.session import EditorSession
    from ascii_studio.history.undo import UndoRedoManager

logger = logging.getLogger(__name__)


@dataclass
class ToolSettings:
    """Brush state shared by all tools.

    Attributes:
        char: Character placed by pencil, shapes and fill
        fg: Foreground palette index (or TRANSPARENT)
        bg: Background palette index (or TRANSPARENT)
        box_style: Line style of the smart line/box tools
    """
    char: str = '█'
    fg: int = 15
    bg: int = 0
    box_style: BoxStyle = BoxStyle.SINGLE

    def make_cell(self, char: str | None = None) -> Cell:
        return Cell.of(self.char if char is None else char, self.fg, self.bg)


class Tool(ABC):
    """
    Turns a sequence of input events into one undoable cell batch.

    Every hook has a no-op default, so the input layer can call any of them
    on any tool. ``preview`` holds cells to show in front of the composite
    while a gesture is in progress; it never touches the document.
    """

    name: ClassVar[str] = ""
    icon: ClassVar[str] = ""
    shortcut: ClassVar[str] = ""

    def __init__(
        self,
        session: EditorSession | None = None,
        settings: ToolSettings | None = None,
    ) -> None:
        self.session = session
        self.settings = settings or ToolSettings()
        self.preview: dict[Position, Cell] = {}

    # -------------------------------------------------------------------------
    # Input hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def on_pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        """Start a gesture at ``pos``."""
        pass

    def on_pointer_drag(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        pass

    def on_pointer_up(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        pass

    def on_pointer_move(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        pass

    def on_key_down(self, key: str, modifiers: Modifiers = NO_MODIFIERS) -> None:
        pass

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def on_activate(self) -> None:
        pass

    def on_deactivate(self) -> None:
        """Abandon any gesture in progress."""
        self.preview.clear()

    def flush_pending_before_undo(self) -> None:
        """Commit work that was applied but not yet recorded."""
        pass

    def is_active(self) -> bool:
        """True while a multi-event gesture is in progress."""
        return False

    def set_session(self, session: EditorSession | None) -> None:
        """Point the tool at another document and history."""
        self.flush_pending_before_undo()
        self.on_deactivate()
        self.session = session

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @property
    def document(self) -> Document | None:
        return self.session.document if self.session else None

    @property
    def history(self) -> UndoRedoManager | None:
        return self.session.history if self.session else None

    def writable_layer(self) -> Layer | None:
        """The active layer, or None when there is none or it is locked."""
        doc = self.document
        if doc is None:
            return None
        layer = doc.layers.get_active_layer()
        if layer is None:
            return None
        if doc.layers.is_layer_effectively_locked(layer):
            logger.debug("%s: layer %s is locked", self.name, layer.id)
            return None
        return layer

    def placements_to_changes(self, layer: Layer, placements: Iterable[tuple[Position, Cell | None]]) -> list[CellChange]:
        """Diff planned cells against the layer, dropping unchanged and out-of-bounds ones."""
        changes: list[CellChange] = []
        for pos, new_cell in placements:
            if not layer.in_bounds(pos.x, pos.y):
                continue
            old_cell = layer.get_cell(pos.x, pos.y)
            if old_cell != new_cell:
                changes.append(CellChange(pos.x, pos.y, copy_cell(old_cell), copy_cell(new_cell)))
        return changes

    def commit(
        self,
        layer_id: str,
        changes: list[CellChange],
        description: str | None = None,
        applied: bool = False,
    ) -> bool:
        """Record a batch as one history entry.

        With ``applied`` the cells are already on the layer and the command
        is only registered; otherwise it is executed first.
        """
        doc, history = self.document, self.history
        if not changes or doc is None or history is None:
            return False
        command = CellChangeCommand(doc, layer_id, changes, description)
        if applied:
            history.execute(command)
        else:
            history.perform(command)
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
