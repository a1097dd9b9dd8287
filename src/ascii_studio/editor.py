"""Editor - wires sessions, tools, history and the clipboard together.

This is the single object an input layer talks to: forward pointer and
key events, call ``undo``/``redo``, and pull ``flatten()`` plus
``preview`` for display.

Example:
    >>> from ascii_studio.editor import Editor
    >>> from ascii_studio.core import Position
    >>> editor = Editor()
    >>> editor.settings.char = 'X'
    >>> editor.pointer_down(Position(0, 0))
    >>> editor.pointer_up(Position(0, 0))
    >>> editor.flatten()[0][0].char
    'X'
"""

from __future__ import annotations

import logging
from typing import Callable

from ascii_studio.config import EditorConfig
from ascii_studio.core.cell import NO_MODIFIERS, Cell, Modifiers, Position
from ascii_studio.document.document import Document
from ascii_studio.draw.recolor import ColorChannel
from ascii_studio.history.clipboard import Clipboard
from ascii_studio.history.command import Command, LayerStructureCommand, run_structural
from ascii_studio.history.session import EditorSession, SessionManager
from ascii_studio.history.undo import UndoRedoManager
from ascii_studio.render.composite import Compositor
from ascii_studio.tools import (
    DropperTool,
    EllipseTool,
    EraserTool,
    FillTool,
    FilledEllipseTool,
    LineTool,
    PencilTool,
    RectangleTool,
    SelectionTool,
    SmartBoxTool,
    SmartLineTool,
    TextTool,
    Tool,
    ToolManager,
    ToolSettings,
)

logger = logging.getLogger(__name__)


class Editor:
    """
    Multi-document editor facade.

    Attributes:
        config: Defaults for new sessions
        settings: Brush shared by every tool
        sessions: Open documents with their histories
        clipboard: Cell clipboard shared across sessions
        tools: Registered tools and the active one
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self.config = config or EditorConfig()
        self.settings = ToolSettings()
        self.sessions = SessionManager(self.config)
        self.clipboard = Clipboard()
        self.tools = ToolManager()

        for tool in self._default_tools():
            self.tools.register(tool)

        self.sessions.create_session()
        self.tools.set_session(self.sessions.active_session)
        self.sessions.session_changed.connect(self.tools.set_session)
        if not self.tools.set_active(self.config.default_tool):
            self.tools.set_active(PencilTool.name)

    def _default_tools(self) -> list[Tool]:
        return [
            PencilTool(settings=self.settings),
            EraserTool(settings=self.settings),
            LineTool(settings=self.settings),
            RectangleTool(settings=self.settings),
            EllipseTool(settings=self.settings),
            FilledEllipseTool(settings=self.settings),
            FillTool(settings=self.settings),
            TextTool(settings=self.settings),
            SelectionTool(settings=self.settings, clipboard=self.clipboard),
            SmartLineTool(settings=self.settings),
            SmartBoxTool(settings=self.settings),
            DropperTool(settings=self.settings),
        ]

    # -------------------------------------------------------------------------
    # Active session shortcuts
    # -------------------------------------------------------------------------

    @property
    def session(self) -> EditorSession:
        return self.sessions.active_session

    @property
    def document(self) -> Document:
        return self.session.document

    @property
    def history(self) -> UndoRedoManager:
        return self.session.history

    @property
    def preview(self) -> dict[Position, Cell]:
        tool = self.tools.active_tool
        return tool.preview if tool else {}

    def flatten(self) -> list[list[Cell]]:
        return Compositor(self.document.layers).flatten()

    # -------------------------------------------------------------------------
    # Input forwarding
    # -------------------------------------------------------------------------

    def set_tool(self, name: str) -> bool:
        return self.tools.set_active(name)

    def pointer_down(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.tools.active_tool:
            self.tools.active_tool.on_pointer_down(pos, modifiers)

    def pointer_drag(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.tools.active_tool:
            self.tools.active_tool.on_pointer_drag(pos, modifiers)

    def pointer_up(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.tools.active_tool:
            self.tools.active_tool.on_pointer_up(pos, modifiers)

    def pointer_move(self, pos: Position, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.tools.active_tool:
            self.tools.active_tool.on_pointer_move(pos, modifiers)

    def key_down(self, key: str, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if self.tools.active_tool:
            self.tools.active_tool.on_key_down(key, modifiers)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def undo(self) -> Command | None:
        self._flush_active_tool()
        return self.history.undo()

    def redo(self) -> Command | None:
        self._flush_active_tool()
        return self.history.redo()

    def layer_action(self, description: str, mutate: Callable[[], object]) -> LayerStructureCommand | None:
        """Run a LayerManager mutation as one undoable structural step."""
        self._flush_active_tool()
        return run_structural(self.history, self.document.layers, description, mutate)

    def _flush_active_tool(self) -> None:
        if self.tools.active_tool:
            self.tools.active_tool.flush_pending_before_undo()

    # -------------------------------------------------------------------------
    # Document edits
    # -------------------------------------------------------------------------

    def resize(self, width: int, height: int) -> None:
        """Resize the active document and forget its history.

        Commands recorded at the old size hold cells and snapshots that no
        longer fit the grid, so they cannot be replayed.
        """
        self._flush_active_tool()
        self.document.resize(width, height)
        self.history.clear()

    def replace_colors(self, attribute: ColorChannel, from_color: int, to_color: int) -> bool:
        """Swap a colour on one channel inside the selection (or everywhere)."""
        tool = self.tools.get(SelectionTool.name)
        if not isinstance(tool, SelectionTool):
            return False
        self._flush_active_tool()
        return tool.replace_colors(attribute, from_color, to_color)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def new_session(self, width: int | None = None, height: int | None = None) -> EditorSession:
        return self.sessions.create_session(width, height)

    def open_document(self, document: Document, name: str | None = None) -> EditorSession:
        return self.sessions.create_session(document=document, name=name)

    def switch_session(self, session_id: str) -> EditorSession | None:
        return self.sessions.switch_session(session_id)

    def close_session(self, session_id: str) -> EditorSession | None:
        return self.sessions.close_session(session_id)
