"""Commands, undo/redo history, sessions and the clipboard."""

from ascii_studio.history.clipboard import Clipboard, ClipboardRegion
from ascii_studio.history.command import (
    CellChange,
    CellChangeCommand,
    Command,
    LayerStructureCommand,
    run_structural,
)
from ascii_studio.history.session import EditorSession, SessionManager
from ascii_studio.history.undo import HistoryStacks, UndoRedoManager

__all__ = [
    "CellChange",
    "CellChangeCommand",
    "Clipboard",
    "ClipboardRegion",
    "Command",
    "EditorSession",
    "HistoryStacks",
    "LayerStructureCommand",
    "SessionManager",
    "UndoRedoManager",
    "run_structural",
]
