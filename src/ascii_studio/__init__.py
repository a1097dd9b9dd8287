"""
ascii-studio: layered ASCII/ANSI art editor core

Documents are grids of character cells organized into ordered, groupable
layers, edited by tools that record bounded undo/redo history.

Quick Start:
    >>> import ascii_studio as studio
    >>> doc = studio.Document(80, 25)
    >>> doc.set_cell_on_active(0, 0, studio.Cell.of('X', 15, 0))
    True
    >>> path = studio.save(doc, "art.json")
    >>> print(studio.TextRenderer().render(studio.load(path)))
    X

Features:
    - Layers with per-channel transparency and cascading group visibility/lock
    - Bottom-to-top compositing into a single flattened grid
    - Command-based undo/redo with one history per open document
    - Pencil, line, rectangle, ellipse, fill, text, selection and
      box-drawing tools that weld onto existing line glyphs
    - Export to JSON snapshots, plain text, ANSI and PNG
"""

__version__ = "0.1.0"

# Core types
from ascii_studio.core.cell import TRANSPARENT, Cell, CellAttributes, Position

# Document model
from ascii_studio.document.document import Document
from ascii_studio.document.group import GroupKind, LayerGroup
from ascii_studio.document.layer import Layer
from ascii_studio.document.manager import LayerManager

# Compositing and rendering
from ascii_studio.render.composite import Compositor, ExportRegion
from ascii_studio.render.terminal import TerminalRenderer
from ascii_studio.render.text import TextRenderer

# History
from ascii_studio.history.command import CellChange, CellChangeCommand
from ascii_studio.history.undo import UndoRedoManager

# Editing
from ascii_studio.config import EditorConfig
from ascii_studio.editor import Editor

# Convenience functions
from ascii_studio.io.reader import load
from ascii_studio.io.writer import export, save

__all__ = [
    # Version
    "__version__",
    # Core types
    "TRANSPARENT",
    "Cell",
    "CellAttributes",
    "Position",
    # Document model
    "Document",
    "GroupKind",
    "Layer",
    "LayerGroup",
    "LayerManager",
    # Rendering
    "Compositor",
    "ExportRegion",
    "TerminalRenderer",
    "TextRenderer",
    # History
    "CellChange",
    "CellChangeCommand",
    "UndoRedoManager",
    # Editing
    "Editor",
    "EditorConfig",
    # I/O
    "load",
    "save",
    "export",
]
