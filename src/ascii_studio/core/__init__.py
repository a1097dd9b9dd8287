"""Core data structures: cells, positions, palette and signals."""

from ascii_studio.core.cell import (
    TRANSPARENT,
    Cell,
    CellAttributes,
    LayerCell,
    Modifiers,
    NO_MODIFIERS,
    Position,
    is_transparent,
)
from ascii_studio.core.events import Signal

__all__ = [
    "TRANSPARENT",
    "Cell",
    "CellAttributes",
    "LayerCell",
    "Modifiers",
    "NO_MODIFIERS",
    "Position",
    "is_transparent",
    "Signal",
]
