"""Cell - atomic unit of a layer grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

# Reserved colour value: "inherit this channel from whatever is below".
# Shares the integer domain with palette indices 0-15.
TRANSPARENT = -1

DEFAULT_FG = 15
DEFAULT_BG = 0


def is_transparent(index: int) -> bool:
    """Check whether a colour value is the transparent sentinel."""
    return index == TRANSPARENT


class Position(NamedTuple):
    """Integer grid coordinate, 0-based."""
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Modifiers:
    """Keyboard modifier state accompanying a pointer or key event."""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False


NO_MODIFIERS = Modifiers()


@dataclass(slots=True)
class CellAttributes:
    """Foreground/background colour pair.

    Each channel is either a palette index in [0, 15] or TRANSPARENT.
    """
    foreground: int = DEFAULT_FG
    background: int = DEFAULT_BG

    def copy(self) -> CellAttributes:
        return CellAttributes(self.foreground, self.background)

    @property
    def fg_transparent(self) -> bool:
        return is_transparent(self.foreground)

    @property
    def bg_transparent(self) -> bool:
        return is_transparent(self.background)


@dataclass(slots=True)
class Cell:
    """
    A single character cell with its colour attributes.

    A layer position holding ``None`` is *absent* (fully transparent);
    a Cell holding a space is an opaque, visible blank.
    """
    char: str = ' '
    attributes: CellAttributes = field(default_factory=CellAttributes)

    @classmethod
    def of(cls, char: str, fg: int = DEFAULT_FG, bg: int = DEFAULT_BG) -> Cell:
        """Shorthand constructor: ``Cell.of('X', 15, 0)``."""
        return cls(char, CellAttributes(fg, bg))

    @classmethod
    def from_triple(cls, triple: tuple[str, int, int]) -> Cell:
        char, fg, bg = triple
        return cls(char, CellAttributes(fg, bg))

    @property
    def fg(self) -> int:
        return self.attributes.foreground

    @property
    def bg(self) -> int:
        return self.attributes.background

    @property
    def triple(self) -> tuple[str, int, int]:
        """(char, foreground, background) - the identity used for matching."""
        return (self.char, self.attributes.foreground, self.attributes.background)

    def copy(self) -> Cell:
        """Create a copy of this cell."""
        return Cell(self.char, self.attributes.copy())


# Absent (None) means nothing is drawn at this position on the layer.
LayerCell = Optional[Cell]

# Stand-in used when an absent cell takes part in a comparison (flood fill).
ABSENT_MATCH: tuple[str, int, int] = (' ', 7, 0)


def copy_cell(cell: LayerCell) -> LayerCell:
    """Copy a layer cell, preserving absence."""
    return cell.copy() if cell is not None else None


def match_triple(cell: LayerCell) -> tuple[str, int, int]:
    """Matching identity of a layer cell; absent cells read as a default blank."""
    return cell.triple if cell is not None else ABSENT_MATCH
