"""Box-drawing glyphs as 4-bit connection masks.

Each glyph is described by which sides it connects to: N=1, S=2, E=4, W=8.
Drawing a segment onto a cell that already holds a glyph of the same style
ORs the masks together, so separately drawn lines join up at corners and
crossings. A glyph of the other style is simply overwritten.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from ascii_studio.core.cell import Position
from ascii_studio.document.layer import Layer

N = 1
S = 2
E = 4
W = 8


class BoxStyle(Enum):
    SINGLE = "single"
    DOUBLE = "double"


SINGLE: dict[int, str] = {
    E | W: '─',
    N | S: '│',
    S | E: '┌',
    S | W: '┐',
    N | E: '└',
    N | W: '┘',
    N | S | E: '├',
    N | S | W: '┤',
    E | W | S: '┬',
    E | W | N: '┴',
    N | S | E | W: '┼',
}

DOUBLE: dict[int, str] = {
    E | W: '═',
    N | S: '║',
    S | E: '╔',
    S | W: '╗',
    N | E: '╚',
    N | W: '╝',
    N | S | E: '╠',
    N | S | W: '╣',
    E | W | S: '╦',
    E | W | N: '╩',
    N | S | E | W: '╬',
}

_MAPS = {BoxStyle.SINGLE: SINGLE, BoxStyle.DOUBLE: DOUBLE}

_CHAR_INFO: dict[str, tuple[int, BoxStyle]] = {
    char: (mask, style) for style, table in _MAPS.items() for mask, char in table.items()
}

# Offset to each neighbour, and the bit that neighbour needs to point back.
_NEIGHBORS: tuple[tuple[int, int, int, int], ...] = (
    (0, -1, N, S),
    (0, 1, S, N),
    (1, 0, E, W),
    (-1, 0, W, E),
)


def is_box_char(char: str | None) -> bool:
    return char in _CHAR_INFO


def char_to_connections(char: str | None) -> tuple[int, BoxStyle]:
    """(mask, style) of a glyph; (0, SINGLE) for anything else."""
    return _CHAR_INFO.get(char, (0, BoxStyle.SINGLE))


def connections_to_char(connections: int, style: BoxStyle = BoxStyle.SINGLE) -> str:
    """Glyph for a mask. Masks with no glyph fall back to a straight segment."""
    table = _MAPS[style]
    if connections in table:
        return table[connections]
    if connections in (N, S):
        return table[N | S]
    return table[E | W]


def resolve_char(existing: str | None, needed: int, style: BoxStyle = BoxStyle.SINGLE) -> str:
    """Glyph to place when a segment needing ``needed`` lands on ``existing``."""
    if is_box_char(existing):
        mask, existing_style = char_to_connections(existing)
        if existing_style is style:
            return connections_to_char(mask | needed, style)
    return connections_to_char(needed, style)


def neighbor_connections(layer: Layer, pos: Position, style: BoxStyle = BoxStyle.SINGLE) -> int:
    """Directions in which an adjacent same-style glyph points back at ``pos``."""
    mask = 0
    for dx, dy, bit, back in _NEIGHBORS:
        cell = layer.get_cell(pos.x + dx, pos.y + dy)
        if cell is None or not is_box_char(cell.char):
            continue
        their_mask, their_style = char_to_connections(cell.char)
        if their_style is style and their_mask & back:
            mask |= bit
    return mask


def smart_line_points(a: Position, b: Position) -> list[tuple[Position, int]]:
    """Straight segment along the dominant axis, starting at ``a``'s row or column."""
    if abs(b.x - a.x) >= abs(b.y - a.y):
        return [(Position(x, a.y), E | W) for x in range(min(a.x, b.x), max(a.x, b.x) + 1)]
    return [(Position(a.x, y), N | S) for y in range(min(a.y, b.y), max(a.y, b.y) + 1)]


def smart_box_points(a: Position, b: Position) -> list[tuple[Position, int]]:
    """Box outline with corner masks. Degenerate boxes become straight lines."""
    x1, y1 = min(a.x, b.x), min(a.y, b.y)
    x2, y2 = max(a.x, b.x), max(a.y, b.y)

    if x1 == x2 and y1 == y2:
        return [(Position(x1, y1), E | W)]
    if x1 == x2:
        return [(Position(x1, y), N | S) for y in range(y1, y2 + 1)]
    if y1 == y2:
        return [(Position(x, y1), E | W) for x in range(x1, x2 + 1)]

    points = [
        (Position(x1, y1), S | E),
        (Position(x2, y1), S | W),
        (Position(x1, y2), N | E),
        (Position(x2, y2), N | W),
    ]
    for x in range(x1 + 1, x2):
        points.append((Position(x, y1), E | W))
        points.append((Position(x, y2), E | W))
    for y in range(y1 + 1, y2):
        points.append((Position(x1, y), N | S))
        points.append((Position(x2, y), N | S))
    return points


def resolve_points(
    layer: Layer,
    points: Iterable[tuple[Position, int]],
    style: BoxStyle = BoxStyle.SINGLE,
) -> list[tuple[Position, str]]:
    """Glyph for each planned point, welded to existing glyphs and neighbours.

    Points outside the layer are dropped.
    """
    resolved: list[tuple[Position, str]] = []
    for pos, mask in points:
        if not layer.in_bounds(pos.x, pos.y):
            continue
        existing = layer.get_cell(pos.x, pos.y)
        needed = mask | neighbor_connections(layer, pos, style)
        resolved.append((pos, resolve_char(existing.char if existing else None, needed, style)))
    return resolved
