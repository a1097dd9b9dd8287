"""Rasterization of lines, rectangles and ellipses onto the cell grid.

All functions are pure: they take grid positions and return the list of
positions a shape covers, without touching any layer.
"""

from __future__ import annotations

from ascii_studio.core.cell import Position


def normalize(a: Position, b: Position) -> tuple[int, int, int, int]:
    """Corners in any order -> (x1, y1, x2, y2) with x1 <= x2, y1 <= y2."""
    return min(a.x, b.x), min(a.y, b.y), max(a.x, b.x), max(a.y, b.y)


def line_points(a: Position, b: Position) -> list[Position]:
    """
    Bresenham line from ``a`` to ``b``, both endpoints included.

    The result is 8-connected, ordered from ``a`` and has exactly
    ``max(|dx|, |dy|) + 1`` points.

    >>> line_points(Position(0, 0), Position(3, 3))
    [Position(x=0, y=0), Position(x=1, y=1), Position(x=2, y=2), Position(x=3, y=3)]
    """
    x0, y0 = a
    x1, y1 = b
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    points: list[Position] = []
    while True:
        points.append(Position(x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return points


def rect_points(a: Position, b: Position, filled: bool = False) -> list[Position]:
    """Outline (or whole area) of the rectangle spanned by two corners."""
    x1, y1, x2, y2 = normalize(a, b)
    if filled:
        return [Position(x, y) for y in range(y1, y2 + 1) for x in range(x1, x2 + 1)]

    points: list[Position] = []
    seen: set[Position] = set()
    for x in range(x1, x2 + 1):
        for p in (Position(x, y1), Position(x, y2)):
            if p not in seen:
                seen.add(p)
                points.append(p)
    for y in range(y1 + 1, y2):
        for p in (Position(x1, y), Position(x2, y)):
            if p not in seen:
                seen.add(p)
                points.append(p)
    return points


def is_inside_ellipse(x: int, y: int, cx: float, cy: float, rx: float, ry: float) -> bool:
    """Whether the centre of cell (x, y) lies inside the ellipse."""
    if rx <= 0 or ry <= 0:
        return False
    nx = (x + 0.5 - cx) / rx
    ny = (y + 0.5 - cy) / ry
    return nx * nx + ny * ny <= 1


def ellipse_points(a: Position, b: Position, filled: bool = False) -> list[Position]:
    """
    Ellipse inscribed in the bounding box spanned by two corners.

    The outline is the disc minus the disc shrunk by one cell on both
    radii. When either radius is 1 or less there is no interior and the
    whole disc is the outline.
    """
    x1, y1, x2, y2 = normalize(a, b)
    cx = (x1 + x2 + 1) / 2
    cy = (y1 + y2 + 1) / 2
    rx = (x2 - x1 + 1) / 2
    ry = (y2 - y1 + 1) / 2
    thin = rx <= 1 or ry <= 1

    points: list[Position] = []
    for y in range(y1, y2 + 1):
        for x in range(x1, x2 + 1):
            if not is_inside_ellipse(x, y, cx, cy, rx, ry):
                continue
            if filled or thin or not is_inside_ellipse(x, y, cx, cy, rx - 1, ry - 1):
                points.append(Position(x, y))
    return points
