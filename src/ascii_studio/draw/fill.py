"""Flood fill over a single layer."""

from __future__ import annotations

import logging
from collections import deque

from ascii_studio.core.cell import Cell, Position, match_triple
from ascii_studio.document.layer import Layer

logger = logging.getLogger(__name__)


def flood_fill(layer: Layer, start: Position, replacement: Cell) -> list[Position]:
    """
    4-connected region around ``start`` whose cells match the seed exactly.

    Matching compares (char, fg, bg); absent cells compare as a light gray
    space on black. Returns positions in BFS order. Empty when the seed is
    outside the layer or already equals ``replacement``.
    """
    if not layer.in_bounds(start.x, start.y):
        return []
    target = match_triple(layer.get_cell(start.x, start.y))
    if target == replacement.triple:
        logger.debug("flood_fill: seed at %s already matches", start)
        return []

    region: list[Position] = []
    visited = {start}
    queue = deque([start])
    while queue:
        pos = queue.popleft()
        if match_triple(layer.get_cell(pos.x, pos.y)) != target:
            continue
        region.append(pos)
        for nx, ny in ((pos.x + 1, pos.y), (pos.x - 1, pos.y), (pos.x, pos.y + 1), (pos.x, pos.y - 1)):
            neighbor = Position(nx, ny)
            if neighbor not in visited and layer.in_bounds(nx, ny):
                visited.add(neighbor)
                queue.append(neighbor)
    return region
