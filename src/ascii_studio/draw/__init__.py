"""Stateless drawing algorithms used by the tools."""

from ascii_studio.draw.box import BoxStyle, resolve_char
from ascii_studio.draw.fill import flood_fill
from ascii_studio.draw.geometry import ellipse_points, line_points, rect_points
from ascii_studio.draw.justify import justify_horizontal, justify_vertical
from ascii_studio.draw.recolor import replace_colors

__all__ = [
    "BoxStyle",
    "ellipse_points",
    "flood_fill",
    "justify_horizontal",
    "justify_vertical",
    "line_points",
    "rect_points",
    "replace_colors",
    "resolve_char",
]
