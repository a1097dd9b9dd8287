"""Compositing and renderers for outputting documents to various formats."""

from ascii_studio.render.composite import Compositor, ExportRegion, flatten_region
from ascii_studio.render.terminal import TerminalRenderer
from ascii_studio.render.text import TextRenderer

__all__ = ["Compositor", "ExportRegion", "flatten_region", "TerminalRenderer", "TextRenderer"]
