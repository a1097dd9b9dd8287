"""Drawing tools and their manager."""

from ascii_studio.tools.base import Tool, ToolSettings
from ascii_studio.tools.fill import DropperTool, FillTool
from ascii_studio.tools.manager import ToolManager
from ascii_studio.tools.pencil import EraserTool, PencilTool
from ascii_studio.tools.selection import SelectionState, SelectionTool
from ascii_studio.tools.shapes import EllipseTool, FilledEllipseTool, LineTool, RectangleTool, ShapeTool
from ascii_studio.tools.smart import SmartBoxTool, SmartLineTool
from ascii_studio.tools.text import TextTool

__all__ = [
    "DropperTool",
    "EllipseTool",
    "EraserTool",
    "FillTool",
    "FilledEllipseTool",
    "LineTool",
    "PencilTool",
    "RectangleTool",
    "SelectionState",
    "SelectionTool",
    "ShapeTool",
    "SmartBoxTool",
    "SmartLineTool",
    "TextTool",
    "Tool",
    "ToolManager",
    "ToolSettings",
]
