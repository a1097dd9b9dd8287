"""ToolManager - registry and switching of tools."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ascii_studio.core.events import Signal
from ascii_studio.tools.base import Tool

if TYPE_CHECKING:
    from ascii_studio.history.session import EditorSession

logger = logging.getLogger(__name__)


class ToolManager:
    """
    Holds the tools by name and tracks the active one.

    Switching deactivates the previous tool, which abandons any preview it
    was showing.

    Attributes:
        tool_changed: Signal emitted with the new tool's name
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self._active: Tool | None = None
        self.tool_changed = Signal("tool_changed")

    def register(self, tool: Tool) -> None:
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    @property
    def tools(self) -> list[Tool]:
        return list(self._tools.values())

    @property
    def active_tool(self) -> Tool | None:
        return self._active

    @property
    def active_name(self) -> str:
        return self._active.name if self._active else ""

    def set_active(self, name: str) -> bool:
        tool = self._tools.get(name)
        if tool is None:
            logger.debug("set_active: no tool named %r", name)
            return False
        if tool is self._active:
            return False
        if self._active is not None:
            self._active.on_deactivate()
        self._active = tool
        tool.on_activate()
        self.tool_changed.emit(name)
        return True

    def set_session(self, session: EditorSession | None) -> None:
        """Point every tool at another session."""
        for tool in self._tools.values():
            tool.set_session(session)
