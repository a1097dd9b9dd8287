"""Editor configuration."""

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "ASCII_STUDIO_"


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    if raw := os.environ.get(ENV_PREFIX + name):
        try:
            value = int(raw)
        except ValueError:
            return default
        if value > 0:
            return value
    return default


@dataclass
class EditorConfig:
    """
    Defaults for new documents and sessions.

    Attributes:
        width: Columns of a new document
        height: Rows of a new document
        history_depth: Undo entries kept per session
        default_tool: Tool active when the editor starts
    """
    width: int = 80
    height: int = 25
    history_depth: int = 10
    default_tool: str = "pencil"

    @classmethod
    def from_env(cls, default_tool: Optional[str] = None) -> "EditorConfig":
        """
        Build a config from ASCII_STUDIO_* environment variables.

        ASCII_STUDIO_WIDTH, ASCII_STUDIO_HEIGHT and ASCII_STUDIO_HISTORY_DEPTH
        override the defaults; unset or invalid values are ignored.
        """
        base = cls()
        return cls(
            width=_env_int("WIDTH", base.width),
            height=_env_int("HEIGHT", base.height),
            history_depth=_env_int("HISTORY_DEPTH", base.history_depth),
            default_tool=default_tool or base.default_tool,
        )
