"""Render a document to terminal-compatible ANSI escape sequences."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ascii_studio.core.palette import dos_to_sgr_bg, dos_to_sgr_fg
from ascii_studio.render.composite import ExportRegion, flatten_region

if TYPE_CHECKING:
    from ascii_studio.document.document import Document

# SGR state after a reset: light gray on black
_RESET_FG = 37
_RESET_BG = 40


class TerminalRenderer:
    """
    Render the flattened document to ANSI escape sequences.

    Palette indices are DOS attribute order and get mapped to SGR codes.
    Optimizes output by only emitting SGR codes when attributes change.
    """

    def __init__(self, reset_at_end: bool = True):
        self.reset_at_end = reset_at_end

    def render(self, doc: "Document", region: ExportRegion | None = None) -> str:
        """Render the composite (or one region of it) to an ANSI string."""
        rows, _ = flatten_region(doc.layers, region)
        lines: list[str] = []

        last_fg = _RESET_FG
        last_bg = _RESET_BG

        for row in rows:
            line_parts: list[str] = []

            # Find last non-empty cell to avoid trailing spaces
            last_col = -1
            for x, cell in enumerate(row):
                if cell.char != ' ' or cell.bg != 0:
                    last_col = x

            for x, cell in enumerate(row):
                if x > last_col:
                    break

                sgr_parts: list[str] = []
                fg = dos_to_sgr_fg(cell.fg)
                bg = dos_to_sgr_bg(cell.bg)

                if fg != last_fg:
                    sgr_parts.append(str(fg))
                    last_fg = fg

                if bg != last_bg:
                    # Default bg (49) for black matches the terminal background
                    sgr_parts.append('49' if bg == _RESET_BG else str(bg))
                    last_bg = bg

                if sgr_parts:
                    line_parts.append(f"\x1b[{';'.join(sgr_parts)}m")

                line_parts.append(cell.char)

            # Reset at end of each line to prevent color bleeding into clear-to-EOL
            if last_bg != _RESET_BG:
                line_parts.append('\x1b[0m')
                last_fg = _RESET_FG
                last_bg = _RESET_BG

            lines.append(''.join(line_parts))

        result = '\n'.join(lines)

        if self.reset_at_end:
            result += '\x1b[0m'

        return result
