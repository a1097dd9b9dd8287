"""Render a document to plain text (strip colors)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ascii_studio.render.composite import ExportRegion, flatten_region

if TYPE_CHECKING:
    from ascii_studio.document.document import Document


class TextRenderer:
    """Render the flattened document to plain text without any styling."""

    def __init__(self, preserve_whitespace: bool = False):
        self.preserve_whitespace = preserve_whitespace

    def render(self, doc: "Document", region: ExportRegion | None = None) -> str:
        """Render the composite (or one region of it) to plain text."""
        rows, _ = flatten_region(doc.layers, region)
        lines: list[str] = []

        for row in rows:
            line = ''.join(cell.char for cell in row)
            if not self.preserve_whitespace:
                line = line.rstrip()
            lines.append(line)

        result = '\n'.join(lines)

        if not self.preserve_whitespace:
            # Remove trailing empty lines
            result = result.rstrip('\n')

        return result
