"""Render a document to a PNG image.

Each cell becomes a ``cell_width`` x ``cell_height`` block. Backgrounds are
painted only where some layer resolved one; everywhere else stays fully
transparent so the exported image can sit on any page colour.

Example:
    from ascii_studio.render.image import ImageRenderer

    ImageRenderer().save(doc, "art.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Union

from ascii_studio.core.palette import palette_rgb
from ascii_studio.render.composite import ExportRegion, flatten_region

try:
    from PIL import Image, ImageDraw, ImageFont
    HAS_PIL = True
except ImportError:
    HAS_PIL = False

if TYPE_CHECKING:
    from ascii_studio.document.document import Document


def _check_pil() -> None:
    """Raise ImportError if PIL is not available."""
    if not HAS_PIL:
        raise ImportError(
            "Pillow is required for PNG export. "
            "Install with: pip install pillow"
        )


class ImageRenderer:
    """Rasterize the flattened document with Pillow."""

    def __init__(
        self,
        cell_width: int = 10,
        cell_height: int = 16,
        include_backgrounds: bool = True,
    ):
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.include_backgrounds = include_backgrounds

    def render(self, doc: "Document", region: ExportRegion | None = None) -> "Image.Image":
        """Render the composite (or one region of it) to an RGBA image."""
        _check_pil()
        rows, transparency = flatten_region(doc.layers, region)
        height = len(rows)
        width = len(rows[0]) if rows else 0

        img = Image.new(
            "RGBA",
            (max(1, width * self.cell_width), max(1, height * self.cell_height)),
            (0, 0, 0, 0),
        )
        draw = ImageDraw.Draw(img)
        font = ImageFont.load_default()
        text_dy = round(self.cell_height * 0.12)

        for y, row in enumerate(rows):
            for x, cell in enumerate(row):
                px = x * self.cell_width
                py = y * self.cell_height
                if self.include_backgrounds and not transparency[y][x]:
                    draw.rectangle(
                        (px, py, px + self.cell_width - 1, py + self.cell_height - 1),
                        fill=palette_rgb(cell.bg) + (255,),
                    )
                if cell.char != ' ':
                    draw.text((px, py + text_dy), cell.char, fill=palette_rgb(cell.fg) + (255,), font=font)

        return img

    def save(
        self,
        doc: "Document",
        path: Union[str, Path],
        region: ExportRegion | None = None,
    ) -> Path:
        """Render and write a PNG file."""
        path = Path(path)
        self.render(doc, region).save(path, format="PNG")
        return path
