"""Save documents and exports."""

from pathlib import Path
from typing import TYPE_CHECKING

from ascii_studio.io.json_format import DocumentSerializer
from ascii_studio.render.composite import ExportRegion

if TYPE_CHECKING:
    from ascii_studio.document.document import Document

EXPORT_FORMATS = ("json", "txt", "ans", "png")


def save(doc: "Document", path: str | Path, region: ExportRegion | None = None) -> Path:
    """Save a document snapshot as JSON."""
    path = Path(path)
    content = DocumentSerializer().render(doc, region)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
        f.write('\n')
    return path


def export(
    doc: "Document",
    path: str | Path,
    fmt: str | None = None,
    region: ExportRegion | None = None,
) -> Path:
    """
    Export a document in one of EXPORT_FORMATS.

    The format defaults to the file extension. Text and ANSI exports are
    UTF-8; ANSI keeps its SGR colour codes.
    """
    path = Path(path)
    fmt = (fmt or path.suffix.lstrip('.') or "json").lower()

    if fmt == "json":
        return save(doc, path, region)
    if fmt == "png":
        from ascii_studio.render.image import ImageRenderer
        return ImageRenderer().save(doc, path, region)
    if fmt == "txt":
        from ascii_studio.render.text import TextRenderer
        content = TextRenderer().render(doc, region)
    elif fmt == "ans":
        from ascii_studio.render.terminal import TerminalRenderer
        content = TerminalRenderer().render(doc, region)
    else:
        raise ValueError(f"Unknown export format {fmt!r}; expected one of {', '.join(EXPORT_FORMATS)}")

    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
        f.write('\n')
    return path
