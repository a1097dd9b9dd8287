"""I/O for loading and saving documents."""

from ascii_studio.io.json_format import DocumentFormatError, DocumentParser, DocumentSerializer
from ascii_studio.io.reader import load, loads
from ascii_studio.io.text_import import import_plain_text
from ascii_studio.io.writer import export, save

__all__ = [
    "DocumentFormatError",
    "DocumentParser",
    "DocumentSerializer",
    "export",
    "import_plain_text",
    "load",
    "loads",
    "save",
]
