"""Load document snapshots."""

from pathlib import Path

from ascii_studio.document.document import Document
from ascii_studio.io.json_format import DocumentParser


def load(path: str | Path) -> Document:
    """
    Load a document snapshot (.json) from disk.

    Raises DocumentFormatError if the file is not a well-formed snapshot.
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        text = f.read()
    return DocumentParser().parse(text)


def loads(text: str) -> Document:
    """Load a document snapshot from a JSON string."""
    return DocumentParser().parse(text)
