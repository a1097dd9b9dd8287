"""Shared fixtures for document, history and tool tests."""

import pytest

from ascii_studio.config import EditorConfig
from ascii_studio.core.cell import Cell
from ascii_studio.document.document import Document
from ascii_studio.editor import Editor
from ascii_studio.history.session import EditorSession
from ascii_studio.history.undo import UndoRedoManager


@pytest.fixture
def doc() -> Document:
    """An 80x25 document with its single Background layer."""
    return Document(80, 25)


@pytest.fixture
def small_doc() -> Document:
    return Document(10, 5)


@pytest.fixture
def session(doc: Document) -> EditorSession:
    return EditorSession("session-test", "Test", doc, UndoRedoManager())


@pytest.fixture
def small_session(small_doc: Document) -> EditorSession:
    return EditorSession("session-small", "Small", small_doc, UndoRedoManager())


@pytest.fixture
def editor(monkeypatch: pytest.MonkeyPatch) -> Editor:
    for name in ("WIDTH", "HEIGHT", "HISTORY_DEPTH"):
        monkeypatch.delenv(f"ASCII_STUDIO_{name}", raising=False)
    return Editor(EditorConfig(width=20, height=10))


def cell(char: str, fg: int = 15, bg: int = 0) -> Cell:
    return Cell.of(char, fg, bg)
