"""Multiple open documents, each with its own history."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ascii_studio.config import EditorConfig
from ascii_studio.core.events import Signal
from ascii_studio.document.document import Document
from ascii_studio.history.undo import UndoRedoManager

logger = logging.getLogger(__name__)


@dataclass
class EditorSession:
    """One open document and the undo history that belongs to it."""
    id: str
    name: str
    document: Document
    history: UndoRedoManager


class SessionManager:
    """
    Ordered list of sessions with one active at a time.

    Undo never crosses sessions: every session carries its own
    UndoRedoManager.

    Attributes:
        session_changed: Signal emitted with the newly active session
        sessions_changed: Signal emitted when sessions are added, removed or renamed
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self.config = config or EditorConfig()
        self._sessions: list[EditorSession] = []
        self._active_index = 0
        self._next_id = 1
        self._untitled_counter = 0
        self.session_changed = Signal("session_changed")
        self.sessions_changed = Signal("sessions_changed")

    @property
    def sessions(self) -> tuple[EditorSession, ...]:
        return tuple(self._sessions)

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_session(self) -> EditorSession | None:
        if not self._sessions:
            return None
        return self._sessions[self._active_index]

    def get_session(self, session_id: str) -> EditorSession | None:
        for session in self._sessions:
            if session.id == session_id:
                return session
        return None

    def create_session(
        self,
        width: int | None = None,
        height: int | None = None,
        document: Document | None = None,
        name: str | None = None,
    ) -> EditorSession:
        """Open a new session and make it active.

        Without a ``document`` a blank one of the given (or configured) size
        is created.
        """
        self._untitled_counter += 1
        if document is None:
            document = Document(
                width if width is not None else self.config.width,
                height if height is not None else self.config.height,
            )
        session = EditorSession(
            id=f"session-{self._next_id}",
            name=name if name is not None else f"Untitled {self._untitled_counter}",
            document=document,
            history=UndoRedoManager(self.config.history_depth),
        )
        self._next_id += 1
        self._sessions.append(session)
        self._active_index = len(self._sessions) - 1
        self.sessions_changed.emit()
        self.session_changed.emit(session)
        return session

    def close_session(self, session_id: str) -> EditorSession | None:
        """Close a session; returns the session active afterwards.

        The last remaining session cannot be closed.
        """
        if len(self._sessions) <= 1:
            logger.debug("close_session: refusing to close the last session")
            return None
        idx = next((i for i, s in enumerate(self._sessions) if s.id == session_id), -1)
        if idx < 0:
            return None

        was_active = idx == self._active_index
        del self._sessions[idx]
        if self._active_index >= len(self._sessions):
            self._active_index = len(self._sessions) - 1
        elif self._active_index > idx:
            self._active_index -= 1

        active = self._sessions[self._active_index]
        self.sessions_changed.emit()
        if was_active:
            self.session_changed.emit(active)
        return active

    def switch_session(self, session_id: str) -> EditorSession | None:
        """Activate a session; None if unknown or already active."""
        idx = next((i for i, s in enumerate(self._sessions) if s.id == session_id), -1)
        if idx < 0 or idx == self._active_index:
            return None
        self._active_index = idx
        session = self._sessions[idx]
        self.session_changed.emit(session)
        return session

    def rename_session(self, session_id: str, name: str) -> bool:
        session = self.get_session(session_id)
        if session is None:
            return False
        session.name = name
        self.sessions_changed.emit()
        return True
