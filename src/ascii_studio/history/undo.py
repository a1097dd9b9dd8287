"""Bounded undo/redo stacks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ascii_studio.core.events import Signal
from ascii_studio.history.command import Command

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 10


@dataclass
class HistoryStacks:
    """The undo and redo lists of one session."""
    undo_stack: list[Command] = field(default_factory=list)
    redo_stack: list[Command] = field(default_factory=list)


class UndoRedoManager:
    """
    Undo/redo stack with a depth cap.

    ``execute`` only records a command whose work has already been done.
    ``perform`` runs the command first and then records it. Recording a
    new command discards the redo stack; beyond ``max_history`` entries the
    oldest one is dropped.
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY) -> None:
        self.max_history = max(1, max_history)
        self._stacks = HistoryStacks()
        self.stack_updated = Signal("stack_updated")

    def __repr__(self) -> str:
        return (
            f"<UndoRedoManager undo_len={len(self._stacks.undo_stack)} "
            f"redo_len={len(self._stacks.redo_stack)}>"
        )

    def execute(self, command: Command) -> None:
        """Register an already-applied command."""
        self._stacks.undo_stack.append(command)
        self._stacks.redo_stack = []
        overflow = len(self._stacks.undo_stack) - self.max_history
        if overflow > 0:
            dropped = self._stacks.undo_stack[:overflow]
            del self._stacks.undo_stack[:overflow]
            logger.debug("Dropped oldest history entries: %r", dropped)
        self.stack_updated.emit()

    def perform(self, command: Command) -> None:
        """Apply a new command, then register it."""
        command.execute()
        self.execute(command)

    def undo(self) -> Command | None:
        if not self._stacks.undo_stack:
            return None
        command = self._stacks.undo_stack.pop()
        command.undo()
        self._stacks.redo_stack.append(command)
        self.stack_updated.emit()
        return command

    def redo(self) -> Command | None:
        if not self._stacks.redo_stack:
            return None
        command = self._stacks.redo_stack.pop()
        command.execute()
        self._stacks.undo_stack.append(command)
        self.stack_updated.emit()
        return command

    def can_undo(self) -> bool:
        return bool(self._stacks.undo_stack)

    def can_redo(self) -> bool:
        return bool(self._stacks.redo_stack)

    def clear(self) -> None:
        self.stacks = HistoryStacks()

    @property
    def undo_stack(self) -> tuple[Command, ...]:
        return tuple(self._stacks.undo_stack)

    @property
    def redo_stack(self) -> tuple[Command, ...]:
        return tuple(self._stacks.redo_stack)

    @property
    def stacks(self) -> HistoryStacks:
        """The live undo and redo lists; assigning swaps in another history."""
        return self._stacks

    @stacks.setter
    def stacks(self, stacks: HistoryStacks) -> None:
        self._stacks = stacks
        self.stack_updated.emit()
