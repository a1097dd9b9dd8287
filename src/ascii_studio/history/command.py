"""Reversible operations over a document.

A command describes a change that has already been authorized. Replaying it
(``execute`` after an undo, or ``undo`` itself) ignores layer locks: locks
gate new edits, never the replay of committed ones.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from ascii_studio.core.cell import LayerCell

if TYPE_CHECKING:
    from ascii_studio.document.document import Document
    from ascii_studio.document.manager import LayerManager, LayerManagerState
    from ascii_studio.history.undo import UndoRedoManager

logger = logging.getLogger(__name__)


class Command(ABC):
    """Base class for undoable actions."""

    description: str = "Command"

    @abstractmethod
    def execute(self) -> None:
        """Apply (or re-apply) the change."""
        pass

    @abstractmethod
    def undo(self) -> None:
        """Revert the change."""
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.description!r}>"


@dataclass
class CellChange:
    """One cell edit: what was there and what replaces it."""
    x: int
    y: int
    old_cell: LayerCell
    new_cell: LayerCell


class CellChangeCommand(Command):
    """A batch of cell edits on one layer.

    The layer is looked up by id on every execute/undo, so the command keeps
    working after structural undo rebuilds the layer objects. If the layer
    no longer exists the command does nothing.
    """

    def __init__(
        self,
        document: Document,
        layer_id: str,
        changes: list[CellChange],
        description: str | None = None,
    ) -> None:
        self.document = document
        self.layer_id = layer_id
        self.changes = changes
        self.description = description if description is not None else f"Draw {len(changes)} cell(s)"

    def execute(self) -> None:
        layer = self.document.layers.get_layer(self.layer_id)
        if layer is None:
            logger.debug("%r: layer %s is gone", self, self.layer_id)
            return
        for change in self.changes:
            layer.force_set_cell(change.x, change.y, change.new_cell)
        self.document.notify_changed()

    def undo(self) -> None:
        layer = self.document.layers.get_layer(self.layer_id)
        if layer is None:
            logger.debug("%r: layer %s is gone", self, self.layer_id)
            return
        for change in reversed(self.changes):
            layer.force_set_cell(change.x, change.y, change.old_cell)
        self.document.notify_changed()


class LayerStructureCommand(Command):
    """Whole-stack before/after snapshots for structural layer edits."""

    def __init__(
        self,
        layer_manager: LayerManager,
        before: LayerManagerState,
        after: LayerManagerState,
        description: str = "Layer change",
    ) -> None:
        self.layer_manager = layer_manager
        self.before = before
        self.after = after
        self.description = description

    def execute(self) -> None:
        self.layer_manager.restore_state(self.after)

    def undo(self) -> None:
        self.layer_manager.restore_state(self.before)


def run_structural(
    history: UndoRedoManager,
    layer_manager: LayerManager,
    description: str,
    mutate: Callable[[], object],
) -> LayerStructureCommand | None:
    """Run ``mutate`` and record it as one undoable structural edit.

    Nothing is recorded when the layer stack came out unchanged.
    """
    before = layer_manager.get_state_snapshot()
    mutate()
    after = layer_manager.get_state_snapshot()
    if before == after:
        logger.debug("run_structural: %r changed nothing", description)
        return None
    command = LayerStructureCommand(layer_manager, before, after, description)
    history.execute(command)
    return command
