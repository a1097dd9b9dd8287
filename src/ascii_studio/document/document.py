"""Document - a sized layer stack with its own id allocator."""

from __future__ import annotations

import logging
from typing import Any

from ascii_studio.core.cell import LayerCell
from ascii_studio.core.events import Signal
from ascii_studio.document.ids import IdGenerator
from ascii_studio.document.manager import LayerManager

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 25


class Document:
    """
    An editable piece of art: width x height cells across ordered layers.

    Every layer in ``layers`` has the document's dimensions; ``resize``
    keeps them in lockstep.

    Attributes:
        layers: The LayerManager owning layers, groups and the active layer
        ids: Allocator for layer and group ids, private to this document
        changed: Signal emitted after cell content changes
        resized: Signal emitted with (width, height) after a resize
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        ids: IdGenerator | None = None,
    ) -> None:
        self._width = max(1, width)
        self._height = max(1, height)
        self.ids = ids or IdGenerator()
        self.layers = LayerManager(self._width, self._height, self.ids)
        self.layers.init()
        self.changed = Signal("changed")
        self.resized = Signal("resized")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get_cell(self, layer_id: str, x: int, y: int) -> LayerCell:
        layer = self.layers.get_layer(layer_id)
        return layer.get_cell(x, y) if layer else None

    def set_cell(self, layer_id: str, x: int, y: int, cell: LayerCell) -> bool:
        """Write one cell as a fresh edit; refused on an effectively locked layer."""
        layer = self.layers.get_layer(layer_id)
        if layer is None or not self.in_bounds(x, y):
            return False
        if self.layers.is_layer_effectively_locked(layer):
            logger.debug("set_cell: %s is locked", layer_id)
            return False
        layer.set_cell(x, y, cell)
        self.changed.emit()
        return True

    def get_active_cell(self, x: int, y: int) -> LayerCell:
        return self.get_cell(self.layers.active_layer_id, x, y)

    def set_cell_on_active(self, x: int, y: int, cell: LayerCell) -> bool:
        return self.set_cell(self.layers.active_layer_id, x, y, cell)

    def resize(self, width: int, height: int) -> None:
        width, height = max(1, width), max(1, height)
        if (width, height) == (self._width, self._height):
            return
        self._width = width
        self._height = height
        self.layers.resize(width, height)
        self.resized.emit(width, height)
        self.changed.emit()

    def notify_changed(self) -> None:
        self.changed.emit()

    # -------------------------------------------------------------------------
    # Snapshot format
    # -------------------------------------------------------------------------

    def to_data(self) -> dict[str, Any]:
        state = self.layers.get_state_snapshot()
        return {
            "width": self._width,
            "height": self._height,
            "layers": state.layers,
            "activeLayerId": state.active_layer_id,
            "groups": state.groups,
        }

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> Document:
        """Rebuild a document from ``to_data`` output.

        Assumes a well-formed snapshot; validation belongs to the loader.
        """
        doc = cls(data["width"], data["height"])
        doc.layers.load_layers(
            data["layers"],
            data.get("activeLayerId"),
            data.get("groups", []),
        )
        return doc

    def __repr__(self) -> str:
        return f"Document({self._width}x{self._height}, layers={len(self.layers.layers)})"
