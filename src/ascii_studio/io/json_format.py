"""Document snapshot JSON format.

The format is the document's own ``to_data`` dict, pretty-printed:

{
  "width": 80,
  "height": 25,
  "layers": [
    {"id": "layer_1", "name": "Background", "visible": true, "locked": false,
     "groupId": "group_1",
     "cells": [[null, {"char": "X", "attributes": {"foreground": 15, "background": 0}}]]}
  ],
  "activeLayerId": "layer_1",
  "groups": [
    {"id": "group_1", "name": "Group 1", "visible": true, "locked": false,
     "collapsed": false, "order": 0, "kind": "layer"}
  ]
}

``null`` cells are absent. A region export slices every layer's cells to the
region and adds a ``region`` key with the inclusive bounds.
"""

from __future__ import annotations

import json
from typing import Any

from ascii_studio.document.document import Document
from ascii_studio.render.composite import ExportRegion

_REQUIRED_DOC_KEYS = ("width", "height", "layers")
_REQUIRED_LAYER_KEYS = ("id", "cells")


class DocumentFormatError(ValueError):
    """Raised when snapshot data is not a well-formed document."""


class DocumentSerializer:
    """Serialize a Document (or one region of it) to JSON."""

    def __init__(self, indent: int | None = 2):
        """
        Args:
            indent: JSON indentation (None for compact)
        """
        self.indent = indent

    def render(self, doc: Document, region: ExportRegion | None = None) -> str:
        return json.dumps(self.to_dict(doc, region), indent=self.indent, ensure_ascii=False)

    def to_dict(self, doc: Document, region: ExportRegion | None = None) -> dict[str, Any]:
        data = doc.to_data()
        if region is None:
            return data

        region = region.clamp(doc.width, doc.height)
        data["width"] = region.width
        data["height"] = region.height
        data["region"] = {"x1": region.x1, "y1": region.y1, "x2": region.x2, "y2": region.y2}
        for layer in data["layers"]:
            layer["cells"] = region.slice(layer["cells"])
        return data


class DocumentParser:
    """Parse snapshot JSON back into a Document."""

    def parse(self, text: str) -> Document:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentFormatError(f"Invalid JSON: {e}") from e
        return self.from_dict(data)

    def from_dict(self, data: Any) -> Document:
        try:
            self._validate(data)
            return Document.from_data(data)
        except DocumentFormatError:
            raise
        except (KeyError, TypeError, ValueError, IndexError) as e:
            raise DocumentFormatError(f"Malformed document data: {e}") from e

    def _validate(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise DocumentFormatError("Document must be a JSON object")
        missing = [key for key in _REQUIRED_DOC_KEYS if key not in data]
        if missing:
            raise DocumentFormatError(f"Document is missing {', '.join(missing)}")
        width, height = data["width"], data["height"]
        if not isinstance(width, int) or not isinstance(height, int) or width < 1 or height < 1:
            raise DocumentFormatError(f"Invalid document size {width!r}x{height!r}")
        if not isinstance(data["layers"], list) or not data["layers"]:
            raise DocumentFormatError("Document needs at least one layer")

        for i, layer in enumerate(data["layers"]):
            if not isinstance(layer, dict):
                raise DocumentFormatError(f"Layer {i} must be an object")
            missing = [key for key in _REQUIRED_LAYER_KEYS if key not in layer]
            if missing:
                raise DocumentFormatError(f"Layer {i} is missing {', '.join(missing)}")
            cells = layer["cells"]
            if len(cells) != height or any(len(row) != width for row in cells):
                raise DocumentFormatError(
                    f"Layer {layer['id']!r} cells do not match document size {width}x{height}"
                )
