"""Document model: layers, groups and the layer manager."""

from ascii_studio.document.document import Document
from ascii_studio.document.group import GroupKind, LayerGroup
from ascii_studio.document.ids import IdGenerator
from ascii_studio.document.layer import Layer
from ascii_studio.document.manager import DisplayEntry, LayerManager, LayerManagerState

__all__ = [
    "Document",
    "DisplayEntry",
    "GroupKind",
    "IdGenerator",
    "Layer",
    "LayerGroup",
    "LayerManager",
    "LayerManagerState",
]
