"""LayerGroup - cascading visibility/lock wrapper over a set of layers."""

from __future__ import annotations

from enum import Enum
from typing import Any


class GroupKind(Enum):
    """Group flavour. Both kinds behave identically in the document model."""
    LAYER = "layer"
    ANIMATION = "animation"


class LayerGroup:
    """
    A named folder of layers.

    Membership is recorded on the layers (``Layer.group_id``), not here.
    ``order`` positions the group among ungrouped layers only while it has
    no members; the LayerManager keeps it synced to the highest member index.
    """

    def __init__(
        self,
        name: str = "Group",
        group_id: str = "group",
        order: int = 0,
        kind: GroupKind = GroupKind.LAYER,
    ) -> None:
        self.id = group_id
        self.name = name
        self.visible = True
        self.locked = False
        self.collapsed = False
        self.order = order
        self.kind = kind

    def to_data(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "visible": self.visible,
            "locked": self.locked,
            "collapsed": self.collapsed,
            "order": self.order,
            "kind": self.kind.value,
        }

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> LayerGroup:
        group = cls(
            data.get("name", "Group"),
            data["id"],
            order=data.get("order", 0),
            kind=GroupKind(data.get("kind", GroupKind.LAYER.value)),
        )
        group.visible = data.get("visible", True)
        group.locked = data.get("locked", False)
        group.collapsed = data.get("collapsed", False)
        return group

    def __repr__(self) -> str:
        return f"LayerGroup(id={self.id!r}, name={self.name!r}, order={self.order})"
