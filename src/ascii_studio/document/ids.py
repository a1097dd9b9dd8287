"""Per-document identifier allocation."""

import re

_SUFFIX = re.compile(r'^(layer|group)_(\d+)$')


class IdGenerator:
    """
    Hands out ``layer_N`` / ``group_N`` ids for one document.

    Numbers only ever increase, so an id is never reused within the
    document, even after the layer or group it named is removed.
    """

    def __init__(self) -> None:
        self._next = {"layer": 1, "group": 1}

    def next_layer_id(self) -> str:
        return self._allocate("layer")

    def next_group_id(self) -> str:
        return self._allocate("group")

    def observe(self, identifier: str) -> None:
        """Advance past an id that came from a loaded snapshot."""
        match = _SUFFIX.match(identifier)
        if match:
            kind, number = match.group(1), int(match.group(2))
            self._next[kind] = max(self._next[kind], number + 1)

    def _allocate(self, kind: str) -> str:
        number = self._next[kind]
        self._next[kind] = number + 1
        return f"{kind}_{number}"
