"""Instance-scoped change notification."""

from __future__ import annotations

from typing import Any, Callable

Callback = Callable[..., Any]


class Signal:
    """
    An ordered list of observers owned by one object.

    Each document, layer manager or history carries its own signals, so
    several documents can live in one process without seeing each
    other's notifications.

    Example:
        >>> sig = Signal("changed")
        >>> seen = []
        >>> disconnect = sig.connect(lambda: seen.append(1))
        >>> sig.emit()
        >>> disconnect()
        >>> sig.emit()
        >>> seen
        [1]
    """

    def __init__(self, name: str = "signal"):
        self.name = name
        self._observers: list[Callback] = []

    def connect(self, callback: Callback) -> Callable[[], None]:
        """Register an observer; returns a function that unregisters it."""
        if callback not in self._observers:
            self._observers.append(callback)
        return lambda: self.disconnect(callback)

    def disconnect(self, callback: Callback) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def emit(self, *args: Any) -> None:
        """Call every observer in registration order."""
        for callback in list(self._observers):
            callback(*args)

    def __len__(self) -> int:
        return len(self._observers)

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, observers={len(self._observers)})"
