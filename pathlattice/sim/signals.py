"""Synchronous change notifications."""

from __future__ import annotations

from typing import Any, Callable

Listener = Callable[..., Any]


class Signal:
    """A named list of listeners invoked in registration order on emit."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Listener] = []

    def connect(self, fn: Listener) -> Listener:
        self._listeners.append(fn)
        return fn

    def disconnect(self, fn: Listener) -> None:
        if fn in self._listeners:
            self._listeners.remove(fn)

    def emit(self, *args: Any) -> None:
        for listener in list(self._listeners):
            listener(*args)
