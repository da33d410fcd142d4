"""Shared state container with atomic whole-value replacement.

State values held here are treated as immutable: every write swaps in a new
value produced by a pure reducer, so readers never observe a partial update.
"""

import threading
from typing import Any, Callable, Generic, TypeVar

from loguru import logger

T = TypeVar("T")

Listener = Callable[[T], None]


class Store(Generic[T]):
    """Thread-safe holder for one immutable state value."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    def get(self) -> T:
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        with self._lock:
            if value is self._value:
                return
            self._value = value
            listeners = list(self._listeners)
        self._notify(listeners, value)

    def update(self, reducer: Callable[..., T], *args: Any) -> T:
        """Apply reducer(current, *args) and store the result atomically.

        Returns:
            The new state value
        """
        with self._lock:
            new_value = reducer(self._value, *args)
            changed = new_value is not self._value
            self._value = new_value
            listeners = list(self._listeners) if changed else []
        if changed:
            self._notify(listeners, new_value)
        return new_value

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with each new value.

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @staticmethod
    def _notify(listeners: list[Listener], value: T) -> None:
        for listener in listeners:
            try:
                listener(value)
            except Exception:
                logger.exception("Store listener failed")
