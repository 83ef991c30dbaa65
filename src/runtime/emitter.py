"""
Ordered, synchronous event emitter.

Every lifecycle notification in the project (scene loaded, session ready,
provider started/ended, target found/updated/lost) goes through an Emitter.
Listeners are delivered in insertion order on the caller's stack; there is no
queueing and no implicit scheduling.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Tuple

Listener = Callable[..., Any]


class Emitter:
    """
    Ordered subscriber list with synchronous fan-out.

    Example:
        on_found = Emitter("image-found")
        on_found.add(lambda event: print(event.target_id))
        on_found.notify(event)
    """

    def __init__(self, name: str = "emitter"):
        self.name = name
        self._listeners: List[Tuple[Listener, bool]] = []

    def add(self, listener: Listener, once: bool = False) -> None:
        """Subscribe a listener. Adding an already subscribed listener is a no-op."""
        if self.has(listener):
            return
        self._listeners.append((listener, once))

    def once(self, listener: Listener) -> None:
        """Subscribe a listener for a single delivery."""
        self.add(listener, once=True)

    def remove(self, listener: Listener) -> None:
        self._listeners = [(l, o) for (l, o) in self._listeners if l != listener]

    def has(self, listener: Listener) -> bool:
        return any(l == listener for (l, _) in self._listeners)

    def clear(self) -> None:
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)

    def notify(self, *args: Any) -> None:
        """
        Deliver to every listener subscribed at call time, in insertion order.

        A failing listener is logged and skipped; the remaining listeners
        still receive the notification.
        """
        snapshot = list(self._listeners)
        for listener, once in snapshot:
            if once:
                self.remove(listener)
            try:
                listener(*args)
            except Exception as e:
                logging.warning(f"Listener error on {self.name}: {e}")
