"""
Observable — subscribe/notify for in-process stores.
"""

from __future__ import annotations

import logging

from storefront._types import Listener, Unsubscribe

logger = logging.getLogger(__name__)


class Observable:
    """
    Synchronous change notifications.

    Stores call _notify() after an effective mutation. A failing
    listener is logged and does not stop the others.

    Example:
        unsubscribe = cart.subscribe(lambda: render(cart.lines()))
        ...
        unsubscribe()
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Listener %r failed in %s", listener, type(self).__name__)


__all__ = ("Observable",)
