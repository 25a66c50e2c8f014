"""Change notification for state objects bound to a UI.

WHY: The parameter popup redraws whenever steering or session state
changes, but the state classes must not know anything about widgets.
A single "state changed" event after each public operation is enough
for a binding adapter to refresh what it shows.

HOW: ChangeNotifier keeps a list of callbacks. subscribe() returns an
unsubscribe function. _notify() calls every subscriber with the source
object and the name of the operation that ran.

RULES:
- Exactly one notification per public mutating operation
- A subscriber that raises is logged and skipped; the others still run
- Subscribers may unsubscribe during a notification
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Any, str], None]


class ChangeNotifier:
    """Mixin that lets observers subscribe to "state changed" events."""

    def __init__(self) -> None:
        self._subscribers: list[ChangeCallback] = []

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a callback called as ``callback(source, operation)``.

        Returns:
            A function that removes the subscription. Calling it twice
            is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, operation: str) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self, operation)
            except Exception:
                logger.exception(
                    "Change subscriber %r failed after %s", callback, operation
                )
