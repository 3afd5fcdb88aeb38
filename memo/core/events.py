"""
FILE: memo/core/events.py
PURPOSE: Named fire-and-forget notifications between screens
EXPORTS:
  - EventBus (class)
DEPENDENCIES:
  - collections (stdlib)
  - typing (stdlib)
NOTES:
  - Events carry no payload, only a name (see constants.TASK_UPDATED,
    constants.TASK_DELETED)
  - post() delivers to the observers registered when it is called,
    in registration order
  - Handed to screens at construction instead of a global center
"""

import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List

logger = logging.getLogger(__name__)

Observer = Callable[[], None]


class EventBus:
    """Register/post by name."""

    def __init__(self):
        self._observers: DefaultDict[str, List[Observer]] = defaultdict(list)

    def subscribe(self, name: str, observer: Observer) -> None:
        self._observers[name].append(observer)

    def unsubscribe(self, name: str, observer: Observer) -> None:
        """Remove one registration of observer (no-op if not registered)."""
        observers = self._observers.get(name)
        if observers and observer in observers:
            observers.remove(observer)

    def post(self, name: str) -> int:
        """
        Notify observers of name.

        Returns:
            Number of observers notified

        Note:
            Observer exceptions propagate to the caller.
        """
        observers = list(self._observers.get(name, ()))
        logger.debug("Posting %s to %d observer(s)", name, len(observers))
        for observer in observers:
            observer()
        return len(observers)

    def observer_count(self, name: str) -> int:
        return len(self._observers.get(name, ()))
