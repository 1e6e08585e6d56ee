import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = ['TRANSACTION_ADDED', 'TRANSACTION_UPDATED', 'TRANSACTION_DELETED', 'Event', 'EventBus']

logger = logging.getLogger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Event], None]]] = {}

    def subscribe(self, name: str, handler: Callable[[Event], None]) -> None:
        if name not in self._subscribers:
            self._subscribers[name] = []
        self._subscribers[name].append(handler)

    def publish(self, name: str, payload: dict) -> int:
        """Deliver to every handler of `name`; returns how many ran."""
        handlers = list(self._subscribers.get(name, ()))
        if not handlers:
            return 0

        event = Event(
            name=name,
            ts=datetime.now().isoformat(),
            payload=payload
        )
        logger.debug("publishing %s to %d handler(s)", name, len(handlers))
        for handler in handlers:
            handler(event)
        return len(handlers)

    def unsubscribe(self, name: str, handler: Callable[[Event], None]) -> None:
        if name in self._subscribers:
            if handler in self._subscribers[name]:
                self._subscribers[name].remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_UPDATED = "TRANSACTION_UPDATED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
