"""Synchronous in-process change-notification bus."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

from eventhub.core.logging import get_logger

logger = get_logger(__name__)


class EventBus:
    """Publish/subscribe bus for collection changes.

    Subscribers run synchronously in registration order, so by the time
    ``publish`` returns every observer (persistence included) has seen the change.
    """

    def __init__(self) -> None:
        self._subscribers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def subscribe(self, message_type: type, handler: Callable[[Any], None]) -> None:
        self._subscribers[message_type].append(handler)

    def unsubscribe(self, message_type: type, handler: Callable[[Any], None]) -> None:
        handlers = self._subscribers.get(message_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, message: Any) -> None:
        handlers = self._subscribers.get(type(message), [])
        logger.debug(
            "bus_publish", message=type(message).__name__, handlers=len(handlers)
        )
        for handler in handlers:
            handler(message)
