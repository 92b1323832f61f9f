"""
Event Publisher

Synchronous in-process dispatch of registry events to subscribed handlers.
"""

import logging
from threading import Lock
from typing import Callable, Dict, List, Type

from temp_file_registry.domain.events import DomainEvent

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], None]


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__name__", repr(handler))


class EventPublisher:
    """
    Dispatches registry events to the handlers subscribed to their type.

    A handler subscribed to a base class also receives every subclass
    event, so subscribing to ``DomainEvent`` observes everything the
    registry publishes. Handlers run on the publishing thread (request
    thread or reaper) in subscription order; their exceptions are logged
    and swallowed.
    """

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[Handler]] = {}
        self._lock = Lock()

    def subscribe(self, event_type: Type[DomainEvent], handler: Handler) -> None:
        """
        Register ``handler`` for ``event_type`` and its subclasses.

        Example:
            publisher.subscribe(EntryExpiredEvent, notify_owner)
        """
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Registered handler {_handler_name(handler)} for {event_type.__name__}")

    def publish(self, event: DomainEvent) -> None:
        """
        Deliver ``event`` to every matching handler.

        Handlers of the most specific type run first, then those of its
        base classes.
        """
        with self._lock:
            handlers = [
                handler
                for event_type in type(event).__mro__
                for handler in self._handlers.get(event_type, ())
            ]

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    f"Handler {_handler_name(handler)} failed on "
                    f"{type(event).__name__} for key {event.aggregate_id!r}: {e}",
                    exc_info=True,
                )
