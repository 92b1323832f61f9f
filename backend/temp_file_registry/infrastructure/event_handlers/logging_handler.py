"""
Logging Event Handler

Infrastructure event handler for logging domain events.
Domain layer remains unaware of logging infrastructure.
"""

import logging

from temp_file_registry.application.event_publisher import EventPublisher
from temp_file_registry.domain.events import (
    DomainEvent,
    EntryDeletedEvent,
    EntryDownloadedEvent,
    EntryExpiredEvent,
    EntryStoredEvent,
)


class LoggingEventHandler:
    """
    Infrastructure event handler for logging domain events.

    Stored, downloaded and deleted entries are logged at DEBUG,
    reaper evictions at INFO.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize with logger instance.

        Args:
            logger: Python logging.Logger instance
        """
        self.logger = logger

    def subscribe_to(self, publisher: EventPublisher) -> None:
        """Subscribe this handler to every event the registry publishes."""
        publisher.subscribe(DomainEvent, self.handle)

    def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event by logging it.

        Args:
            event: Domain event to log
        """
        if isinstance(event, EntryStoredEvent):
            self._handle_stored(event)
        elif isinstance(event, EntryDownloadedEvent):
            self._handle_downloaded(event)
        elif isinstance(event, EntryDeletedEvent):
            self.logger.debug(f"Entry deleted on read: key={event.aggregate_id!r}")
        elif isinstance(event, EntryExpiredEvent):
            self._handle_expired(event)
        else:
            self.logger.debug(
                f"Unhandled event: {event.__class__.__name__} "
                f"(aggregate_id={event.aggregate_id!r})"
            )

    def _handle_stored(self, event: EntryStoredEvent) -> None:
        """Log a committed upload."""
        action = "replaced" if event.replaced else "stored"
        self.logger.debug(
            f"Entry {action}: key={event.aggregate_id!r} size={event.size} "
            f"expires_at={event.expires_at.isoformat()}"
        )

    def _handle_downloaded(self, event: EntryDownloadedEvent) -> None:
        """Log a served download."""
        self.logger.debug(
            f"Entry downloaded: key={event.aggregate_id!r} size={event.size} "
            f"delete={event.delete_requested}"
        )

    def _handle_expired(self, event: EntryExpiredEvent) -> None:
        """Log a reaper eviction."""
        self.logger.info(
            f"[Reaper] File expired: key={event.aggregate_id!r} "
            f"expired_at={event.expires_at.isoformat()}"
        )
