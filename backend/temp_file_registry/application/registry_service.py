"""
Registry Service

Application service implementing the upload / download / delete-on-read
protocol on top of the FileRegistry.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from temp_file_registry.application.event_publisher import EventPublisher
from temp_file_registry.domain.errors import EntryNotFoundError
from temp_file_registry.domain.events import (
    EntryDeletedEvent,
    EntryDownloadedEvent,
    EntryStoredEvent,
)
from temp_file_registry.domain.file_registry import (
    ExpiryMinutes,
    FileRegistry,
    RegistryEntry,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Default clock: current timezone-aware UTC time."""
    return datetime.now(timezone.utc)


class RegistryService:
    """
    Orchestrates registry operations for the HTTP layer.

    Resolves expiry for uploads, enforces expiry at read time and
    publishes domain events for every state change.
    """

    def __init__(
        self,
        registry: FileRegistry,
        default_expiration_minutes: int,
        event_publisher: Optional[EventPublisher] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize RegistryService.

        Args:
            registry: Shared registry instance
            default_expiration_minutes: Expiry applied when the client sends none
            event_publisher: Optional publisher for domain events
            clock: Callable returning the current UTC time
        """
        self.registry = registry
        self.default_expiration_minutes = default_expiration_minutes
        self.event_publisher = event_publisher
        self.clock = clock

    def upload(
        self,
        key: str,
        content: bytes,
        content_type: str,
        filename: str,
        expiry_time_minutes: Optional[str] = None,
    ) -> RegistryEntry:
        """
        Store uploaded content under ``key``, replacing any previous entry.

        Args:
            key: Caller supplied key, may be empty
            content: Fully read file content
            content_type: Declared content type of the file part
            filename: Declared file name of the file part
            expiry_time_minutes: Raw expiry value from the form, may be None

        Returns:
            The stored RegistryEntry
        """
        now = self.clock()
        expiry = ExpiryMinutes.resolve(expiry_time_minutes, self.default_expiration_minutes)
        entry = RegistryEntry.create(
            key=key,
            content=content,
            content_type=content_type,
            filename=filename,
            expiry=expiry,
            now=now,
        )
        previous = self.registry.put(key, entry)

        self._publish(
            EntryStoredEvent(
                aggregate_id=key,
                occurred_at=now,
                expires_at=entry.expires_at,
                size=entry.size,
                replaced=previous is not None,
            )
        )
        return entry

    def fetch(self, key: str) -> RegistryEntry:
        """
        Retrieve the live entry stored under ``key``.

        Expired entries are reported as absent but left for the reaper.

        Raises:
            EntryNotFoundError: If the key is absent or its entry expired
        """
        entry = self.registry.get(key)
        if entry is None:
            raise EntryNotFoundError(key)
        if entry.is_expired(self.clock()):
            raise EntryNotFoundError(key, expired=True)
        return entry

    def record_download(self, entry: RegistryEntry, delete_requested: bool) -> None:
        """Publish a download event for a served entry."""
        self._publish(
            EntryDownloadedEvent(
                aggregate_id=entry.key,
                occurred_at=self.clock(),
                size=entry.size,
                delete_requested=delete_requested,
            )
        )

    def discard(self, key: str, entry: RegistryEntry) -> bool:
        """
        Delete-on-read: remove ``entry`` if ``key`` still maps to it.

        A newer upload committed under the same key in the meantime is kept.

        Returns:
            True if the entry was removed
        """
        removed = self.registry.delete(key, expected=entry)
        if removed:
            self._publish(EntryDeletedEvent(aggregate_id=key, occurred_at=self.clock()))
        else:
            logger.debug(f"Delete-on-read skipped for key {key!r}: entry already gone or replaced")
        return removed

    def _publish(self, event) -> None:
        if self.event_publisher is not None:
            self.event_publisher.publish(event)
