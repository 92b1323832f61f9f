"""
Domain Events

Immutable records of significant state changes in the registry.
Events decouple side effects (logging) from core business logic.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Attributes:
        aggregate_id: Key of the entry that generated the event
        occurred_at: Timestamp when the event occurred
    """
    aggregate_id: str
    occurred_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of the event
        """
        return {
            "event_type": self.__class__.__name__,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True)
class EntryStoredEvent(DomainEvent):
    """
    Event emitted when an upload is committed to the registry.

    Attributes:
        expires_at: Resolved expiry timestamp
        size: Stored content length in bytes
        replaced: Whether an existing entry under the same key was replaced
    """
    expires_at: datetime
    size: int
    replaced: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        base_dict = super().to_dict()
        base_dict.update({
            "expires_at": self.expires_at.isoformat(),
            "size": self.size,
            "replaced": self.replaced,
        })
        return base_dict


@dataclass(frozen=True)
class EntryDownloadedEvent(DomainEvent):
    """
    Event emitted when an entry is served to a client.

    Attributes:
        size: Served content length in bytes
        delete_requested: Whether the client asked for delete-on-read
    """
    size: int
    delete_requested: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        base_dict = super().to_dict()
        base_dict.update({
            "size": self.size,
            "delete_requested": self.delete_requested,
        })
        return base_dict


@dataclass(frozen=True)
class EntryDeletedEvent(DomainEvent):
    """Event emitted when an entry is removed by delete-on-read."""
    pass


@dataclass(frozen=True)
class EntryExpiredEvent(DomainEvent):
    """
    Event emitted when the reaper evicts an expired entry.

    Attributes:
        expires_at: The former expiry timestamp of the evicted entry
    """
    expires_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        base_dict = super().to_dict()
        base_dict["expires_at"] = self.expires_at.isoformat()
        return base_dict
