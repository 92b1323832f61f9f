"""
File Registry Entities

Domain entities for in-memory stored files.
"""

import io
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .value_objects import ExpiryMinutes


@dataclass(frozen=True)
class RegistryEntry:
    """
    Entity representing one uploaded file with expiration tracking.

    The content is fully buffered before the entry is built and never
    mutated afterwards; readers get their own stream via ``open()``.
    """
    key: str
    requested_expiry_minutes: str
    expires_at: datetime
    content: bytes = field(repr=False)
    content_type: str
    filename: str
    created_at: datetime

    @classmethod
    def create(cls, key: str, content: bytes, content_type: str, filename: str,
               expiry: ExpiryMinutes, now: Optional[datetime] = None) -> 'RegistryEntry':
        """
        Factory method to create a new registry entry.

        Args:
            key: Caller supplied key, may be empty
            content: Uploaded bytes
            content_type: Declared content type of the file part
            filename: Declared file name of the file part
            expiry: Resolved expiry offset
            now: Upload time, defaults to the current UTC time

        Returns:
            New RegistryEntry instance
        """
        now = now or datetime.now(timezone.utc)
        return cls(
            key=key,
            requested_expiry_minutes=expiry.raw,
            expires_at=expiry.expires_at(now),
            content=bytes(content),
            content_type=content_type or "",
            filename=filename or "",
            created_at=now,
        )

    @property
    def size(self) -> int:
        """Length of the stored content in bytes."""
        return len(self.content)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """
        Check if the entry has expired.

        The boundary is inclusive: an entry expiring exactly at ``now`` is dead.
        """
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now

    def open(self) -> io.BytesIO:
        """Return a fresh reader positioned at the start of the content."""
        return io.BytesIO(self.content)

    def download_name(self) -> str:
        """File name used for Content-Disposition."""
        return self.filename or self.key or "download"

    def describe(self) -> str:
        """One-line description used in upload responses and logs."""
        return (
            f"key:{self.key}, expiryTimeMinutes:{self.requested_expiry_minutes}, "
            f"expiredAt:{self.expires_at.isoformat()}, contentType:{self.content_type}, "
            f"fileName:{self.filename}, size:{self.size}"
        )

    def to_dict(self) -> dict:
        """Convert metadata to dictionary for serialization (content excluded)."""
        return {
            "key": self.key,
            "expiryTimeMinutes": self.requested_expiry_minutes,
            "expiresAt": self.expires_at.isoformat(),
            "createdAt": self.created_at.isoformat(),
            "contentType": self.content_type,
            "fileName": self.filename,
            "size": self.size,
        }
