"""
File Registry

Thread-safe in-memory key to entry store.
"""

import logging
import threading
from datetime import datetime
from typing import Dict, List, Optional

from .entities import RegistryEntry

logger = logging.getLogger(__name__)


class FileRegistry:
    """
    Single source of truth for all live entries.

    One lock guards the whole map. It is held only for the map operation
    itself, never while request bodies are read or responses are streamed.
    Per key, the last put or delete to acquire the lock wins.
    """

    def __init__(self):
        self._entries: Dict[str, RegistryEntry] = {}
        self._lock = threading.Lock()

    def put(self, key: str, entry: RegistryEntry) -> Optional[RegistryEntry]:
        """
        Insert or replace the entry stored under ``key``.

        Args:
            key: Entry key, the empty string is a legal key
            entry: Fully built entry

        Returns:
            The replaced entry, None if the key was free
        """
        with self._lock:
            previous = self._entries.get(key)
            self._entries[key] = entry
        if previous is not None:
            logger.debug(f"Replaced entry for key {key!r} ({previous.size} bytes dropped)")
        return previous

    def get(self, key: str) -> Optional[RegistryEntry]:
        """
        Look up the entry stored under ``key``.

        Does not check expiry and never removes anything.

        Returns:
            RegistryEntry if present, None otherwise
        """
        with self._lock:
            return self._entries.get(key)

    def delete(self, key: str, expected: Optional[RegistryEntry] = None) -> bool:
        """
        Remove the entry stored under ``key``.

        Deleting an absent key is a no-op. When ``expected`` is given the
        key is only removed while it still maps to that exact entry.

        Returns:
            True if an entry was removed, False otherwise
        """
        with self._lock:
            current = self._entries.get(key)
            if current is None:
                return False
            if expected is not None and current is not expected:
                return False
            del self._entries[key]
            return True

    def sweep_expired(self, now: datetime) -> List[RegistryEntry]:
        """
        Remove every entry whose expiry is at or before ``now``.

        Args:
            now: Reference time, timezone-aware UTC

        Returns:
            The removed entries
        """
        with self._lock:
            expired_keys = [key for key, entry in self._entries.items() if entry.expires_at <= now]
            expired = [self._entries.pop(key) for key in expired_keys]
        return expired

    def keys(self) -> List[str]:
        """Snapshot of the stored keys."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries
