"""
Reaper Task

Background thread that periodically sweeps expired entries out of the
registry. Stateless between ticks; stopped through a threading.Event.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional

from temp_file_registry.application.event_publisher import EventPublisher
from temp_file_registry.application.registry_service import utc_now
from temp_file_registry.domain.events import EntryExpiredEvent
from temp_file_registry.domain.file_registry import FileRegistry, RegistryEntry

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL_SECONDS = 60.0


class Reaper:
    """
    Periodic sweeper for expired registry entries.

    Each tick calls ``FileRegistry.sweep_expired`` with the current time
    and publishes an ``EntryExpiredEvent`` per removed entry.
    """

    def __init__(
        self,
        registry: FileRegistry,
        interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        event_publisher: Optional[EventPublisher] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the reaper.

        Args:
            registry: Registry to sweep
            interval_seconds: Delay between sweeps
            event_publisher: Optional publisher for expiry events
            clock: Callable returning the current UTC time
        """
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.registry = registry
        self.interval_seconds = interval_seconds
        self.event_publisher = event_publisher
        self.clock = clock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        """Whether the sweep thread is alive."""
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        """Start the sweep thread. No-op when already running."""
        with self._lock:
            if self.running:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._run, name="registry-reaper", daemon=True)
            self._thread.start()
        logger.info(f"Reaper started (interval={self.interval_seconds}s)")

    def stop(self, wait: bool = True, timeout: Optional[float] = None) -> None:
        """
        Signal the sweep thread to stop.

        Args:
            wait: Join the thread before returning
            timeout: Maximum seconds to wait for the join
        """
        self._stop_event.set()
        thread = self._thread
        if wait and thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("Reaper stopped")

    def run_once(self, now: Optional[datetime] = None) -> List[RegistryEntry]:
        """
        Perform a single sweep.

        Args:
            now: Reference time, defaults to the reaper clock

        Returns:
            The entries removed by this sweep
        """
        now = now or self.clock()
        removed = self.registry.sweep_expired(now)

        for entry in removed:
            if self.event_publisher is not None:
                self.event_publisher.publish(
                    EntryExpiredEvent(
                        aggregate_id=entry.key,
                        occurred_at=now,
                        expires_at=entry.expires_at,
                    )
                )
            else:
                logger.info(
                    f"[Reaper] File expired: key={entry.key!r} "
                    f"expired_at={entry.expires_at.isoformat()}"
                )

        if removed:
            logger.info(f"Sweep completed - removed {len(removed)} expired entries")
        else:
            logger.debug("Sweep completed - nothing expired")
        return removed

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.run_once()
            except Exception:
                logger.exception("Reaper sweep failed")
