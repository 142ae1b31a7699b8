"""Periodic forced resynchronization of device state and clock."""

from __future__ import annotations

import logging
from threading import Lock

from adms_gateway.services.command_queue import QueueStore

logger = logging.getLogger(__name__)

RESYNC_COMMAND = "CHECK"
DEFAULT_INTERVAL_SECONDS = 5 * 60

__all__ = ["DEFAULT_INTERVAL_SECONDS", "RESYNC_COMMAND", "TimeSyncPolicy"]


class TimeSyncPolicy:
    """Decide when a polling device must re-pull its configuration.

    A device that has never been synced is due immediately. Once a ``CHECK``
    is queued the device is considered synced until ``interval_seconds``
    have elapsed, after which the next poll queues another one.
    """

    def __init__(
        self,
        queue: QueueStore,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        self.queue = queue
        self.interval_seconds = interval_seconds
        self._last_sync: dict[str, float] = {}
        self._lock = Lock()

    def should_force_resync(self, serial: str, now: float) -> bool:
        """Return True if the device has not been resynced within the interval."""
        with self._lock:
            last_sync = self._last_sync.get(serial, 0.0)
        return now - last_sync >= self.interval_seconds

    def record_sync(self, serial: str, now: float) -> None:
        """Mark the device as resynced at ``now`` (epoch seconds)."""
        with self._lock:
            self._last_sync[serial] = now

    def on_poll(self, serial: str, now: float) -> int | None:
        """Queue a ``CHECK`` for the device when a resync is due.

        Called once per poll before the queue is drained, so the command
        rides along in the same response.

        Returns:
            The id of the queued ``CHECK`` command, or None if none was due.
        """
        with self._lock:
            last_sync = self._last_sync.get(serial, 0.0)
            if now - last_sync < self.interval_seconds:
                return None
            self._last_sync[serial] = now
        command_id = self.queue.enqueue(serial, RESYNC_COMMAND)
        logger.info("Forced resync for %s with command %d", serial, command_id)
        return command_id
