"""Per-device command queues with globally unique command identifiers."""

from __future__ import annotations

import itertools
import logging
from collections import deque
from threading import Lock

from adms_gateway.models import CommandEntry

logger = logging.getLogger(__name__)

__all__ = ["QueueStore"]


class QueueStore:
    """In-memory FIFO of pending commands, one queue per device serial.

    The store owns the id counter shared by every device, so ids are unique
    and strictly increasing in enqueue order across the whole process.
    Delivery is at-most-once: :meth:`drain` removes entries as it returns
    them and nothing is re-sent. Queues for devices that never poll grow
    without bound and vanish on restart.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(start=1)
        self._queues: dict[str, deque[CommandEntry]] = {}
        self._lock = Lock()

    def enqueue(self, serial: str, command: str) -> int:
        """Append a command to a device queue and return its id."""
        with self._lock:
            entry = CommandEntry(id=next(self._counter), command=command)
            self._queues.setdefault(serial, deque()).append(entry)
        logger.info("Queued command %d for %s: %s", entry.id, serial, command)
        return entry.id

    def drain(self, serial: str) -> list[CommandEntry]:
        """Remove and return every pending command for a device, oldest first."""
        with self._lock:
            queue = self._queues.pop(serial, None)
        if not queue:
            return []
        return list(queue)

    def pending(self, serial: str) -> int:
        """Return how many commands are waiting for a device."""
        with self._lock:
            return len(self._queues.get(serial, ()))

    def serials(self) -> list[str]:
        """Return the serials that currently have pending commands."""
        with self._lock:
            return [serial for serial, queue in self._queues.items() if queue]
