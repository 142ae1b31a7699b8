"""Storage seam for attendance and user records pushed by devices."""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from threading import Lock
from typing import Protocol

from adms_gateway.models import AttendanceRecord

logger = logging.getLogger(__name__)

__all__ = ["LoggingRecordSink", "RecordSink"]


class RecordSink(Protocol):
    """Receives parsed pushes; durable storage lives behind this interface."""

    def store_attendance(self, serial: str, records: Sequence[AttendanceRecord]) -> None:
        """Accept the attendance records of one ATTLOG push."""

    def store_users(self, serial: str, lines: Sequence[str]) -> None:
        """Accept the raw lines of one USERINFO push."""


class LoggingRecordSink:
    """Default sink that logs pushes and keeps per-device counters in memory."""

    def __init__(self) -> None:
        self.attendance_counts: Counter[str] = Counter()
        self.user_counts: Counter[str] = Counter()
        self._lock = Lock()

    def store_attendance(self, serial: str, records: Sequence[AttendanceRecord]) -> None:
        """Log and count the attendance records of one push."""
        with self._lock:
            self.attendance_counts[serial] += len(records)
        logger.info("Received %d attendance records from %s", len(records), serial)
        for record in records:
            logger.debug(
                "ATTLOG %s pin=%s at=%s status=%s verify=%s",
                serial,
                record.pin,
                record.datetime,
                record.status,
                record.verify,
            )

    def store_users(self, serial: str, lines: Sequence[str]) -> None:
        """Log and count the user lines of one push."""
        with self._lock:
            self.user_counts[serial] += len(lines)
        logger.info("Received %d users from %s", len(lines), serial)
