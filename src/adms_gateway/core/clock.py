# src/adms_gateway/core/clock.py
"""Clock helpers shared by the protocol handler and the admin API."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta, timezone

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def reference_zone(offset_hours: float) -> timezone:
    """Return the fixed-offset zone devices are assumed to run in."""
    return timezone(timedelta(hours=offset_hours))


def to_device_local(instant: datetime, offset_hours: float) -> datetime:
    """Convert an instant to naive device wall-clock time.

    Naive inputs are already device-local and are returned unchanged. Aware
    inputs are shifted into the reference offset and stripped of tzinfo, since
    the device treats every timestamp it receives as its own local time.
    """
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(reference_zone(offset_hours)).replace(tzinfo=None)
