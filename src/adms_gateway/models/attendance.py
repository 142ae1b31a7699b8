"""Attendance punch records pushed by devices."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AttendanceRecord:
    """One line of an ATTLOG push.

    Trailing fields are ``None`` when the device sent fewer columns than
    expected. ``raw`` always holds the original line.
    """

    pin: str
    datetime: str | None
    status: str | None
    verify: str | None
    workcode: str | None
    raw: str
