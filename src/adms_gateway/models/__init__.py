# src/adms_gateway/models/__init__.py
"""Value types exchanged between the wire codec and the protocol services."""

from .attendance import AttendanceRecord
from .command import CommandEntry, CommandResult

__all__ = [
    "AttendanceRecord",
    "CommandEntry",
    "CommandResult",
]
