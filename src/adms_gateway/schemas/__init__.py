# src/adms_gateway/schemas/__init__.py
"""
Pydantic schemas for the admin API.

Device-facing endpoints speak plain text and have no schemas.
"""

from .admin import AttlogRangeIn, AttlogRangeQueuedOut, CommandIn, CommandQueuedOut

__all__ = [
    "AttlogRangeIn", "AttlogRangeQueuedOut",
    "CommandIn", "CommandQueuedOut",
]
