# src/adms_gateway/services/__init__.py
"""Protocol services for the ADMS gateway."""

from .command_queue import QueueStore
from .session import CommandValidationError, GatewayError, SessionProtocolHandler
from .time_sync import TimeSyncPolicy

__all__ = [
    "CommandValidationError",
    "GatewayError",
    "QueueStore",
    "SessionProtocolHandler",
    "TimeSyncPolicy",
]
