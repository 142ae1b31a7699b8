"""Shared API dependencies wiring the protocol services together."""

from typing import Annotated

from fastapi import Depends

from adms_gateway.core.settings import settings
from adms_gateway.repositories import LoggingRecordSink
from adms_gateway.services import QueueStore, SessionProtocolHandler, TimeSyncPolicy


def build_session_handler() -> SessionProtocolHandler:
    """Construct a handler with a fresh queue store, sync policy and sink."""
    queue = QueueStore()
    return SessionProtocolHandler(
        queue=queue,
        time_sync=TimeSyncPolicy(queue, interval_seconds=settings.resync_interval_seconds),
        sink=LoggingRecordSink(),
        settings=settings,
    )


class _SessionHandlerSingleton:
    """One handler, and therefore one queue store, per process."""

    _instance: SessionProtocolHandler | None = None

    @classmethod
    def get_instance(cls) -> SessionProtocolHandler:
        if cls._instance is None:
            cls._instance = build_session_handler()
        return cls._instance


def get_session_handler() -> SessionProtocolHandler:
    """Return the process-wide session protocol handler."""
    return _SessionHandlerSingleton.get_instance()


SessionHandlerDep = Annotated[SessionProtocolHandler, Depends(get_session_handler)]
