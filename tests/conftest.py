# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from adms_gateway.api.dependencies import get_session_handler
from adms_gateway.core.settings import Settings
from adms_gateway.main import app as fastapi_app
from adms_gateway.repositories import LoggingRecordSink
from adms_gateway.services import QueueStore, SessionProtocolHandler, TimeSyncPolicy

# 2024-01-01 02:00:00 UTC is 08:00:00 at the default UTC+6 device offset.
FIXED_NOW = datetime(2024, 1, 1, 2, 0, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock returning aware UTC datetimes."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(ADMS_RESYNC_INTERVAL_SECONDS=300, ADMS_DEVICE_UTC_OFFSET_HOURS=6)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def queue() -> QueueStore:
    return QueueStore()


@pytest.fixture()
def sink() -> LoggingRecordSink:
    return LoggingRecordSink()


@pytest.fixture()
def handler(
    queue: QueueStore,
    sink: LoggingRecordSink,
    test_settings: Settings,
    clock: FakeClock,
) -> SessionProtocolHandler:
    return SessionProtocolHandler(
        queue=queue,
        time_sync=TimeSyncPolicy(queue, interval_seconds=test_settings.resync_interval_seconds),
        sink=sink,
        settings=test_settings,
        clock=clock,
    )


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_handler(app: FastAPI, handler: SessionProtocolHandler) -> Iterator[None]:
    app.dependency_overrides[get_session_handler] = lambda: handler
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_session_handler, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client
