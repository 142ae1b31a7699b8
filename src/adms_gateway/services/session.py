"""Device session protocol handler.

Each device request is self-contained and correlated only by its serial
number. Requests are first classified into one of a small set of variants,
then dispatched with an exhaustive match. Every device-facing path answers
with a plain-text body; nothing a device sends can make the handler raise.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from adms_gateway.core import wire
from adms_gateway.core.clock import Clock, to_device_local, utcnow
from adms_gateway.core.settings import Settings
from adms_gateway.models import CommandEntry
from adms_gateway.repositories import RecordSink
from adms_gateway.services.command_queue import QueueStore
from adms_gateway.services.time_sync import TimeSyncPolicy

logger = logging.getLogger(__name__)

OK = "OK"

__all__ = [
    "AttlogRangeQueued",
    "CheckIn",
    "CommandReport",
    "CommandValidationError",
    "DeviceRequest",
    "GatewayError",
    "HandshakeOptions",
    "HandshakeTime",
    "Ping",
    "Poll",
    "PushTable",
    "SessionProtocolHandler",
    "TableKind",
    "classify_handshake",
]


class GatewayError(RuntimeError):
    """Base exception for gateway failures surfaced to admin callers."""


class CommandValidationError(GatewayError, ValueError):
    """Raised when an admin request is missing or has invalid fields."""


class TableKind(str, Enum):
    """Table classes a device may push to ``/iclock/cdata``."""

    ATTLOG = "ATTLOG"
    USERINFO = "USERINFO"
    OPERLOG = "OPERLOG"
    ATTPHOTO = "ATTPHOTO"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_query(cls, value: str | None) -> TableKind:
        """Map a ``table`` query value to a kind, case-insensitively."""
        try:
            return cls((value or "").strip().upper())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class HandshakeTime:
    serial: str | None


@dataclass(frozen=True)
class HandshakeOptions:
    serial: str | None


@dataclass(frozen=True)
class CheckIn:
    serial: str | None


@dataclass(frozen=True)
class Poll:
    serial: str | None


@dataclass(frozen=True)
class Ping:
    serial: str | None


@dataclass(frozen=True)
class PushTable:
    serial: str | None
    kind: TableKind
    body: str
    table: str | None = None


@dataclass(frozen=True)
class CommandReport:
    serial: str | None
    body: str


DeviceRequest = (
    HandshakeTime | HandshakeOptions | CheckIn | Poll | Ping | PushTable | CommandReport
)


def classify_handshake(query: Mapping[str, str]) -> HandshakeTime | HandshakeOptions | CheckIn:
    """Classify a ``GET /iclock/cdata`` request by its query parameters."""
    serial = query.get("SN")
    if query.get("type") == "time":
        return HandshakeTime(serial)
    if "options" in query:
        return HandshakeOptions(serial)
    return CheckIn(serial)


@dataclass(frozen=True)
class AttlogRangeQueued:
    """Outcome of queueing an attendance re-upload query."""

    entry: CommandEntry
    start: datetime
    end: datetime

    @property
    def range_label(self) -> str:
        """Echo both bounds as parsed; naive inputs stay without an offset."""
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"


class SessionProtocolHandler:
    """Drive device exchanges against the queue, sync policy and record sink."""

    def __init__(
        self,
        queue: QueueStore,
        time_sync: TimeSyncPolicy,
        sink: RecordSink,
        settings: Settings,
        clock: Clock = utcnow,
    ) -> None:
        self.queue = queue
        self.time_sync = time_sync
        self.sink = sink
        self.settings = settings
        self.clock = clock

    def device_now(self) -> datetime:
        """Return the current wall-clock time in the device reference offset."""
        return to_device_local(self.clock(), self.settings.device_utc_offset_hours)

    def handle(self, request: DeviceRequest) -> str:
        """Answer a classified device request with its plain-text body."""
        match request:
            case HandshakeTime(serial=serial):
                response = wire.format_time_response(self.device_now())
                logger.info("Time request from %s: %s", serial, response)
                return response
            case HandshakeOptions(serial=serial):
                logger.info("Options request from %s", serial)
                return wire.format_options_response(serial, self.device_now(), self.settings)
            case CheckIn(serial=serial) | Ping(serial=serial):
                logger.debug("Check-in from %s", serial)
                return OK
            case Poll(serial=serial):
                return self._poll(serial)
            case CommandReport(serial=serial, body=body):
                result = wire.parse_command_result(body)
                if result.id is None:
                    logger.warning("Unparsed command report from %s: %r", serial, body)
                else:
                    logger.info(
                        "Command %d on %s returned %s (%s)",
                        result.id,
                        serial,
                        result.return_code,
                        result.command,
                    )
                return OK
            case PushTable():
                return self._push(request)
        # Unreachable while every DeviceRequest variant has an arm above.
        logger.warning("Unhandled device request %r", request)
        return OK

    def _poll(self, serial: str | None) -> str:
        if not serial:
            return OK
        self.time_sync.on_poll(serial, self.clock().timestamp())
        entries = self.queue.drain(serial)
        if not entries:
            return OK
        payload = wire.encode_command_batch(entries)
        logger.info("Sending %d commands to %s", len(entries), serial)
        logger.debug("Command batch for %s:\n%s", serial, payload)
        return payload

    def _push(self, request: PushTable) -> str:
        serial = request.serial or wire.UNKNOWN_SERIAL
        match request.kind:
            case TableKind.ATTLOG:
                records = wire.parse_attendance_log(request.body)
                self.sink.store_attendance(serial, records)
                return f"OK:{len(records)}"
            case TableKind.USERINFO:
                lines = wire.parse_user_lines(request.body)
                self.sink.store_users(serial, lines)
                return f"OK:{len(lines)}"
            case TableKind.OPERLOG | TableKind.ATTPHOTO:
                logger.info("%s push from %s acknowledged", request.kind.value, serial)
                return OK
            case TableKind.UNKNOWN:
                logger.warning("Unknown table %r pushed by %s", request.table, serial)
                return OK

    def enqueue_command(self, serial: str | None, command: str | None) -> CommandEntry:
        """Queue an arbitrary command for a device.

        Raises:
            CommandValidationError: If the serial or the command is missing.
        """
        if not serial or not serial.strip() or not command or not command.strip():
            raise CommandValidationError("Missing sn or command")
        return CommandEntry(id=self.queue.enqueue(serial, command), command=command)

    def enqueue_attlog_range(
        self, serial: str | None, start: str | None, end: str | None
    ) -> AttlogRangeQueued:
        """Queue a ``DATA QUERY ATTLOG`` command for an ISO 8601 time range.

        Aware datetimes are converted to the device reference offset; naive
        ones are taken as device wall-clock time.

        Raises:
            CommandValidationError: If the serial is missing or either bound
                is missing or unparseable.
        """
        if not serial or not serial.strip():
            raise CommandValidationError("Missing sn")
        start_dt = _parse_instant(start)
        end_dt = _parse_instant(end)
        if start_dt is None or end_dt is None:
            raise CommandValidationError("Missing or invalid start/end")

        offset = self.settings.device_utc_offset_hours
        try:
            device_start = to_device_local(start_dt, offset)
            device_end = to_device_local(end_dt, offset)
        except (OverflowError, ValueError) as exc:
            raise CommandValidationError("Missing or invalid start/end") from exc
        command = wire.build_attlog_query_command(device_start, device_end)
        entry = CommandEntry(id=self.queue.enqueue(serial, command), command=command)
        return AttlogRangeQueued(entry=entry, start=start_dt, end=end_dt)


def _parse_instant(value: str | None) -> datetime | None:
    if not value or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None
