"""Wire codec for the ADMS device protocol.

Devices speak a line-oriented ASCII dialect: ``Key=Value`` option blocks,
``C:<id>:<command>`` command batches and tab separated table rows. This
module translates between those formats and the gateway's value types. It
holds no state and never raises on device input; malformed payloads degrade
to partial records.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime
from urllib.parse import parse_qsl

from adms_gateway.core.settings import Settings
from adms_gateway.models import AttendanceRecord, CommandEntry, CommandResult

LINE_BREAK = re.compile(r"\r?\n")
FIELD_SEPARATOR = re.compile(r"[\t ]+")
ATTLOG_FIELD_COUNT = 6
UNKNOWN_SERIAL = "UNKNOWN"

__all__ = [
    "build_attlog_query_command",
    "encode_command",
    "encode_command_batch",
    "format_options_response",
    "format_time_response",
    "format_timestamp",
    "parse_attendance_log",
    "parse_command_result",
    "parse_user_lines",
    "split_lines",
]


def format_timestamp(instant: datetime) -> str:
    """Render ``YYYY-MM-DD HH:MM:SS`` for embedding inside command text."""
    return instant.strftime("%Y-%m-%d %H:%M:%S")


def format_time_response(instant: datetime) -> str:
    """Render the ``type=time`` handshake answer.

    The value carries no offset suffix: the device takes the wall-clock
    string literally as its own local time, so ``instant`` must already be
    expressed in the device reference offset.
    """
    return f"Time={instant.strftime('%Y-%m-%dT%H:%M:%S')}"


def format_options_response(
    serial: str | None,
    server_time: datetime,
    options: Settings,
) -> str:
    """Render the handshake option block for a device.

    Args:
        serial: Device serial number; ``UNKNOWN`` is used when absent.
        server_time: Current device-local time, same reference as
            :func:`format_time_response`.
        options: Settings holding the policy constants.

    Returns:
        Newline-joined ``Key=Value`` lines preceded by the option header.
    """
    lines = [
        f"GET OPTION FROM: {serial or UNKNOWN_SERIAL}",
        f"Stamp={options.stamp}",
        f"OpStamp={options.stamp}",
        f"PhotoStamp={options.stamp}",
        f"ErrorDelay={options.error_delay}",
        f"Delay={options.delay}",
        f"TransTimes={options.trans_times}",
        f"TransInterval={options.trans_interval}",
        f"TransFlag={options.trans_flag}",
        f"Realtime={options.realtime}",
        "Encrypt=0",
        f"PushProtVer={options.push_prot_ver}",
        f"ServerTime={format_timestamp(server_time)}",
        f"TimeZone={options.timezone_label}",
    ]
    return "\n".join(lines)


def encode_command(command_id: int, command: str) -> str:
    """Render a single ``C:<id>:<command>`` line."""
    return f"C:{command_id}:{command}"


def encode_command_batch(entries: Iterable[CommandEntry]) -> str:
    """Join encoded commands with newlines, preserving queue order."""
    return "\n".join(encode_command(entry.id, entry.command) for entry in entries)


def split_lines(raw: str) -> list[str]:
    """Split a push body into its non-blank lines."""
    return [line for line in LINE_BREAK.split(raw.strip()) if line.strip()]


def parse_attendance_log(raw: str) -> list[AttendanceRecord]:
    """Parse an ATTLOG push body into attendance records.

    Each line is split on runs of tabs or spaces and mapped positionally to
    ``pin, date, time, status, verify, workcode``. Extra columns are ignored
    and missing ones are left as ``None``; no line is rejected.
    """
    records: list[AttendanceRecord] = []
    for line in split_lines(raw):
        fields: list[str | None] = list(FIELD_SEPARATOR.split(line.strip()))
        fields = (fields + [None] * ATTLOG_FIELD_COUNT)[:ATTLOG_FIELD_COUNT]
        pin, date, time, status, verify, workcode = fields
        records.append(
            AttendanceRecord(
                pin=pin,
                datetime=f"{date} {time}" if date and time else date,
                status=status,
                verify=verify,
                workcode=workcode,
                raw=line,
            )
        )
    return records


def parse_user_lines(raw: str) -> list[str]:
    """Return the non-blank USERINFO lines of a push body.

    Blank lines are not counted, so an empty body yields no lines and
    ``a\\n\\nb`` yields two.
    """
    return split_lines(raw)


def parse_command_result(raw: str) -> CommandResult:
    """Parse a ``/iclock/devicecmd`` report such as ``ID=3&Return=0&CMD=DATA``.

    Unknown keys are ignored and a non-numeric ``ID`` is dropped; the report
    is informational only.
    """
    values: dict[str, str] = {}
    for line in split_lines(raw):
        for key, value in parse_qsl(line.strip(), keep_blank_values=True):
            values.setdefault(key.strip().upper(), value)

    command_id: int | None
    try:
        command_id = int(values["ID"])
    except (KeyError, ValueError):
        command_id = None

    return CommandResult(
        id=command_id,
        return_code=values.get("RETURN"),
        command=values.get("CMD"),
        raw=raw,
    )


def build_attlog_query_command(start: datetime, end: datetime) -> str:
    """Build the command asking a device to re-upload punches in a range.

    The tab between ``StartTime`` and ``EndTime`` is part of the protocol.
    """
    return (
        f"DATA QUERY ATTLOG StartTime={format_timestamp(start)}"
        f"\tEndTime={format_timestamp(end)}"
    )
