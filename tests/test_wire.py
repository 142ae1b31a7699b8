"""Tests for the ADMS wire codec."""

from __future__ import annotations

from datetime import datetime

from adms_gateway.core import wire
from adms_gateway.core.settings import Settings
from adms_gateway.models import CommandEntry


def test_format_timestamp_zero_pads() -> None:
    assert wire.format_timestamp(datetime(2024, 3, 5, 7, 8, 9)) == "2024-03-05 07:08:09"


def test_format_time_response_has_no_offset_suffix() -> None:
    response = wire.format_time_response(datetime(2024, 1, 1, 8, 0, 0))
    assert response == "Time=2024-01-01T08:00:00"


def test_options_response_lines_in_order() -> None:
    text = wire.format_options_response("DEV1", datetime(2024, 1, 1, 8, 0, 0), Settings())
    assert text.split("\n") == [
        "GET OPTION FROM: DEV1",
        "Stamp=9999",
        "OpStamp=9999",
        "PhotoStamp=9999",
        "ErrorDelay=60",
        "Delay=30",
        "TransTimes=00:00;23:59",
        "TransInterval=1",
        "TransFlag=1111000000",
        "Realtime=1",
        "Encrypt=0",
        "PushProtVer=2.4.1",
        "ServerTime=2024-01-01 08:00:00",
        "TimeZone=6",
    ]


def test_options_response_without_serial() -> None:
    text = wire.format_options_response(None, datetime(2024, 1, 1), Settings())
    assert text.startswith("GET OPTION FROM: UNKNOWN\n")


def test_encode_command_batch_preserves_order() -> None:
    entries = [CommandEntry(3, "CHECK"), CommandEntry(7, "INFO")]
    assert wire.encode_command(3, "CHECK") == "C:3:CHECK"
    assert wire.encode_command_batch(entries) == "C:3:CHECK\nC:7:INFO"
    assert wire.encode_command_batch([]) == ""


def test_parse_attendance_log_two_records() -> None:
    records = wire.parse_attendance_log(
        "1\t2024-01-01\t08:00:00\t1\t1\t0\n2\t2024-01-01\t17:00:00\t1\t1\t0"
    )
    assert [r.pin for r in records] == ["1", "2"]
    assert [r.datetime for r in records] == ["2024-01-01 08:00:00", "2024-01-01 17:00:00"]
    assert records[0].status == "1"
    assert records[0].verify == "1"
    assert records[0].workcode == "0"
    assert records[0].raw == "1\t2024-01-01\t08:00:00\t1\t1\t0"


def test_parse_attendance_log_drops_blank_lines_and_handles_crlf() -> None:
    records = wire.parse_attendance_log("\r\n7 2024-02-02  09:15:00\t0\r\n\r\n   \n")
    assert len(records) == 1
    assert records[0].pin == "7"
    assert records[0].datetime == "2024-02-02 09:15:00"
    assert records[0].status == "0"
    assert records[0].verify is None
    assert records[0].workcode is None


def test_parse_attendance_log_degrades_on_short_lines() -> None:
    (pin_only, date_only) = wire.parse_attendance_log("42\n43\t2024-01-01")
    assert pin_only.pin == "42"
    assert pin_only.datetime is None
    assert date_only.datetime == "2024-01-01"
    assert date_only.status is None


def test_parse_attendance_log_ignores_extra_fields() -> None:
    (record,) = wire.parse_attendance_log("5\t2024-01-01\t08:00:00\t1\t15\t0\t0\t0\t255")
    assert record.workcode == "0"
    assert record.raw.endswith("\t255")


def test_parse_user_lines() -> None:
    raw = "USER PIN=1\tName=Ann\nUSER PIN=2\tName=Bo\n\n"
    assert wire.parse_user_lines(raw) == ["USER PIN=1\tName=Ann", "USER PIN=2\tName=Bo"]
    assert wire.parse_user_lines("") == []


def test_parse_command_result() -> None:
    result = wire.parse_command_result("ID=12&Return=0&CMD=DATA")
    assert result.id == 12
    assert result.return_code == "0"
    assert result.command == "DATA"


def test_parse_command_result_tolerates_garbage() -> None:
    result = wire.parse_command_result("not a report")
    assert result.id is None
    assert result.return_code is None
    assert result.raw == "not a report"


def test_build_attlog_query_command_uses_literal_tab() -> None:
    command = wire.build_attlog_query_command(
        datetime(2024, 1, 1, 0, 0, 0), datetime(2024, 1, 2, 0, 0, 0)
    )
    assert command == (
        "DATA QUERY ATTLOG StartTime=2024-01-01 00:00:00\tEndTime=2024-01-02 00:00:00"
    )
    assert "\t" in command


def test_parse_user_lines_skips_inner_blank_lines() -> None:
    assert wire.parse_user_lines("a\n\nb") == ["a", "b"]
    assert wire.parse_user_lines("\n  \n") == []
