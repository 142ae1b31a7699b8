# src/adms_gateway/repositories/__init__.py
"""Hand-off points for records pushed by devices."""

from .records import LoggingRecordSink, RecordSink

__all__ = ["LoggingRecordSink", "RecordSink"]
