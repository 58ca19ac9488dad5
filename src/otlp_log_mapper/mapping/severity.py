"""Severity projection from the front-end level scale onto OTLP severity.

OTLP defines severity numbers 1-24 in six bands of four (TRACE, DEBUG, INFO,
WARN, ERROR, FATAL). Each front-end level maps to the first number of its
band. The table is total over `LogEventLevel`; anything else is a
programming error and raises instead of being clamped, since a silently
misclassified severity breaks downstream alerting and filtering.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Tuple

from opentelemetry.proto.logs.v1 import logs_pb2
from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord

from ..models.log_event import LogEventLevel

__all__ = ["UnknownSeverityLevelError", "SEVERITY_TABLE", "to_severity", "process_severity"]


class UnknownSeverityLevelError(ValueError):
    """Raised when a level has no entry in the severity table."""

    def __init__(self, level: Any) -> None:
        super().__init__(f"No OTLP severity mapping for log level {level!r}")
        self.level = level


# level -> (severity_text, severity_number)
SEVERITY_TABLE: Mapping[LogEventLevel, Tuple[str, int]] = MappingProxyType(
    {
        LogEventLevel.VERBOSE: ("Verbose", logs_pb2.SEVERITY_NUMBER_TRACE),
        LogEventLevel.DEBUG: ("Debug", logs_pb2.SEVERITY_NUMBER_DEBUG),
        LogEventLevel.INFORMATION: ("Information", logs_pb2.SEVERITY_NUMBER_INFO),
        LogEventLevel.WARNING: ("Warning", logs_pb2.SEVERITY_NUMBER_WARN),
        LogEventLevel.ERROR: ("Error", logs_pb2.SEVERITY_NUMBER_ERROR),
        LogEventLevel.FATAL: ("Fatal", logs_pb2.SEVERITY_NUMBER_FATAL),
    }
)


def to_severity(level: Any) -> Tuple[str, int]:
    """Return ``(severity_text, severity_number)`` for a level.

    Raises:
        UnknownSeverityLevelError: if `level` is not a known `LogEventLevel`.
    """
    if not isinstance(level, LogEventLevel):
        raise UnknownSeverityLevelError(level)
    try:
        return SEVERITY_TABLE[level]
    except KeyError:
        raise UnknownSeverityLevelError(level) from None


def process_severity(record: LogRecord, level: Any) -> None:
    text, number = to_severity(level)
    record.severity_text = text
    record.severity_number = number
