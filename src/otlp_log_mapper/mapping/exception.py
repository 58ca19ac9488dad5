"""Exception diagnostics projected onto LogRecord attributes.

Attribute names follow the OpenTelemetry semantic conventions
(`exception.type`, `exception.message`, `exception.stacktrace`). Attributes
are appended so they compose with any other attribute source.
"""
from __future__ import annotations

from typing import Optional

from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord
from opentelemetry.semconv.attributes.exception_attributes import (
    EXCEPTION_MESSAGE,
    EXCEPTION_STACKTRACE,
    EXCEPTION_TYPE,
)

from ..models.log_event import ExceptionInfo
from .any_value import new_string_attribute

__all__ = ["process_exception"]


def process_exception(record: LogRecord, exception: Optional[ExceptionInfo]) -> None:
    if exception is None:
        return
    attrs = record.attributes
    attrs.append(new_string_attribute(EXCEPTION_TYPE, exception.type))
    if exception.message:
        attrs.append(new_string_attribute(EXCEPTION_MESSAGE, exception.message))
    if exception.stacktrace:
        attrs.append(new_string_attribute(EXCEPTION_STACKTRACE, exception.stacktrace))
