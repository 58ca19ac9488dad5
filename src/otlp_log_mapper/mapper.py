"""Public facade for log event to OTLP LogRecord mapping.

This module provides the stable public API for converting structured log
events into OpenTelemetry Logs protocol messages. All projection logic is
delegated to the otlp_log_mapper.mapping package.

Public Functions:
    map_log_event: Convert a LogEvent to an OTLP LogRecord
    map_resource_attributes: Convert resource metadata to OTLP KeyValues

Internal Re-exports:
    to_any_value: Generic value conversion (test usage)
    to_unix_nano: Timestamp conversion (test usage)
    UnknownSeverityLevelError: Raised for unmapped severity levels
    TRACE_ID_PROPERTY_NAME / SPAN_ID_PROPERTY_NAME: Reserved property names
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from opentelemetry.proto.common.v1.common_pb2 import KeyValue
from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord

from .config import get_settings
from .mapping.any_value import to_any_value
from .mapping.id_utils import SPAN_ID_PROPERTY_NAME, TRACE_ID_PROPERTY_NAME
from .mapping.orchestrator import to_log_record
from .mapping.resource import to_resource_attributes
from .mapping.severity import UnknownSeverityLevelError
from .mapping.time_utils import Clock, to_unix_nano
from .models.log_event import LogEvent

__all__ = [
    "map_log_event",
    "map_resource_attributes",
    "UnknownSeverityLevelError",
    "TRACE_ID_PROPERTY_NAME",
    "SPAN_ID_PROPERTY_NAME",
    # Helper re-exports (test-only / internal use)
    "to_any_value",
    "to_unix_nano",
]


def map_log_event(
    event: LogEvent,
    rendered_message: Optional[str] = None,
    *,
    clock: Optional[Clock] = None,
    trace_id_property: Optional[str] = None,
    span_id_property: Optional[str] = None,
) -> LogRecord:
    """Convert a log event to an OTLP LogRecord.

    Args:
        event: Structured log event.
        rendered_message: Optional pre-rendered message for the body.
        clock: Observed-time source; defaults to the UTC wall clock.
        trace_id_property: Reserved trace id property name; when None,
            TRACE_ID_PROPERTY_NAME from settings is used.
        span_id_property: Reserved span id property name; when None,
            SPAN_ID_PROPERTY_NAME from settings is used.

    Returns:
        Populated LogRecord owned by the caller.

    Raises:
        UnknownSeverityLevelError: if the event level has no OTLP mapping.
    """
    if trace_id_property is None or span_id_property is None:
        settings = get_settings()
        if trace_id_property is None:
            trace_id_property = settings.TRACE_ID_PROPERTY_NAME
        if span_id_property is None:
            span_id_property = settings.SPAN_ID_PROPERTY_NAME
    return to_log_record(
        event,
        rendered_message,
        clock=clock,
        trace_id_property=trace_id_property,
        span_id_property=span_id_property,
    )


def map_resource_attributes(
    resource_attributes: Optional[Mapping[str, Any]],
) -> List[KeyValue]:
    """Convert resource metadata (e.g. `Resource.attributes`) to KeyValues."""
    return to_resource_attributes(resource_attributes)
