"""Record assembly: one `LogEvent` in, one OTLP `LogRecord` out.

The orchestrator creates a fresh record per call and runs the projections in
a fixed order:

    1. timestamps   (time_unix_nano, observed_time_unix_nano)
    2. severity     (severity_text, severity_number)
    3. body         (body, trace_id, span_id)
    4. exception    (attributes)

Each projection only adds fields to the record, never clears one. The
record is not shared between calls, so independent events can be mapped
concurrently without locking.
"""
from __future__ import annotations

from typing import Optional

from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord

from ..models.log_event import LogEvent
from .body import process_body
from .exception import process_exception
from .id_utils import SPAN_ID_PROPERTY_NAME, TRACE_ID_PROPERTY_NAME
from .severity import process_severity
from .time_utils import Clock, process_timestamps

__all__ = ["to_log_record"]


def to_log_record(
    event: LogEvent,
    rendered_message: Optional[str] = None,
    *,
    clock: Optional[Clock] = None,
    trace_id_property: str = TRACE_ID_PROPERTY_NAME,
    span_id_property: str = SPAN_ID_PROPERTY_NAME,
) -> LogRecord:
    """Map a log event to an OTLP `LogRecord`.

    Args:
        event: The structured event to translate.
        rendered_message: Pre-rendered message text; omitted from the body
            when None or blank.
        clock: Source of the observed time (defaults to the UTC wall clock).
        trace_id_property: Property name promoted to `trace_id`.
        span_id_property: Property name promoted to `span_id`.

    Returns:
        A newly allocated, fully populated `LogRecord`.

    Raises:
        UnknownSeverityLevelError: if the event level has no OTLP mapping.
    """
    record = LogRecord()
    process_timestamps(record, event, clock)
    process_severity(record, event.level)
    process_body(
        record,
        event,
        rendered_message,
        trace_id_property=trace_id_property,
        span_id_property=span_id_property,
    )
    process_exception(record, event.exception)
    return record
