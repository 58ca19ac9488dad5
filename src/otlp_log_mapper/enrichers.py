"""Trace-context enrichment for log events.

Copies the active OpenTelemetry span context onto a log event as the reserved
trace/span id properties, in the lowercase hex form the mapper parses back
into binary `LogRecord.trace_id` / `LogRecord.span_id`.
"""
from __future__ import annotations

import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

from .mapping.id_utils import SPAN_ID_PROPERTY_NAME, TRACE_ID_PROPERTY_NAME
from .models.log_event import LogEvent

__all__ = ["enrich_with_trace_context"]

logger = logging.getLogger(__name__)


def enrich_with_trace_context(
    event: LogEvent,
    span: Optional[trace.Span] = None,
    *,
    trace_id_property: str = TRACE_ID_PROPERTY_NAME,
    span_id_property: str = SPAN_ID_PROPERTY_NAME,
) -> LogEvent:
    """Return a copy of `event` carrying the trace and span ids of `span`.

    Args:
        event: Event to enrich; it is not modified.
        span: Span whose context is used. Defaults to the current span.
        trace_id_property: Property name to store the trace id under.
        span_id_property: Property name to store the span id under.

    Returns:
        The enriched copy, or `event` itself when there is no valid span
        context. Properties the event already carries are never overwritten.
    """
    ctx = (span or trace.get_current_span()).get_span_context()
    if not ctx.is_valid:
        return event
    properties = dict(event.properties)
    properties.setdefault(trace_id_property, format_trace_id(ctx.trace_id))
    properties.setdefault(span_id_property, format_span_id(ctx.span_id))
    logger.debug(
        "Enriched event with trace context trace_id=%s span_id=%s",
        properties[trace_id_property],
        properties[span_id_property],
    )
    return event.model_copy(update={"properties": properties})
