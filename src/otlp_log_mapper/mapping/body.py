"""Structured body projection and trace correlation extraction.

The OTLP data model types `body` as AnyValue. For indexing purposes the body
is always a two-entry map:

    {
        "message": <rendered message>,   # only when non-blank
        "properties": {<key>: <value>},  # always present, possibly empty
    }

While walking the event properties, the reserved trace and span id
properties are matched first and promoted to `LogRecord.trace_id` /
`LogRecord.span_id`. They never appear under "properties"; a malformed id is
dropped without affecting the rest of the record. The generic path is
key-agnostic and delegates to `any_value.to_any_value`.
"""
from __future__ import annotations

import logging
from typing import Optional

from opentelemetry.proto.common.v1.common_pb2 import AnyValue, KeyValue, KeyValueList
from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord

from ..models.log_event import LogEvent
from .any_value import to_any_value
from .id_utils import (
    SPAN_ID_PROPERTY_NAME,
    TRACE_ID_PROPERTY_NAME,
    to_span_id,
    to_trace_id,
)

__all__ = ["MESSAGE_KEY", "PROPERTIES_KEY", "process_body"]

MESSAGE_KEY = "message"
PROPERTIES_KEY = "properties"

logger = logging.getLogger(__name__)


def _build_properties(
    record: LogRecord,
    event: LogEvent,
    trace_id_property: str,
    span_id_property: str,
) -> KeyValueList:
    properties = KeyValueList()
    for key, value in event.properties.items():
        if key == trace_id_property:
            trace_id = to_trace_id(value)
            if trace_id is not None:
                record.trace_id = trace_id
            else:
                logger.debug("Dropping malformed trace id property %s=%r", key, value)
        elif key == span_id_property:
            span_id = to_span_id(value)
            if span_id is not None:
                record.span_id = span_id
            else:
                logger.debug("Dropping malformed span id property %s=%r", key, value)
        else:
            converted = to_any_value(value)
            if converted is None:
                logger.debug(
                    "Dropping property %s with unrepresentable type %s",
                    key,
                    type(value).__name__,
                )
                continue
            properties.values.append(KeyValue(key=key, value=converted))
    return properties


def process_body(
    record: LogRecord,
    event: LogEvent,
    rendered_message: Optional[str] = None,
    *,
    trace_id_property: str = TRACE_ID_PROPERTY_NAME,
    span_id_property: str = SPAN_ID_PROPERTY_NAME,
) -> None:
    body = KeyValueList()
    if rendered_message is not None and rendered_message.strip():
        body.values.append(
            KeyValue(key=MESSAGE_KEY, value=AnyValue(string_value=rendered_message))
        )

    properties = _build_properties(record, event, trace_id_property, span_id_property)
    body.values.append(KeyValue(key=PROPERTIES_KEY, value=AnyValue(kvlist_value=properties)))

    record.body.CopyFrom(AnyValue(kvlist_value=body))
