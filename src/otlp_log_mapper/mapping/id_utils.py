"""Trace/span correlation identifiers carried as log event properties.

Upstream enrichment (see `otlp_log_mapper.enrichers`) stores the active trace
and span ids as hex strings under two reserved property names. The mapper
promotes them to the binary `trace_id` / `span_id` fields of the OTLP
`LogRecord`.

Constants:
    TRACE_ID_PROPERTY_NAME: reserved property holding a 32-hex-char trace id
    SPAN_ID_PROPERTY_NAME: reserved property holding a 16-hex-char span id

ID Format (parsed from the property value's string form):
    Trace id: exactly 32 hex characters -> 16 bytes
    Span id: exactly 16 hex characters -> 8 bytes
"""
from __future__ import annotations

import re
from typing import Any, Optional

TRACE_ID_PROPERTY_NAME = "TraceId"
SPAN_ID_PROPERTY_NAME = "SpanId"

TRACE_ID_HEX_LEN = 32
SPAN_ID_HEX_LEN = 16

_HEX_RE = re.compile(r"[0-9a-fA-F]+")

__all__ = [
    "TRACE_ID_PROPERTY_NAME",
    "SPAN_ID_PROPERTY_NAME",
    "to_trace_id",
    "to_span_id",
]


def _parse_hex_id(value: Any, hex_len: int) -> Optional[bytes]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    if len(value) != hex_len or not _HEX_RE.fullmatch(value):
        return None
    return bytes.fromhex(value)


def to_trace_id(value: Any) -> Optional[bytes]:
    """Decode a 32-hex-char trace id into 16 bytes, or None if invalid."""
    return _parse_hex_id(value, TRACE_ID_HEX_LEN)


def to_span_id(value: Any) -> Optional[bytes]:
    """Decode a 16-hex-char span id into 8 bytes, or None if invalid."""
    return _parse_hex_id(value, SPAN_ID_HEX_LEN)
