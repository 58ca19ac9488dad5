from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

import pytest
from opentelemetry.proto.common.v1.common_pb2 import AnyValue
from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord

from otlp_log_mapper.mapping.body import MESSAGE_KEY, PROPERTIES_KEY, process_body
from otlp_log_mapper.models.log_event import LogEvent, LogEventLevel

TRACE_HEX = "4bf92f3577b34da6a3ce929d0e0e4736"
SPAN_HEX = "00f067aa0ba902b7"


def _event(properties: Dict[str, Any]) -> LogEvent:
    return LogEvent(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        level=LogEventLevel.INFORMATION,
        properties=properties,
    )


def _unwrap(av: AnyValue) -> Any:
    kind = av.WhichOneof("value")
    if kind == "kvlist_value":
        return {kv.key: _unwrap(kv.value) for kv in av.kvlist_value.values}
    if kind == "array_value":
        return [_unwrap(v) for v in av.array_value.values]
    return getattr(av, kind) if kind else None


def _body(properties: Dict[str, Any], message=None, **kwargs) -> tuple[LogRecord, dict]:
    record = LogRecord()
    process_body(record, _event(properties), message, **kwargs)
    return record, _unwrap(record.body)


def test_body_has_message_and_properties():
    _, body = _body({"user": "alice", "attempts": 3}, "login failed")
    assert list(body) == [MESSAGE_KEY, PROPERTIES_KEY]
    assert body[MESSAGE_KEY] == "login failed"
    assert body[PROPERTIES_KEY] == {"user": "alice", "attempts": 3}


@pytest.mark.parametrize("message", [None, "", "   ", "\t\n"])
def test_blank_message_is_absent(message):
    _, body = _body({}, message)
    assert MESSAGE_KEY not in body


def test_message_keeps_internal_whitespace():
    _, body = _body({}, "a  b\tc")
    assert body[MESSAGE_KEY] == "a  b\tc"


def test_properties_present_when_empty():
    record, body = _body({})
    assert body == {PROPERTIES_KEY: {}}
    props = record.body.kvlist_value.values[0].value
    assert props.WhichOneof("value") == "kvlist_value"


def test_valid_trace_id_is_promoted():
    record, body = _body({"TraceId": TRACE_HEX, "user": "alice"})
    assert record.trace_id == bytes.fromhex(TRACE_HEX)
    assert len(record.trace_id) == 16
    assert "TraceId" not in body[PROPERTIES_KEY]


def test_valid_span_id_is_promoted():
    record, body = _body({"SpanId": SPAN_HEX})
    assert record.span_id == bytes.fromhex(SPAN_HEX)
    assert len(record.span_id) == 8
    assert "SpanId" not in body[PROPERTIES_KEY]


@pytest.mark.parametrize(
    "value",
    ["zzzz", TRACE_HEX[:-1], TRACE_HEX + "0", 12345, None, "g" * 32],
)
def test_invalid_trace_id_is_dropped(value):
    record, body = _body({"TraceId": value, "user": "alice"})
    assert record.trace_id == b""
    assert body[PROPERTIES_KEY] == {"user": "alice"}


@pytest.mark.parametrize("value", ["zzzz", SPAN_HEX[:-1], TRACE_HEX])
def test_invalid_span_id_is_dropped(value):
    record, body = _body({"SpanId": value})
    assert record.span_id == b""
    assert "SpanId" not in body[PROPERTIES_KEY]


def test_unrepresentable_property_is_dropped():
    _, body = _body({"handle": object(), "missing": None, "ok": True})
    assert body[PROPERTIES_KEY] == {"ok": True}


def test_custom_reserved_names():
    record, body = _body(
        {"trace.id": TRACE_HEX, "TraceId": "kept-as-regular"},
        trace_id_property="trace.id",
    )
    assert record.trace_id == bytes.fromhex(TRACE_HEX)
    assert body[PROPERTIES_KEY] == {"TraceId": "kept-as-regular"}


def test_nested_properties_are_structured():
    _, body = _body({"order": {"id": "o-1", "items": [{"sku": "a", "qty": 2}]}})
    assert body[PROPERTIES_KEY]["order"] == {"id": "o-1", "items": [{"sku": "a", "qty": 2}]}


def test_all_zero_ids_decode_like_any_other_hex():
    record, body = _body({"TraceId": "0" * 32, "SpanId": "0" * 16})
    assert record.trace_id == bytes(16)
    assert record.span_id == bytes(8)
    assert body[PROPERTIES_KEY] == {}


def test_non_string_id_uses_its_string_form():
    numeric_span = 1234567890123456
    record, body = _body({"SpanId": numeric_span})
    assert record.span_id == bytes.fromhex(str(numeric_span))
    assert "SpanId" not in body[PROPERTIES_KEY]
