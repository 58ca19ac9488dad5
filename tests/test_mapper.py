from __future__ import annotations

from datetime import datetime, timezone

import pytest
from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord

from otlp_log_mapper.mapper import (
    UnknownSeverityLevelError,
    map_log_event,
    to_unix_nano,
)
from otlp_log_mapper.mapping.orchestrator import to_log_record
from otlp_log_mapper.models.log_event import ExceptionInfo, LogEvent, LogEventLevel

TRACE_HEX = "4bf92f3577b34da6a3ce929d0e0e4736"
OBSERVED = datetime(2024, 1, 1, 0, 0, 5, tzinfo=timezone.utc)


def _fixed_clock() -> datetime:
    return OBSERVED


def _body_entries(record: LogRecord) -> dict:
    return {kv.key: kv.value for kv in record.body.kvlist_value.values}


def test_end_to_end_login_failed():
    event = LogEvent(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        level="Error",
        properties={"TraceId": TRACE_HEX, "user": "alice"},
    )
    record = map_log_event(event, "login failed", clock=_fixed_clock)

    assert record.time_unix_nano == 1_704_067_200_000_000_000
    assert record.observed_time_unix_nano == to_unix_nano(OBSERVED)
    assert record.severity_text == "Error"
    assert record.severity_number == 17
    assert record.trace_id == bytes.fromhex(TRACE_HEX)
    assert record.span_id == b""

    body = _body_entries(record)
    assert body["message"].string_value == "login failed"
    props = {kv.key: kv.value.string_value for kv in body["properties"].kvlist_value.values}
    assert props == {"user": "alice"}
    assert len(record.attributes) == 0


def test_end_to_end_invalid_span_id():
    event = LogEvent(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        level=LogEventLevel.INFORMATION,
        properties={"SpanId": "zzzz"},
    )
    record = map_log_event(event, clock=_fixed_clock)
    assert record.span_id == b""
    body = _body_entries(record)
    assert "message" not in body
    assert [kv.key for kv in body["properties"].kvlist_value.values] == []


def test_exception_lands_in_attributes():
    event = LogEvent(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        level=LogEventLevel.FATAL,
        exception=ExceptionInfo(type="OSError", message="disk full", stacktrace="tb"),
    )
    record = map_log_event(event, "crash")
    keys = [kv.key for kv in record.attributes]
    assert keys == ["exception.type", "exception.message", "exception.stacktrace"]
    assert record.severity_number == 21


def test_each_call_returns_a_fresh_record():
    event = LogEvent(timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc), level=LogEventLevel.DEBUG)
    first = map_log_event(event, "x")
    second = map_log_event(event, "x")
    assert first is not second
    assert first.body == second.body


def test_unknown_level_raises_from_orchestrator():
    event = LogEvent.model_construct(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        level=42,
        properties={},
        exception=None,
        message_template=None,
    )
    with pytest.raises(UnknownSeverityLevelError):
        to_log_record(event)


def test_settings_reserved_names_are_used(monkeypatch):
    monkeypatch.setenv("TRACE_ID_PROPERTY_NAME", "otel.trace_id")
    event = LogEvent(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        level=LogEventLevel.INFORMATION,
        properties={"otel.trace_id": TRACE_HEX, "TraceId": "plain"},
    )
    record = map_log_event(event)
    assert record.trace_id == bytes.fromhex(TRACE_HEX)
    props = [kv.key for kv in _body_entries(record)["properties"].kvlist_value.values]
    assert props == ["TraceId"]


def test_explicit_reserved_names_override_settings(monkeypatch):
    monkeypatch.setenv("TRACE_ID_PROPERTY_NAME", "otel.trace_id")
    event = LogEvent(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        level=LogEventLevel.INFORMATION,
        properties={"TraceId": TRACE_HEX},
    )
    record = map_log_event(event, trace_id_property="TraceId")
    assert record.trace_id == bytes.fromhex(TRACE_HEX)


def test_explicit_empty_reserved_name_is_not_replaced_by_settings():
    event = LogEvent(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        level=LogEventLevel.INFORMATION,
        properties={"TraceId": TRACE_HEX},
    )
    record = map_log_event(event, trace_id_property="")
    assert record.trace_id == b""
    props = [kv.key for kv in _body_entries(record)["properties"].kvlist_value.values]
    assert props == ["TraceId"]
