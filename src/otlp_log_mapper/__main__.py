"""Main CLI entry point for otlp-log-mapper.

This module provides a command-line interface using Typer for inspecting the
mapping without wiring up an exporter:

1.  `convert` reads JSON-lines log events and prints each mapped OTLP
    `LogRecord` in OTLP/JSON form.
2.  `resource` prints the resource attributes this process would report.

Input line shape for `convert`::

    {"timestamp": "2024-01-01T00:00:00Z", "level": "Error",
     "properties": {"TraceId": "...", "user": "alice"},
     "exception": {"type": "ValueError", "message": "...", "stacktrace": "..."},
     "rendered_message": "login failed"}
"""
from __future__ import annotations

import base64
import json
import logging
import sys
from typing import Any, Dict, Optional

import typer
from google.protobuf.json_format import MessageToDict
from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord
from opentelemetry.sdk.resources import Resource
from pydantic import ValidationError

from .config import get_settings
from .mapper import map_log_event, map_resource_attributes
from .models.log_event import LogEvent

app = typer.Typer(help="Structured log event to OTLP LogRecord mapper CLI")
logger = logging.getLogger(__name__)


class _InputLine(LogEvent):
    """A log event as read by `convert`, plus its pre-rendered message."""

    rendered_message: Optional[str] = None


def _record_to_json(record: LogRecord) -> Dict[str, Any]:
    """Render a LogRecord as OTLP/JSON.

    OTLP/JSON encodes trace and span ids as lowercase hex rather than the
    protobuf JSON default of base64.
    """
    data = MessageToDict(record)
    for key in ("traceId", "spanId"):
        if key in data:
            data[key] = base64.b64decode(data[key]).hex()
    return data


def _open_input(path: str):
    if path == "-":
        return sys.stdin
    return open(path, "r", encoding="utf-8")


@app.callback()
def main() -> None:  # pragma: no cover - simple callback
    """otlp-log-mapper CLI.

    Use a subcommand like 'convert' to map log events.
    """
    pass


@app.command(help="Map JSON-lines log events to OTLP/JSON LogRecords (one per line).")
def convert(
    path: str = typer.Argument("-", help="Input file of JSON-lines events ('-' for stdin)"),
    trace_id_property: Optional[str] = typer.Option(
        None, help="Override TRACE_ID_PROPERTY_NAME for this run"
    ),
    span_id_property: Optional[str] = typer.Option(
        None, help="Override SPAN_ID_PROPERTY_NAME for this run"
    ),
) -> None:
    """Convert every line of `path`, skipping and reporting malformed ones."""
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    converted = 0
    skipped = 0
    try:
        stream = _open_input(path)
    except OSError as e:
        logger.error("Cannot read input %s: %s", path, e)
        typer.echo(f"Cannot read input {path}: {e.strerror or e}", err=True)
        raise typer.Exit(code=1) from e
    try:
        for line_no, line in enumerate(stream, start=1):
            if not line.strip():
                continue
            try:
                item = _InputLine.model_validate_json(line)
            except ValidationError as e:
                logger.warning("Skipping line %d: %s", line_no, e)
                skipped += 1
                continue
            record = map_log_event(
                item,
                item.rendered_message,
                trace_id_property=trace_id_property,
                span_id_property=span_id_property,
            )
            typer.echo(json.dumps(_record_to_json(record), separators=(",", ":")))
            converted += 1
    finally:
        if stream is not sys.stdin:
            stream.close()

    logger.info("Converted %d event(s), skipped %d", converted, skipped)
    if skipped:
        raise typer.Exit(code=1)


@app.command(help="Print the OTLP resource attributes for the configured process.")
def resource() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)
    res = Resource.create(settings.resource_attributes())
    attributes = map_resource_attributes(res.attributes)
    typer.echo(json.dumps([MessageToDict(kv) for kv in attributes], indent=2))


__all__ = ["app"]


if __name__ == "__main__":  # pragma: no cover
    app()
