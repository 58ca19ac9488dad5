"""Timestamp projection onto OTLP nanosecond fields.

Both `time_unix_nano` (when the event happened) and `observed_time_unix_nano`
(when the mapper saw it) go through `to_unix_nano`, so they share epoch and
resolution. The observed time is the only non-deterministic field produced
by the mapper; callers and tests inject `clock` to control it.

Design Invariant:
    All datetimes are timezone-aware. Naive inputs are read as UTC, matching
    the `LogEvent` model normalization.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord

from ..models.log_event import LogEvent

__all__ = ["Clock", "utc_now", "to_unix_nano", "process_timestamps"]

Clock = Callable[[], datetime]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MICROSECOND = timedelta(microseconds=1)
_FIXED64_MAX = 2**64 - 1

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_unix_nano(dt: datetime) -> int:
    """Return nanoseconds since the Unix epoch (exact, microsecond resolution)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return ((dt - _EPOCH) // _ONE_MICROSECOND) * 1000


def _set_unix_nano(record: LogRecord, field_name: str, dt: datetime) -> None:
    nanos = to_unix_nano(dt)
    if not 0 <= nanos <= _FIXED64_MAX:
        # fixed64 field; 0 means "unknown" in OTLP
        logger.warning("Timestamp %s outside the fixed64 nanosecond range; %s left unset", dt.isoformat(), field_name)
        return
    setattr(record, field_name, nanos)


def process_timestamps(
    record: LogRecord, event: LogEvent, clock: Optional[Clock] = None
) -> None:
    """Populate event time and observed time on `record`."""
    _set_unix_nano(record, "time_unix_nano", event.timestamp)
    _set_unix_nano(record, "observed_time_unix_nano", (clock or utc_now)())
