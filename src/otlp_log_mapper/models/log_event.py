"""Pydantic models for the structured log events consumed by the mapper.

A `LogEvent` is what an application-side logging facility hands over once a
call has been captured: a point in time, a severity level, a bag of named
properties and optionally an exception. The models only validate shape; all
OTLP-specific translation lives in the `mapping` package.
"""
from __future__ import annotations

import traceback
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["LogEventLevel", "ExceptionInfo", "LogEvent"]


class LogEventLevel(IntEnum):
    """Ordered severity scale of the logging front-end."""

    VERBOSE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5


def _qualified_type_name(exc_type: type) -> str:
    module = getattr(exc_type, "__module__", None)
    if not module or module == "builtins":
        return exc_type.__qualname__
    return f"{module}.{exc_type.__qualname__}"


class ExceptionInfo(BaseModel):
    """Diagnostic snapshot of an exception attached to a log event.

    `type` is the exception's identity string (module-qualified class name,
    bare name for builtins). `stacktrace` is the full rendered traceback,
    including `__cause__` / `__context__` chains.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    message: str = ""
    stacktrace: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExceptionInfo":
        rendered = traceback.format_exception(type(exc), exc, exc.__traceback__)
        return cls(
            type=_qualified_type_name(type(exc)),
            message=str(exc),
            stacktrace="".join(rendered),
        )


class LogEvent(BaseModel):
    """A single structured log event.

    Naive timestamps are interpreted as UTC so every event carries an
    unambiguous point in time. A live exception may be passed directly; it is
    captured into an `ExceptionInfo` at construction.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    level: LogEventLevel
    properties: Dict[str, Any] = Field(default_factory=dict)
    exception: Optional[ExceptionInfo] = None
    message_template: Optional[str] = None

    @field_validator("timestamp", mode="after")
    @classmethod
    def ensure_utc_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("level", mode="before")
    @classmethod
    def parse_level_name(cls, v: Any) -> Any:
        """Accept level names case-insensitively (e.g. ``"Error"``, ``"error"``)."""
        if isinstance(v, str):
            name = v.strip().upper()
            if name in LogEventLevel.__members__:
                return LogEventLevel[name]
        return v

    @field_validator("exception", mode="before")
    @classmethod
    def capture_exception(cls, v: Any) -> Any:
        if isinstance(v, BaseException):
            return ExceptionInfo.from_exception(v)
        return v
