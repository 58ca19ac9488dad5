"""Input data models for the log event mapper."""
from __future__ import annotations

from .log_event import ExceptionInfo, LogEvent, LogEventLevel

__all__ = ["ExceptionInfo", "LogEvent", "LogEventLevel"]
