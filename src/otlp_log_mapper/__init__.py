"""Package initialization for otlp-log-mapper.

Translates structured log events into OpenTelemetry Logs protocol
`LogRecord` messages. See `otlp_log_mapper.mapper` for the public API.
"""

__all__ = []
