"""Internal mapping subpackage for decomposed projection logic.

This package contains the implementation of log event to OTLP `LogRecord`
translation, decomposed into focused, single-responsibility modules. All
functions within this package are pure (no network or file I/O) apart from
reading the wall clock for the observed timestamp.

The public API lives in the top-level `mapper.py` facade. Callers should not
import directly from this package unless accessing internal helpers for
testing purposes.

Modules:
    orchestrator: Record assembly invoking the projections in fixed order
    time_utils: Event and observed timestamps as Unix nanoseconds
    severity: Front-end level to OTLP severity text/number
    body: Two-entry structured body plus trace/span id promotion
    exception: Exception diagnostics as semantic-convention attributes
    resource: Resource metadata as OTLP KeyValue list
    any_value: Total conversion of Python values to AnyValue
    id_utils: Reserved correlation property names and hex id parsing

Design Invariants:
    - Projections only add fields to the record they are given
    - Unrepresentable values are omitted, never replaced by placeholders
    - Reserved trace/span properties never reach the body properties
    - Module-level lookup tables are immutable
"""
from __future__ import annotations

from . import any_value as any_value  # noqa: F401
from . import id_utils as id_utils  # noqa: F401
from . import time_utils as time_utils  # noqa: F401

__all__ = ["any_value", "id_utils", "time_utils"]
