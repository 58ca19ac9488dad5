"""Conversion of arbitrary Python values into OTLP `AnyValue` messages.

`AnyValue` is a closed variant: string, bool, int (int64), double, bytes,
array of AnyValue, or key/value list of AnyValue. Conversion is total: every
function here returns ``None`` for a value outside that variant instead of
raising, so callers simply skip the field.

Supported inputs:
    str                         -> string_value
    bool                        -> bool_value (checked before int)
    int (int64 range)           -> int_value
    float                       -> double_value
    bytes / bytearray / memory  -> bytes_value
    list / tuple / set          -> array_value (unrepresentable items skipped)
    Mapping                     -> kvlist_value (scalar keys stringified,
                                   first entry wins on a key collision)
    pydantic BaseModel          -> kvlist_value of its dumped fields

Traversal:
    Bounded depth 25; anything nested deeper is unrepresentable.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List, Optional

from opentelemetry.proto.common.v1.common_pb2 import (
    AnyValue,
    ArrayValue,
    KeyValue,
    KeyValueList,
)
from pydantic import BaseModel

__all__ = [
    "MAX_DEPTH",
    "to_primitive",
    "to_attribute_value",
    "to_any_value",
    "new_string_attribute",
]

MAX_DEPTH = 25

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

logger = logging.getLogger(__name__)


def to_primitive(value: Any) -> Optional[AnyValue]:
    """Convert a scalar to `AnyValue`; return None for non-scalars."""
    if isinstance(value, str):
        return AnyValue(string_value=value)
    if isinstance(value, bool):
        return AnyValue(bool_value=value)
    if isinstance(value, int):
        if _INT64_MIN <= value <= _INT64_MAX:
            return AnyValue(int_value=value)
        return None
    if isinstance(value, float):
        return AnyValue(double_value=value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return AnyValue(bytes_value=bytes(value))
    return None


def to_attribute_value(value: Any) -> Optional[AnyValue]:
    """Convert a scalar or a flat sequence of scalars.

    This is the value shape OpenTelemetry allows for resource attributes.
    Items of a sequence that are not scalars are skipped.
    """
    if isinstance(value, (list, tuple)):
        items = [v for v in (to_primitive(item) for item in value) if v is not None]
        return AnyValue(array_value=ArrayValue(values=items))
    return to_primitive(value)


def _mapping_key(key: Any) -> Optional[str]:
    if isinstance(key, str):
        return key
    if isinstance(key, (bool, int, float)):
        return str(key)
    return None


def _to_key_values(mapping: Mapping, depth: int) -> List[KeyValue]:
    values: List[KeyValue] = []
    seen = set()
    for raw_key, raw_value in mapping.items():
        key = _mapping_key(raw_key)
        if key is None:
            logger.debug("Skipping mapping entry with unsupported key type %s", type(raw_key).__name__)
            continue
        if key in seen:
            logger.debug("Skipping mapping entry with duplicate key %r", key)
            continue
        converted = _convert(raw_value, depth + 1)
        if converted is None:
            continue
        seen.add(key)
        values.append(KeyValue(key=key, value=converted))
    return values


def _convert(value: Any, depth: int) -> Optional[AnyValue]:
    if depth > MAX_DEPTH:
        logger.debug("Value nested deeper than %d levels omitted", MAX_DEPTH)
        return None
    primitive = to_primitive(value)
    if primitive is not None:
        return primitive
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="python")
    if isinstance(value, Mapping):
        return AnyValue(kvlist_value=KeyValueList(values=_to_key_values(value, depth)))
    if isinstance(value, (list, tuple, set, frozenset)):
        items = []
        for item in value:
            converted = _convert(item, depth + 1)
            if converted is not None:
                items.append(converted)
        return AnyValue(array_value=ArrayValue(values=items))
    return None


def to_any_value(value: Any) -> Optional[AnyValue]:
    """Convert any supported value (including nested structures) to `AnyValue`.

    Returns:
        The converted value, or None when the value (not merely one of its
        nested items) cannot be represented.
    """
    return _convert(value, 0)


def new_string_attribute(key: str, value: str) -> KeyValue:
    return KeyValue(key=key, value=AnyValue(string_value=value))
