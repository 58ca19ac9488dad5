"""Projection of process resource metadata onto OTLP `KeyValue` lists.

The resulting list is what a `Resource` envelope carries as its
`attributes`; building the envelope itself is left to the exporter.
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from opentelemetry.proto.common.v1.common_pb2 import KeyValue

from .any_value import to_attribute_value

__all__ = ["to_resource_attributes"]

logger = logging.getLogger(__name__)


def to_resource_attributes(
    resource_attributes: Optional[Mapping[str, Any]],
) -> List[KeyValue]:
    """Convert resource metadata into `KeyValue`s in source iteration order.

    Entries whose value is neither a scalar nor a flat sequence of scalars
    are skipped. A missing mapping yields an empty list.
    """
    attributes: List[KeyValue] = []
    if resource_attributes is None:
        return attributes
    for key, value in resource_attributes.items():
        converted = to_attribute_value(value)
        if converted is None:
            logger.debug(
                "Skipping resource attribute %s with unsupported type %s",
                key,
                type(value).__name__,
            )
            continue
        attributes.append(KeyValue(key=key, value=converted))
    return attributes
