"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from environment variables and a `.env` file. It covers the reserved property
names used for trace correlation, the resource metadata reported by the CLI,
and the logging level.

The `get_settings` function provides a cached, singleton instance of the
configuration, ensuring consistent settings throughout the application.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict

from .mapping.id_utils import SPAN_ID_PROPERTY_NAME, TRACE_ID_PROPERTY_NAME


class Settings(BaseSettings):
    """Defines all application configuration parameters.

    Values are read from environment variables or a `.env` file. Reserved
    property names must match whatever enrichment populates them upstream.
    """

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # ---------------- Trace correlation -----------------
    TRACE_ID_PROPERTY_NAME: str = Field(
        default=TRACE_ID_PROPERTY_NAME,
        description="Event property promoted to LogRecord.trace_id (32 hex chars)",
    )
    SPAN_ID_PROPERTY_NAME: str = Field(
        default=SPAN_ID_PROPERTY_NAME,
        description="Event property promoted to LogRecord.span_id (16 hex chars)",
    )

    # ---------------- Resource metadata -----------------
    SERVICE_NAME: Optional[str] = Field(
        default=None, description="Optional service.name resource attribute"
    )
    # Use Any type to prevent Pydantic Settings JSON decoding; validator converts to dict
    RESOURCE_ATTRIBUTES: Any = Field(
        default_factory=dict,
        description=(
            "Comma-separated key=value pairs added to the resource, e.g. "
            "RESOURCE_ATTRIBUTES=deployment.environment=prod,host.name=web-1. "
            "Entries without '=' are ignored."
        ),
    )

    @field_validator("RESOURCE_ATTRIBUTES", mode="before")
    @classmethod
    def parse_key_value_pairs(cls, v: Any) -> Dict[str, str]:
        """Parse ``k=v,k2=v2`` into a dict of stripped strings.

        Supports both direct dict input (from code/tests) and the
        comma-separated form (from environment variables).
        """
        if isinstance(v, dict):
            return {str(k).strip(): str(val).strip() for k, val in v.items() if str(k).strip()}
        if not isinstance(v, str):
            return {}
        pairs: Dict[str, str] = {}
        for item in v.split(","):
            key, sep, value = item.partition("=")
            if not sep or not key.strip():
                continue
            pairs[key.strip()] = value.strip()
        return pairs

    @field_validator("SERVICE_NAME", mode="before")
    @classmethod
    def blank_service_name_to_none(cls, v: Any) -> Optional[str]:
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None

    @model_validator(mode="after")
    def check_reserved_names(self) -> "Settings":
        """Reserved property names must be non-blank and distinct."""
        trace_name = self.TRACE_ID_PROPERTY_NAME.strip()
        span_name = self.SPAN_ID_PROPERTY_NAME.strip()
        if not trace_name or not span_name:
            raise ValueError("TRACE_ID_PROPERTY_NAME and SPAN_ID_PROPERTY_NAME must not be blank")
        if trace_name == span_name:
            raise ValueError("TRACE_ID_PROPERTY_NAME and SPAN_ID_PROPERTY_NAME must differ")
        self.TRACE_ID_PROPERTY_NAME = trace_name
        self.SPAN_ID_PROPERTY_NAME = span_name
        return self

    def resource_attributes(self) -> Dict[str, Any]:
        """Resource metadata configured for this process."""
        attrs: Dict[str, Any] = dict(self.RESOURCE_ATTRIBUTES)
        if self.SERVICE_NAME:
            attrs["service.name"] = self.SERVICE_NAME
        return attrs


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the application settings."""
    return Settings()
