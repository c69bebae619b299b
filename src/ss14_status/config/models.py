"""Pydantic models for client configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from ss14_status.config.constants import (
    DEFAULT_BASE_ADDRESS,
    OUTPUT_FORMATS,
    STATUS_PATH,
)


def normalize_base_address(value: str) -> str:
    """Return *value* with exactly one trailing slash."""
    return value.rstrip("/") + "/"


def _check_scheme(value: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ValueError("Base address must start with http:// or https://")
    return normalize_base_address(value)


class ServerTarget(BaseModel):
    """The status server a client talks to."""

    base_address: str = Field(
        default=DEFAULT_BASE_ADDRESS,
        description="Server base address, e.g. http://localhost:1212/",
    )
    source: str = Field(
        default="default",
        description="Where the address came from (flag, env, config, default)",
    )

    @field_validator("base_address")
    @classmethod
    def validate_base_address(cls, v: str) -> str:
        return _check_scheme(v)

    @property
    def status_url(self) -> str:
        return f"{self.base_address}{STATUS_PATH}"


class ClientConfig(BaseModel):
    """Root configuration model."""

    status_base_address: str | None = None
    default_format: str = "table"

    @field_validator("status_base_address")
    @classmethod
    def validate_status_base_address(cls, v: str | None) -> str | None:
        if not v:
            return None
        return _check_scheme(v)

    @field_validator("default_format")
    @classmethod
    def validate_default_format(cls, v: str) -> str:
        if v not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format '{v}'"
                f" (expected one of: {', '.join(OUTPUT_FORMATS)})"
            )
        return v
