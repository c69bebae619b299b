"""Pydantic data models for the SS14 status endpoint."""

from ss14_status.models.status import ServerStatus, StatusPayload, parse_status

__all__ = [
    "ServerStatus",
    "StatusPayload",
    "parse_status",
]
