"""Server status models and the status document parser.

Every field of :class:`ServerStatus` is optional. A field is only populated
when the source JSON carries it with the expected type; anything else is
treated as absent rather than defaulted or reported.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict

from ss14_status.client.errors import StatusDocumentError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# .NET round-trip timestamps carry 7 fractional digits; datetime keeps 6
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")

# Longest int32 literal is "-2147483648"; longer digit runs are never in range
MAX_INT_LITERAL = 11


class _OversizedInt:
    """Stands in for an integer literal too long to be an int32."""


_OVERSIZED = _OversizedInt()


def _parse_int(literal: str) -> int | _OversizedInt:
    if len(literal) > MAX_INT_LITERAL:
        return _OVERSIZED
    return int(literal)


class ServerStatus(BaseModel):
    """Status reported by an SS14 server's ``/status`` endpoint."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    map: str | None = None
    players: int | None = None
    soft_max_players: int | None = None
    panic_bunker: bool | None = None
    run_level: int | None = None
    round_id: int | None = None
    round_start_time: datetime | None = None

    @classmethod
    def from_json(cls, raw_json: str) -> ServerStatus:
        return parse_status(raw_json)


class StatusPayload(BaseModel):
    """A parsed status together with its source text and fetch time."""

    model_config = ConfigDict(frozen=True)

    status: ServerStatus
    raw_json: str
    retrieved_at: datetime


def _get_string(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _get_int(value: Any) -> int | None:
    # bool is an int subclass; floats such as 5.0 are not integers on the wire
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value


def _get_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def _get_instant(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        timestamp = datetime.fromisoformat(_EXCESS_FRACTION.sub(r"\1", value.strip()))
    except ValueError:
        return None
    try:
        if timestamp.tzinfo is None:
            # No offset given: read it as viewer-local time
            timestamp = timestamp.astimezone()
        # Must stay representable in UTC and in the viewer's zone
        timestamp.astimezone(timezone.utc)
        timestamp.astimezone()
    except (OverflowError, ValueError, OSError):
        return None
    return timestamp


_FIELDS = {
    "name": _get_string,
    "map": _get_string,
    "players": _get_int,
    "soft_max_players": _get_int,
    "panic_bunker": _get_bool,
    "run_level": _get_int,
    "round_id": _get_int,
    "round_start_time": _get_instant,
}


def parse_status(raw_json: str) -> ServerStatus:
    """Parse a status document into a :class:`ServerStatus`.

    Raises :class:`StatusDocumentError` only when *raw_json* is not JSON at
    all. Missing, null or mistyped fields come back as ``None``.
    """
    try:
        document = json.loads(raw_json, parse_int=_parse_int)
    except (ValueError, TypeError, RecursionError) as exc:
        raise StatusDocumentError(f"Status response is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        return ServerStatus()
    values: dict[str, Any] = {}
    for key, extract in _FIELDS.items():
        if key in document:
            values[key] = extract(document[key])
    return ServerStatus(**values)
