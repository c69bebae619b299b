"""Status endpoint HTTP client."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import httpx
from rich.console import Console

from ss14_status.client.errors import (
    ServerAPIError,
    ServerConnectionError,
)
from ss14_status.config.constants import STATUS_PATH
from ss14_status.config.models import ServerTarget
from ss14_status.models.status import StatusPayload, parse_status

MAX_DETAIL_LENGTH = 200


class StatusClient:
    """Synchronous HTTP client for an SS14 server's status endpoint."""

    def __init__(
        self,
        target: ServerTarget,
        *,
        trace_console: Console | None = None,
    ) -> None:
        self.target = target
        self.base_url = target.base_address
        self._trace_console = trace_console
        event_hooks: dict[str, list[Any]] = {"request": [], "response": []}
        if trace_console is not None:
            event_hooks["request"].append(self._trace_request)
            event_hooks["response"].append(self._trace_response)
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            event_hooks=event_hooks,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> StatusClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _trace_request(self, request: httpx.Request) -> None:
        if self._trace_console is None:
            return
        self._trace_console.print(f"[dim]→ {request.method} {request.url}[/]")

    def _trace_response(self, response: httpx.Response) -> None:
        if self._trace_console is None:
            return
        request = response.request
        self._trace_console.print(
            f"[dim]← {response.status_code} {request.method} {request.url}[/]"
        )

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        if response.is_success:
            return response
        detail = response.reason_phrase or ""
        body = response.text.strip()
        if body:
            detail = body[:MAX_DETAIL_LENGTH]
        raise ServerAPIError(response.status_code, detail)

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.get(path, **kwargs)
        except httpx.ConnectError as exc:
            raise ServerConnectionError(
                f"Cannot connect to server at {self.base_url}: {exc}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise ServerConnectionError(
                f"Request to {self.base_url} timed out: {exc}"
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise ServerConnectionError(
                f"Invalid URL for server at {self.base_url}: {exc}"
            ) from exc
        except httpx.TransportError as exc:
            raise ServerConnectionError(
                f"Request to {self.base_url} failed: {exc}"
            ) from exc
        return self._handle_response(response)

    def get_status_text(self) -> str:
        """Fetch the raw status document."""
        return self.get(STATUS_PATH).text

    def fetch_status(self) -> StatusPayload:
        """Fetch, parse and timestamp the server status."""
        raw_json = self.get_status_text()
        status = parse_status(raw_json)
        return StatusPayload(
            status=status,
            raw_json=raw_json,
            retrieved_at=datetime.now(timezone.utc),
        )
