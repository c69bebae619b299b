"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console
from rich.markup import escape

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class StatusClientError(Exception):
    """Base exception for ss14-status."""

    exit_code: int = 1


class ServerConnectionError(StatusClientError):
    """Cannot reach the server (connect error, timeout, bad URL)."""

    exit_code = 2


class ServerAPIError(StatusClientError):
    """The status endpoint answered with a non-success HTTP status."""

    exit_code = 3

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"Server returned {status_code}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class StatusDocumentError(StatusClientError):
    """The response body is not a JSON document."""

    exit_code = 4


class ConfigurationError(StatusClientError):
    """Invalid or unusable configuration."""

    exit_code = 5


def error_handler(func: F) -> F:
    """Decorator that catches StatusClientError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except StatusClientError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
