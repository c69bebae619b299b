"""Shared helpers for CLI commands — client factory and options."""

from __future__ import annotations

from typing import Annotated

import typer

from ss14_status.client.errors import err_console
from ss14_status.client.status import StatusClient
from ss14_status.config.constants import OUTPUT_FORMATS
from ss14_status.config.manager import ConfigManager
from ss14_status.config.models import ServerTarget

# Shared Typer option type aliases
UrlOpt = Annotated[
    str | None,
    typer.Option("--url", "-u", help="Server base address override"),
]
FormatOpt = Annotated[
    str | None,
    typer.Option("--format", "-f", help="Output format (table, json, yaml)"),
]
VerboseOpt = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Trace HTTP requests on stderr"),
]


def resolve(url: str | None, fmt: str | None = None) -> tuple[ServerTarget, str]:
    """Resolve the server target and output format from flags, env, and config."""
    mgr = ConfigManager()
    target = mgr.resolve_target(url)
    fmt = fmt or mgr.config.default_format
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format '{fmt}' (expected one of: {', '.join(OUTPUT_FORMATS)})"
        )
    return target, fmt


def make_client(target: ServerTarget, *, verbose: bool = False) -> StatusClient:
    """Create a StatusClient, optionally tracing requests to stderr."""
    return StatusClient(target, trace_console=err_console if verbose else None)
