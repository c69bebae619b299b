"""Config commands — manage the status server address and defaults."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from ss14_status.client.errors import error_handler
from ss14_status.commands._common import FormatOpt
from ss14_status.config.constants import (
    CONFIG_BASE_ADDRESS_KEY,
    CONFIG_SECTION,
    ENV_BASE_ADDRESS,
)
from ss14_status.config.manager import ConfigManager
from ss14_status.output.formatter import output

app = typer.Typer(name="config", help="Manage the status server address and CLI defaults.")
console = Console()


def _get_manager() -> ConfigManager:
    return ConfigManager()


@app.command()
@error_handler
def show(fmt: FormatOpt = None) -> None:
    """Show the stored configuration and the address that would be used."""
    mgr = _get_manager()
    target = mgr.resolve_target()
    data = {
        "config_file": str(mgr.config_path),
        f"{CONFIG_SECTION}:{CONFIG_BASE_ADDRESS_KEY}": mgr.config.status_base_address,
        "default_format": mgr.config.default_format,
        "resolved_address": target.base_address,
        "resolved_from": target.source,
    }
    output(data, fmt or mgr.config.default_format, title="Configuration")


@app.command("set-address")
@error_handler
def set_address(
    url: Annotated[str, typer.Argument(help="Server base address, e.g. http://localhost:1212/")],
) -> None:
    """Store the status server base address."""
    mgr = _get_manager()
    stored = mgr.set_base_address(url)
    console.print(f"[green]Status base address set to {stored}[/]")
    console.print(
        f"[dim]{ENV_BASE_ADDRESS} and --url still take precedence when set.[/]"
    )


@app.command("unset-address")
@error_handler
def unset_address() -> None:
    """Remove the stored base address (falls back to the default)."""
    mgr = _get_manager()
    if mgr.unset_base_address():
        console.print("[green]Status base address removed.[/]")
    else:
        console.print("[yellow]No status base address configured.[/]")


@app.command("set-format")
@error_handler
def set_format(
    fmt: Annotated[str, typer.Argument(help="Default output format (table, json, yaml)")],
) -> None:
    """Set the default output format."""
    mgr = _get_manager()
    mgr.set_default_format(fmt)
    console.print(f"[green]Default output format set to '{fmt}'.[/]")


@app.command()
def path() -> None:
    """Print the config file location."""
    typer.echo(str(_get_manager().config_path))
