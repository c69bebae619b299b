"""Root Typer app — global options and command registration."""

from __future__ import annotations

from typing import Optional

import typer

from ss14_status import __version__
from ss14_status.commands import config_cmd, status_cmd

app = typer.Typer(
    name="ss14-status",
    help="Fetch and visualize Space Station 14 server status.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"ss14-status {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """SS14 status client — query a server's status endpoint and render it."""


# Register commands
app.command("show")(status_cmd.show)
app.command("image")(status_cmd.image)
app.command("page")(status_cmd.page)
app.add_typer(config_cmd.app, name="config")


def main() -> None:
    app()
