"""Status commands — show, image, page."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from ss14_status.client.errors import error_handler
from ss14_status.commands._common import (
    FormatOpt,
    UrlOpt,
    VerboseOpt,
    make_client,
    resolve,
)
from ss14_status.output.card import build_card
from ss14_status.output.formatter import output
from ss14_status.output.page import render_page
from ss14_status.output.svg import encode_data_uri, render_svg
from ss14_status.ui import view
from ss14_status.ui.program import Model, StatusProgram

console = Console()


def _snapshot(model: Model, *, include_raw: bool) -> dict[str, Any]:
    data: dict[str, Any] = {
        "status_message": model.status_message,
        "server_base_address": model.server_base_address,
        "retrieved_at": model.retrieved_at.isoformat() if model.retrieved_at else None,
        "summary": None,
        "status": None,
    }
    if model.status is not None and model.retrieved_at is not None:
        data["summary"] = build_card(model.status, model.retrieved_at).summary
        data["status"] = model.status.model_dump(mode="json")
    if include_raw:
        data["raw_json"] = model.raw_json
    return data


def _emit(model: Model, fmt: str, *, raw: bool) -> None:
    if fmt == "table":
        view.show(console, model, show_raw=raw)
    else:
        output(_snapshot(model, include_raw=raw), fmt)


def _exit_code(program: StatusProgram) -> int:
    if program.last_error is None:
        return 0
    return getattr(program.last_error, "exit_code", 1)


@error_handler
def show(
    url: UrlOpt = None,
    fmt: FormatOpt = None,
    raw: Annotated[
        bool, typer.Option("--raw", "-r", help="Include the raw JSON response"),
    ] = False,
    watch: Annotated[
        bool, typer.Option("--watch", "-w", help="Offer to refresh after each fetch"),
    ] = False,
    verbose: VerboseOpt = False,
) -> None:
    """Fetch the server status and show it."""
    target, fmt = resolve(url, fmt)
    with make_client(target, verbose=verbose) as client:
        program = StatusProgram(client)
        _emit(program.start(), fmt, raw=raw)
        while watch and Confirm.ask("Refresh status?", default=True):
            _emit(program.refresh(), fmt, raw=raw)
    code = _exit_code(program)
    if code:
        raise typer.Exit(code)


@error_handler
def image(
    url: UrlOpt = None,
    output_file: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Write the SVG card to this file"),
    ] = None,
    data_uri: Annotated[
        bool, typer.Option("--data-uri", help="Print a data: URI instead of SVG"),
    ] = False,
    verbose: VerboseOpt = False,
) -> None:
    """Render the status card as SVG."""
    target, _ = resolve(url)
    with make_client(target, verbose=verbose) as client:
        payload = client.fetch_status()
    svg = render_svg(payload.status, payload.retrieved_at)
    if output_file:
        dest = Path(output_file)
        dest.write_text(svg, encoding="utf-8")
        console.print(f"[green]Status card saved to {dest}[/]")
    elif data_uri:
        typer.echo(encode_data_uri(svg))
    else:
        typer.echo(svg, nl=False)


@error_handler
def page(
    url: UrlOpt = None,
    output_file: Annotated[
        str,
        typer.Option("--output", "-o", help="Output file path"),
    ] = "ss14-status.html",
    verbose: VerboseOpt = False,
) -> None:
    """Write a self-contained HTML status page."""
    target, _ = resolve(url)
    with make_client(target, verbose=verbose) as client:
        program = StatusProgram(client)
        model = program.start()
    dest = Path(output_file)
    dest.write_text(render_page(model), encoding="utf-8")
    console.print(f"[green]Status page saved to {dest}[/] ({escape(model.status_message)})")
    code = _exit_code(program)
    if code:
        raise typer.Exit(code)
