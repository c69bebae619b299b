"""Rich rendering of the status model."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console, Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from ss14_status.models.status import ServerStatus
from ss14_status.output.card import (
    DETAIL_FORMAT,
    UNKNOWN_NAME,
    to_local,
)
from ss14_status.output.tables import kv_table
from ss14_status.ui.program import Model

TITLE = "SS14 Server Status"
DESCRIPTION = (
    "Fetches live status information from a Space Station 14 server"
    " and visualizes it."
)


def target_line(base_address: str) -> str:
    if not base_address.strip():
        return "Targeting an SS14 server."
    return f"Targeting the SS14 server at {base_address}."


def detail_rows(status: ServerStatus, retrieved_at: datetime | None) -> dict[str, str]:
    """Only the fields the server actually reported."""
    rows: dict[str, str] = {}
    if status.map is not None:
        rows["Map"] = status.map
    if status.players is not None and status.soft_max_players is not None:
        rows["Players"] = f"{status.players} / {status.soft_max_players}"
    elif status.players is not None:
        rows["Players"] = str(status.players)
    elif status.soft_max_players is not None:
        rows["Players"] = f"? / {status.soft_max_players}"
    if status.round_id is not None:
        rows["Round"] = str(status.round_id)
    if status.run_level is not None:
        rows["Run level"] = str(status.run_level)
    if status.panic_bunker is not None:
        rows["Panic bunker"] = "Enabled" if status.panic_bunker else "Disabled"
    if status.round_start_time is not None:
        rows["Round start"] = to_local(status.round_start_time).strftime(DETAIL_FORMAT)
    if retrieved_at is not None:
        rows["Last updated"] = to_local(retrieved_at).strftime(DETAIL_FORMAT)
    return rows


def render_details(model: Model, *, show_raw: bool = False) -> RenderableType | None:
    if model.status is None:
        return None
    status = model.status
    header = status.name if status.name is not None else UNKNOWN_NAME
    parts: list[RenderableType] = [
        kv_table(
            {escape(k): escape(v) for k, v in detail_rows(status, model.retrieved_at).items()},
            title=escape(header),
        ),
    ]
    if show_raw and model.raw_json and model.raw_json.strip():
        parts.append(
            Panel(
                Syntax(model.raw_json, "json", word_wrap=True),
                title="Raw status JSON",
                title_align="left",
            )
        )
    return Group(*parts)


def render(model: Model, *, show_raw: bool = False) -> RenderableType:
    parts: list[RenderableType] = [
        Text(TITLE, style="bold"),
        Text(DESCRIPTION),
        Text(target_line(model.server_base_address), style="dim"),
        Text(model.status_message, style="red" if _failed(model) else "green"),
    ]
    details = render_details(model, show_raw=show_raw)
    if details is not None:
        parts.append(details)
    return Group(*parts)


def _failed(model: Model) -> bool:
    return model.status is None and not model.loading and model.request_id > 0


def show(console: Console, model: Model, *, show_raw: bool = False) -> None:
    console.print(render(model, show_raw=show_raw))
