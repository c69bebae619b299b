"""Output dispatcher — renders data as a table, JSON, or YAML."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console

from ss14_status.output.tables import kv_table

console = Console()


def _plain(data: Any) -> Any:
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    return data


def output_json(data: Any) -> None:
    """Print data as formatted JSON."""
    console.print_json(json.dumps(_plain(data), indent=2, default=str))


def output_yaml(data: Any) -> None:
    """Print data as YAML."""
    import yaml

    console.print(
        yaml.safe_dump(_plain(data), default_flow_style=False, sort_keys=False),
        end="",
        markup=False,
        soft_wrap=True,
    )


def output_table(data: Any, *, title: str | None = None) -> None:
    """Print data as a Rich table."""
    data = _plain(data)
    if isinstance(data, dict):
        console.print(kv_table(data, title=title))
    else:
        console.print(data)


def output(data: Any, fmt: str = "table", *, title: str | None = None) -> None:
    """Dispatch output to the appropriate formatter."""
    if fmt == "json":
        output_json(data)
    elif fmt == "yaml":
        output_yaml(data)
    else:
        output_table(data, title=title)
