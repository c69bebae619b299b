"""Self-contained HTML snapshot of the status model."""

from __future__ import annotations

import html

from ss14_status.output.card import UNKNOWN_NAME
from ss14_status.ui.program import Model
from ss14_status.ui.view import DESCRIPTION, TITLE, detail_rows, target_line

_STYLE = """
body { font-family: 'Segoe UI', sans-serif; background: #f4f6fb; color: #1b2735; }
main.container { max-width: 720px; margin: 2rem auto; }
.status { font-weight: 600; }
.status-preview { display: block; margin: 1rem 0; border-radius: 16px; }
.status-card dt { font-weight: 600; }
.status-card pre { background: #090a0f; color: #c8d0ff; padding: 1rem; overflow-x: auto; }
""".strip()


def _details(model: Model) -> list[str]:
    if model.status is None:
        return []
    e = html.escape
    header = model.status.name if model.status.name is not None else UNKNOWN_NAME
    lines = ['<div class="status-card">', f"<h2>{e(header)}</h2>", "<dl>"]
    for label, value in detail_rows(model.status, model.retrieved_at).items():
        lines.append(f"<dt>{e(label)}</dt><dd>{e(value)}</dd>")
    lines.append("</dl>")
    if model.raw_json and model.raw_json.strip():
        lines += [
            "<details>",
            "<summary>Raw status JSON</summary>",
            f"<pre>{e(model.raw_json)}</pre>",
            "</details>",
        ]
    lines.append("</div>")
    return lines


def render_page(model: Model) -> str:
    e = html.escape
    body = [
        f"<h1>{e(TITLE)}</h1>",
        f"<p>{e(DESCRIPTION)}</p>",
        f'<p class="server-target">{e(target_line(model.server_base_address))}</p>',
        f'<p class="status">{e(model.status_message)}</p>',
    ]
    if model.image_data_uri:
        body.append(
            f'<img class="status-preview" src="{e(model.image_data_uri)}"'
            ' alt="Generated summary card for the connected SS14 server">'
        )
    body += _details(model)
    return "\n".join([
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{e(TITLE)}</title>",
        f"<style>\n{_STYLE}\n</style>",
        "</head>",
        "<body>",
        '<main class="container">',
        *body,
        "</main>",
        "</body>",
        "</html>",
        "",
    ])
