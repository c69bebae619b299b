"""SVG summary card and its data URI encoding."""

from __future__ import annotations

import base64
import html
from datetime import datetime

from ss14_status.models.status import ServerStatus
from ss14_status.output.card import build_card

CARD_WIDTH = 360
CARD_HEIGHT = 200
DATA_URI_PREFIX = "data:image/svg+xml;base64,"

_FONT = "'Segoe UI', sans-serif"

# (y, fill, font-size, font-weight or None)
_ROWS = [
    (48, "#ffffff", 22, "600"),
    (78, "#b3c5ff", 16, None),
    (106, "#ffe082", 18, "500"),
    (134, "#c8d0ff", 14, None),
    (156, "#c8ffc8", 14, None),
    (178, "#8aa0ff", 12, None),
]


def _text_row(y: int, fill: str, size: int, weight: str | None, content: str) -> str:
    weight_attr = f' font-weight="{weight}"' if weight else ""
    return (
        f'  <text x="24" y="{y}" fill="{fill}" font-family="{_FONT}"'
        f' font-size="{size}"{weight_attr}>{content}</text>'
    )


def render_svg(status: ServerStatus, retrieved_at: datetime) -> str:
    """Render the 360x200 status card.

    Values come from a remote server, so every interpolated string is
    entity-escaped before it lands in the markup.
    """
    card = build_card(status, retrieved_at)
    e = html.escape
    lines = [
        e(card.header),
        f"Map: {e(card.map)}",
        e(card.players),
        f"Round #{e(card.round_id)} · {e(card.run_level)}",
        e(card.bunker),
        f"Round start: {e(card.round_start)} · Retrieved: {e(card.retrieved)}",
    ]
    rows = [
        _text_row(y, fill, size, weight, content)
        for (y, fill, size, weight), content in zip(_ROWS, lines)
    ]
    return "\n".join([
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{CARD_WIDTH}"'
        f' height="{CARD_HEIGHT}" viewBox="0 0 {CARD_WIDTH} {CARD_HEIGHT}">',
        "  <defs>",
        '    <linearGradient id="status-bg" x1="0" x2="1" y1="0" y2="1">',
        '      <stop offset="0%" stop-color="#1b2735" />',
        '      <stop offset="100%" stop-color="#090a0f" />',
        "    </linearGradient>",
        "  </defs>",
        f'  <rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}"'
        ' fill="url(#status-bg)" rx="16" />',
        *rows,
        "</svg>",
        "",
    ])


def encode_data_uri(svg: str) -> str:
    return DATA_URI_PREFIX + base64.b64encode(svg.encode("utf-8")).decode("ascii")


def to_data_uri(status: ServerStatus, retrieved_at: datetime) -> str:
    """Render the card and embed it as a ``data:image/svg+xml`` URI."""
    return encode_data_uri(render_svg(status, retrieved_at))
