"""Human-readable descriptions of a server status."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from ss14_status.models.status import ServerStatus

UNKNOWN_NAME = "Unknown SS14 server"
UNKNOWN_MAP = "Unknown map"
UNAVAILABLE = "Unavailable"

RUN_LEVEL_LABELS = {
    0: "Initializing",
    1: "Lobby",
    2: "Pre-round",
    3: "In round",
}

ROUND_START_FORMAT = "%Y-%m-%d %H:%M"
RETRIEVED_FORMAT = "%H:%M:%S"
DETAIL_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


def to_local(timestamp: datetime) -> datetime:
    """Convert *timestamp* to the viewer's local zone."""
    return timestamp.astimezone()


def describe_players(players: int | None, soft_max: int | None) -> str:
    if players is not None and soft_max is not None:
        return f"{players} / {soft_max} players"
    if players is not None:
        return f"{players} players"
    if soft_max is not None:
        return f"? / {soft_max} players"
    return "Player count unavailable"


def describe_run_level(run_level: int | None) -> str:
    if run_level is None:
        return "Run level unknown"
    return RUN_LEVEL_LABELS.get(run_level, f"Run level {run_level}")


def describe_bunker(bunker: bool | None) -> str:
    if bunker is None:
        return "Panic bunker status unknown"
    return "Panic bunker enabled" if bunker else "Panic bunker disabled"


class StatusCard(BaseModel):
    """Display strings for one status snapshot, each already defaulted."""

    model_config = ConfigDict(frozen=True)

    header: str
    map: str
    players: str
    run_level: str
    bunker: str
    round_id: str
    round_start: str
    retrieved: str

    @property
    def summary(self) -> str:
        """One-line status message."""
        return " · ".join([
            self.header,
            self.map,
            self.players,
            f"Round #{self.round_id}",
            self.run_level,
            self.bunker,
        ])


def build_card(status: ServerStatus, retrieved_at: datetime) -> StatusCard:
    round_start = UNAVAILABLE
    if status.round_start_time is not None:
        round_start = to_local(status.round_start_time).strftime(ROUND_START_FORMAT)
    return StatusCard(
        header=status.name if status.name is not None else UNKNOWN_NAME,
        map=status.map if status.map is not None else UNKNOWN_MAP,
        players=describe_players(status.players, status.soft_max_players),
        run_level=describe_run_level(status.run_level),
        bunker=describe_bunker(status.panic_bunker),
        round_id=str(status.round_id) if status.round_id is not None else "?",
        round_start=round_start,
        retrieved=to_local(retrieved_at).strftime(RETRIEVED_FORMAT),
    )
