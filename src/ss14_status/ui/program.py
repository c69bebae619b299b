"""Message-driven status model: a reducer plus a small runner.

``update`` is pure: it maps ``(model, message)`` to a new model and an
optional command. :class:`StatusProgram` owns the current model and executes
commands against a :class:`StatusClient`.

When fetches overlap, the most recently issued one wins. Each ``Fetch``
allocates a request id and results carrying any other id are dropped.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Literal, Union

import httpx
from pydantic import BaseModel, ConfigDict

from ss14_status.client.errors import StatusClientError
from ss14_status.client.status import StatusClient
from ss14_status.models.status import ServerStatus, StatusPayload
from ss14_status.output.svg import to_data_uri

INITIAL_MESSAGE = "Waiting to contact the SS14 server..."


class Model(BaseModel):
    """UI state."""

    model_config = ConfigDict(frozen=True)

    status_message: str = INITIAL_MESSAGE
    server_base_address: str = ""
    status: ServerStatus | None = None
    raw_json: str | None = None
    retrieved_at: datetime | None = None
    image_data_uri: str | None = None
    request_id: int = 0
    pending_request: int | None = None

    @property
    def loading(self) -> bool:
        return self.pending_request is not None

    @property
    def loaded(self) -> bool:
        return self.status is not None


class Fetch(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["fetch"] = "fetch"


class StatusLoaded(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["status_loaded"] = "status_loaded"
    payload: StatusPayload
    request_id: int


class LoadFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["load_failed"] = "load_failed"
    error: str
    request_id: int


Message = Union[Fetch, StatusLoaded, LoadFailed]


class FetchStatus(BaseModel):
    """Command: fetch the status document for *request_id*."""

    model_config = ConfigDict(frozen=True)

    request_id: int


Command = Union[FetchStatus, None]

_CLEARED = {
    "status": None,
    "raw_json": None,
    "retrieved_at": None,
    "image_data_uri": None,
}


def contacting_message(base_address: str) -> str:
    if not base_address.strip():
        return "Contacting SS14 server status endpoint..."
    return f"Contacting SS14 server at {base_address}status..."


def init(base_address: str) -> tuple[Model, Message]:
    """Initial model plus the message that kicks off the first fetch."""
    return Model(server_base_address=base_address), Fetch()


def update(model: Model, message: Message) -> tuple[Model, Command]:
    if isinstance(message, Fetch):
        request_id = model.request_id + 1
        updated = model.model_copy(update={
            **_CLEARED,
            "status_message": contacting_message(model.server_base_address),
            "request_id": request_id,
            "pending_request": request_id,
        })
        return updated, FetchStatus(request_id=request_id)

    if message.request_id != model.pending_request:
        return model, None

    if isinstance(message, StatusLoaded):
        payload = message.payload
        name = payload.status.name
        status_message = (
            f"Connected to {name}." if name is not None else "Received server status."
        )
        return model.model_copy(update={
            "status_message": status_message,
            "status": payload.status,
            "raw_json": payload.raw_json,
            "retrieved_at": payload.retrieved_at,
            "image_data_uri": to_data_uri(payload.status, payload.retrieved_at),
            "pending_request": None,
        }), None

    return model.model_copy(update={
        **_CLEARED,
        "status_message": f"Failed to contact server: {message.error}",
        "pending_request": None,
    }), None


class StatusProgram:
    """Holds the model and drives it with messages."""

    def __init__(
        self,
        client: StatusClient,
        *,
        on_change: Callable[[Model], None] | None = None,
    ) -> None:
        self.client = client
        self.on_change = on_change
        self.model, self._initial = init(client.base_url)
        self.last_error: StatusClientError | httpx.HTTPError | None = None

    def start(self) -> Model:
        """Dispatch the initial fetch."""
        return self.dispatch(self._initial)

    def refresh(self) -> Model:
        return self.dispatch(Fetch())

    def dispatch(self, message: Message) -> Model:
        pending: Message | None = message
        while pending is not None:
            self.model, command = update(self.model, pending)
            if self.on_change is not None:
                self.on_change(self.model)
            pending = self._execute(command)
        return self.model

    def _execute(self, command: Command) -> Message | None:
        if command is None:
            return None
        self.last_error = None
        try:
            payload = self.client.fetch_status()
        except (StatusClientError, httpx.HTTPError) as exc:
            self.last_error = exc
            return LoadFailed(error=str(exc), request_id=command.request_id)
        return StatusLoaded(payload=payload, request_id=command.request_id)
