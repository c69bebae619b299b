"""Tests for the status model reducer and runner."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import respx

from ss14_status.client.status import StatusClient
from ss14_status.config.models import ServerTarget
from ss14_status.models.status import ServerStatus, StatusPayload
from ss14_status.ui.program import (
    INITIAL_MESSAGE,
    Fetch,
    FetchStatus,
    LoadFailed,
    Model,
    StatusLoaded,
    StatusProgram,
    init,
    update,
)

SERVER_URL = "https://ss14.test:1212/"
STATUS_URL = f"{SERVER_URL}status"
RETRIEVED = datetime(2024, 5, 1, 19, 0, tzinfo=timezone.utc)


def _payload(**fields) -> StatusPayload:
    return StatusPayload(
        status=ServerStatus(**fields),
        raw_json='{"name": "Box Station"}',
        retrieved_at=RETRIEVED,
    )


def _loaded_model() -> Model:
    model, _ = update(Model(server_base_address=SERVER_URL), Fetch())
    model, _ = update(model, StatusLoaded(payload=_payload(name="Box Station"), request_id=1))
    return model


class TestUpdate:
    def test_init(self):
        model, message = init(SERVER_URL)
        assert model.status_message == INITIAL_MESSAGE
        assert model.server_base_address == SERVER_URL
        assert model.status is None
        assert isinstance(message, Fetch)

    def test_fetch(self):
        model, command = update(Model(server_base_address=SERVER_URL), Fetch())
        assert command == FetchStatus(request_id=1)
        assert model.status_message == f"Contacting SS14 server at {SERVER_URL}status..."
        assert model.loading
        assert model.pending_request == 1

    def test_fetch_without_base_address(self):
        model, _ = update(Model(), Fetch())
        assert model.status_message == "Contacting SS14 server status endpoint..."

    def test_fetch_clears_previous_status(self):
        model, _ = update(_loaded_model(), Fetch())
        assert model.status is None
        assert model.raw_json is None
        assert model.retrieved_at is None
        assert model.image_data_uri is None
        assert model.request_id == 2

    def test_loaded(self):
        model = _loaded_model()
        assert model.status_message == "Connected to Box Station."
        assert model.status == ServerStatus(name="Box Station")
        assert model.raw_json == '{"name": "Box Station"}'
        assert model.retrieved_at == RETRIEVED
        assert model.image_data_uri is not None
        assert model.image_data_uri.startswith("data:image/svg+xml;base64,")
        assert not model.loading
        assert model.loaded

    def test_loaded_without_name(self):
        model, _ = update(Model(), Fetch())
        model, command = update(model, StatusLoaded(payload=_payload(players=3), request_id=1))
        assert command is None
        assert model.status_message == "Received server status."

    def test_failure_clears_previous_success(self):
        model, _ = update(_loaded_model(), Fetch())
        model, _ = update(model, LoadFailed(error="Server returned 500", request_id=2))
        assert model.status_message == "Failed to contact server: Server returned 500"
        assert model.status is None
        assert model.raw_json is None
        assert model.retrieved_at is None
        assert model.image_data_uri is None
        assert not model.loading

    def test_stale_response_dropped(self):
        model, _ = update(Model(server_base_address=SERVER_URL), Fetch())
        model, _ = update(model, Fetch())
        before = model
        model, command = update(model, StatusLoaded(payload=_payload(name="Old"), request_id=1))
        assert command is None
        assert model == before
        model, _ = update(model, LoadFailed(error="late", request_id=1))
        assert model == before
        model, _ = update(model, StatusLoaded(payload=_payload(name="New"), request_id=2))
        assert model.status_message == "Connected to New."

    def test_result_without_pending_request_dropped(self):
        model = _loaded_model()
        after, _ = update(model, LoadFailed(error="late", request_id=1))
        assert after == model


class TestStatusProgram:
    def _client(self) -> StatusClient:
        return StatusClient(ServerTarget(base_address=SERVER_URL))

    @respx.mock
    def test_start_success(self, mock_status: dict):
        respx.get(STATUS_URL).mock(return_value=httpx.Response(200, json=mock_status))
        with self._client() as client:
            program = StatusProgram(client)
            model = program.start()
        assert model.status_message == "Connected to Box Station."
        assert model.status is not None
        assert model.status.players == 10
        assert program.last_error is None

    @respx.mock
    def test_http_failure(self):
        respx.get(STATUS_URL).mock(return_value=httpx.Response(500, text="boom"))
        with self._client() as client:
            program = StatusProgram(client)
            model = program.start()
        assert model.status_message == "Failed to contact server: Server returned 500: boom"
        assert program.last_error is not None
        assert program.last_error.exit_code == 3

    @respx.mock
    def test_connect_error(self):
        respx.get(STATUS_URL).mock(side_effect=httpx.ConnectError("refused"))
        with self._client() as client:
            model = StatusProgram(client).start()
        assert model.status_message.startswith("Failed to contact server: Cannot connect")

    @respx.mock
    def test_invalid_document(self):
        respx.get(STATUS_URL).mock(return_value=httpx.Response(200, text="<html>"))
        with self._client() as client:
            model = StatusProgram(client).start()
        assert "not valid JSON" in model.status_message
        assert model.status is None

    @respx.mock
    def test_hostile_fields_load_as_absent(self):
        raw = (
            '{"name": "Box Station", "round_start_time": "9999-12-31T23:59:59-12:00",'
            ' "players": 1' + "0" * 5000 + "}"
        )
        respx.get(STATUS_URL).mock(return_value=httpx.Response(200, text=raw))
        with self._client() as client:
            model = StatusProgram(client).start()
        assert model.status_message == "Connected to Box Station."
        assert model.status is not None
        assert model.status.round_start_time is None
        assert model.status.players is None
        assert model.image_data_uri is not None

    @respx.mock
    def test_refresh_failure_clears_success(self, mock_status: dict):
        respx.get(STATUS_URL).mock(side_effect=[
            httpx.Response(200, json=mock_status),
            httpx.Response(503, text="down"),
        ])
        with self._client() as client:
            program = StatusProgram(client)
            assert program.start().loaded
            model = program.refresh()
        assert model.status is None
        assert model.raw_json is None
        assert model.image_data_uri is None
        assert model.status_message == "Failed to contact server: Server returned 503: down"

    @respx.mock
    def test_on_change_sees_loading_then_loaded(self, mock_status: dict):
        respx.get(STATUS_URL).mock(return_value=httpx.Response(200, json=mock_status))
        seen: list[Model] = []
        with self._client() as client:
            StatusProgram(client, on_change=seen.append).start()
        assert [m.loading for m in seen] == [True, False]
        assert seen[0].status_message.startswith("Contacting SS14 server at")
