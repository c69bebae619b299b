"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from ss14_status.config.constants import ENV_BASE_ADDRESS
from ss14_status.config.manager import ConfigManager
from ss14_status.config.models import ServerTarget

SERVER_URL = "https://ss14.test:1212/"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real user config and environment."""
    config_file = tmp_path / "user-config" / "config.toml"
    monkeypatch.setattr("ss14_status.config.manager.CONFIG_FILE", config_file)
    monkeypatch.delenv(ENV_BASE_ADDRESS, raising=False)
    return config_file


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_target() -> ServerTarget:
    return ServerTarget(base_address=SERVER_URL, source="flag")


@pytest.fixture
def mock_status() -> dict:
    """Sample /status response from an SS14 server."""
    return {
        "name": "Box Station",
        "map": "Saltern",
        "players": 10,
        "soft_max_players": 32,
        "panic_bunker": False,
        "run_level": 3,
        "round_id": 42,
        "round_start_time": "2024-05-01T18:30:00+00:00",
        "tags": ["region:eu_w", "rp:low"],
        "preset": "Secret",
    }
