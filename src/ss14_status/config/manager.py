"""Configuration manager — read/write TOML config, resolve the server target."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from ss14_status.client.errors import ConfigurationError
from ss14_status.config.constants import (
    CONFIG_BASE_ADDRESS_KEY,
    CONFIG_FILE,
    CONFIG_SECTION,
    DEFAULT_BASE_ADDRESS,
    ENV_BASE_ADDRESS,
)
from ss14_status.config.models import ClientConfig, ServerTarget


class ConfigManager:
    """Manages client configuration on disk and resolves the server address."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: ClientConfig | None = None

    @property
    def config(self) -> ClientConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> ClientConfig:
        if not self.config_path.exists():
            return ClientConfig()
        raw = self.config_path.read_bytes()
        try:
            data = tomllib.loads(raw.decode())
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise ConfigurationError(
                f"Cannot read config file {self.config_path}: {exc}"
            ) from exc
        section = data.get(CONFIG_SECTION, {})
        if not isinstance(section, dict):
            section = {}
        try:
            return ClientConfig(
                status_base_address=section.get(CONFIG_BASE_ADDRESS_KEY),
                default_format=data.get("default_format", "table"),
            )
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid config file {self.config_path}: {exc}"
            ) from exc

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        # Secure directory permissions (owner-only)
        os.chmod(self.config_path.parent, 0o700)
        data: dict[str, Any] = {}
        if self.config.default_format != "table":
            data["default_format"] = self.config.default_format
        if self.config.status_base_address:
            data[CONFIG_SECTION] = {
                CONFIG_BASE_ADDRESS_KEY: self.config.status_base_address,
            }
        # Atomic write: write to temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.replace(self.config_path)

    def set_base_address(self, address: str) -> str:
        try:
            updated = ClientConfig(
                status_base_address=address,
                default_format=self.config.default_format,
            )
        except ValidationError as exc:
            raise ConfigurationError(str(exc.errors()[0]["msg"])) from exc
        if updated.status_base_address is None:
            raise ConfigurationError("Base address must not be empty")
        self._config = updated
        self.save()
        return updated.status_base_address

    def unset_base_address(self) -> bool:
        if not self.config.status_base_address:
            return False
        self._config = self.config.model_copy(update={"status_base_address": None})
        self.save()
        return True

    def set_default_format(self, fmt: str) -> None:
        try:
            self._config = ClientConfig(
                status_base_address=self.config.status_base_address,
                default_format=fmt,
            )
        except ValidationError as exc:
            raise ConfigurationError(str(exc.errors()[0]["msg"])) from exc
        self.save()

    def resolve_target(self, url: str | None = None) -> ServerTarget:
        """Resolve the status server base address.

        Precedence: CLI flag > env var > config file > default.
        Empty values fall through to the next source.
        """
        env_url = os.environ.get(ENV_BASE_ADDRESS)
        candidates = [
            (url, "flag"),
            (env_url, "env"),
            (self.config.status_base_address, "config"),
        ]
        address, source = DEFAULT_BASE_ADDRESS, "default"
        for value, origin in candidates:
            if value and value.strip():
                address, source = value.strip(), origin
                break
        try:
            return ServerTarget(base_address=address, source=source)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid server address '{address}' (from {source}):"
                f" {exc.errors()[0]['msg']}"
            ) from exc
