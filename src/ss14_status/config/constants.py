"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "ss14-status"
APP_AUTHOR = "SS14"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Config key "SS14:StatusBaseAddress" maps to this TOML table/key pair
CONFIG_SECTION = "SS14"
CONFIG_BASE_ADDRESS_KEY = "StatusBaseAddress"

# Environment variable names
ENV_BASE_ADDRESS = "SS14_STATUS_BASE_ADDRESS"

DEFAULT_BASE_ADDRESS = "http://localhost:1212/"
STATUS_PATH = "status"
OUTPUT_FORMATS = ("table", "json", "yaml")
