"""Configuration file handling for civicfix."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from civicfix.constants import (
    DATA_DIR_ENV_VAR,
    DATA_DIR_NAME,
    DEFAULT_AUTHORITY,
    DEFAULT_REPORTER,
)

# Config filename inside the data directory
CONFIG_FILENAME = "config.toml"

# Known keys and their defaults
DEFAULTS: dict[str, Any] = {
    "reporter_label": DEFAULT_REPORTER,
    "authority_label": DEFAULT_AUTHORITY,
    "cors_origins": ["http://localhost:3000"],
    "host": "127.0.0.1",
    "port": 3000,
}


def get_config_path(data_dir: str | Path) -> Path:
    """Get the path to the config file.

    Args:
        data_dir: Path to the data directory

    Returns:
        Path to config.toml
    """
    return Path(data_dir) / CONFIG_FILENAME


def load_config(data_dir: str | Path) -> dict[str, Any]:
    """Load configuration from <data_dir>/config.toml.

    Args:
        data_dir: Path to the data directory

    Returns:
        Configuration dictionary, or empty dict if no usable config exists
    """
    config_path = get_config_path(data_dir)
    if not config_path.exists():
        return {}

    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def save_config(data_dir: str | Path, config: dict[str, Any]) -> None:
    """Save configuration to <data_dir>/config.toml.

    Args:
        data_dir: Path to the data directory
        config: Configuration dictionary to save
    """
    config_path = get_config_path(data_dir)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with config_path.open("wb") as f:
        tomli_w.dump(config, f)


def get_setting(data_dir: str | Path, key: str) -> Any:
    """Get a config value, falling back to its default.

    Raises:
        KeyError: If *key* is not a known setting.
    """
    if key not in DEFAULTS:
        msg = f"Unknown config key: {key}"
        raise KeyError(msg)
    return load_config(data_dir).get(key, DEFAULTS[key])


def find_data_dir(start_dir: str | None = None) -> str:
    """Find the data directory.

    Precedence:
    1. The ``CIVICFIX_DATA_DIR`` environment variable
    2. A ``.civicfix`` directory found searching upward from start_dir
    3. ``.civicfix`` in the current directory

    Args:
        start_dir: Directory to start searching from (default: current directory)

    Returns:
        Path to the data directory
    """
    from_env = os.environ.get(DATA_DIR_ENV_VAR, "").strip()
    if from_env:
        return from_env

    current = Path.cwd() if start_dir is None else Path(start_dir).resolve()
    while True:
        candidate = current / DATA_DIR_NAME
        if candidate.is_dir():
            return str(candidate)
        if current.parent == current:
            break
        current = current.parent

    return DATA_DIR_NAME
