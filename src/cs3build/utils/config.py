"""Helpers for loading the user configuration file (~/.cs3build/config.json)."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Final

CONFIG_ENV_VAR: Final[str] = "CS3BUILD_CONFIG"
CONFIG_DIR = Path.home() / ".cs3build"
CONFIG_FILE = CONFIG_DIR / "config.json"


def get_config_path() -> Path:
    """Return the configuration file path, honouring $CS3BUILD_CONFIG."""

    if override := os.environ.get(CONFIG_ENV_VAR):
        return Path(override).expanduser()
    return CONFIG_FILE


@lru_cache(maxsize=1)
def load_config() -> dict[str, Any]:
    """Load configuration data from disk (cached)."""

    config_file = get_config_path()
    if not config_file.exists():
        return {}

    try:
        raw = config_file.read_text(encoding="utf-8")
    except OSError:
        return {}

    try:
        data = json.loads(raw)
    except ValueError:
        return {}

    if isinstance(data, dict):
        return data

    return {}


def get_config_value(key: str, default: Any | None = None) -> Any | None:
    """Fetch a configuration value by key."""

    return load_config().get(key, default)


def reload_config() -> None:
    """Force the cached configuration to be reloaded on next access."""

    load_config.cache_clear()
