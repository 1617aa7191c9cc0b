from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigError


load_dotenv(override=False)

HOME_ENV = "GRIDFOLIO_HOME"
CONFIG_ENV = "GRIDFOLIO_CONFIG"
CONFIG_FILENAME = "metadata.yaml"


def _package_root() -> Path:
    # This file lives under <root>/gridfolio/core
    return Path(__file__).resolve().parents[1]


def _config_dir() -> Path:
    return _package_root() / "config"


def _work_dir() -> Path:
    """Writable base for runtime files (logs)."""
    env = os.getenv(HOME_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / "Gridfolio"


def default_config_path() -> Path:
    return _config_dir() / CONFIG_FILENAME


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Locate the schema catalog file.

    Order: explicit path, $GRIDFOLIO_CONFIG, ./metadata.yaml, packaged default.
    """
    if path:
        p = Path(path).expanduser()
        if not p.exists():
            raise ConfigError(f"Config file not found: {p}")
        return p
    env = os.getenv(CONFIG_ENV)
    if env:
        p = Path(env).expanduser()
        if not p.exists():
            raise ConfigError(f"{CONFIG_ENV} points to a missing file: {p}")
        return p
    local = Path.cwd() / CONFIG_FILENAME
    if local.exists():
        return local
    return default_config_path()
