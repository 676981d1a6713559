from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

APP_NAME = "writingbuddy"


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _xdg_state_home() -> Path:
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


def get_user_config_path() -> Path:
    return _xdg_config_home() / APP_NAME / f"{APP_NAME}.yaml"


def get_log_path() -> Path:
    return _xdg_state_home() / APP_NAME / f"{APP_NAME}.log"


def get_output_dir(config: Dict[str, Any]) -> Path:
    root = config.get("output_dir") or "."
    return Path(root).expanduser().resolve()


def get_output_path(config: Dict[str, Any], now: datetime) -> Path:
    """Dated file the session is appended to, e.g. ``2026-10.md``."""
    return get_output_dir(config) / now.strftime(config["file_format"])


def ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
