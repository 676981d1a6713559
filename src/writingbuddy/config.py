from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from writingbuddy.paths import ensure_parent, get_user_config_path
from writingbuddy.writing.session import SessionSettings

logger = logging.getLogger(__name__)

LOCAL_CONFIG_NAME = "writingbuddy.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "title_format": "## %Y-%m-%d",
    "file_format": "%Y-%m.md",
    "output_dir": ".",
    "backspace_active": True,
    "time_goal": 0,
    "word_goal": 0,
    "strict_mode": True,
    "keystroke_timeout": 0,
    "language": None,
    "font_size": 22,
}

_CONFIG_HEADER = """\
# writingbuddy configuration
# time_goal and keystroke_timeout are in seconds, 0 disables a goal or the timeout.
# title_format and file_format use strftime codes.
"""


class ConfigError(Exception):
    pass


class ConfigNotFoundError(ConfigError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"config file not found: {path}")
        self.path = path


def _candidate_config_paths() -> List[Path]:
    env_path = os.environ.get("WRITINGBUDDY_CONFIG")
    paths = []
    if env_path:
        paths.append(Path(env_path))
    paths.extend([
        Path(LOCAL_CONFIG_NAME),
        get_user_config_path(),
    ])
    return paths


def _read_config_file(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    config = dict(DEFAULT_CONFIG)
    config.update(data)
    return config


def write_default_config(path: Path) -> Path:
    ensure_parent(path)
    with path.open("w", encoding="utf-8") as handle:
        handle.write(_CONFIG_HEADER)
        yaml.safe_dump(DEFAULT_CONFIG, handle, sort_keys=False, allow_unicode=True)
    logger.info("Wrote default config to %s", path)
    return path


def load_config(path: Optional[Union[str, Path]] = None, *, initialize: bool = False) -> Dict[str, Any]:
    """Load the configuration, merged over the defaults.

    An explicit ``path`` must exist unless ``initialize`` is set, in which case
    the default configuration is written there first. Without a path the first
    existing candidate wins; if none exists the defaults are used and written
    to ``./writingbuddy.yaml`` when ``initialize`` is set, or to the user
    config directory otherwise.
    """
    if path is not None:
        explicit = Path(path).expanduser()
        if not explicit.exists():
            if not initialize:
                raise ConfigNotFoundError(explicit)
            write_default_config(explicit)
        logger.info("Using config file %s", explicit)
        return _read_config_file(explicit)

    for candidate in _candidate_config_paths():
        if candidate.exists():
            logger.info("Using config file %s", candidate)
            return _read_config_file(candidate)

    logger.info("No config file found, using defaults")
    if initialize:
        write_default_config(Path(LOCAL_CONFIG_NAME))
        return dict(DEFAULT_CONFIG)
    try:
        write_default_config(get_user_config_path())
    except OSError:
        logger.warning("Could not write default config to %s", get_user_config_path(), exc_info=True)
    return dict(DEFAULT_CONFIG)


def _get_int(config: Dict[str, Any], key: str) -> Optional[int]:
    value = config.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return value


def _get_bool(config: Dict[str, Any], key: str) -> bool:
    value = config.get(key, DEFAULT_CONFIG[key])
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _get_str(config: Dict[str, Any], key: str) -> str:
    value = config.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a non-empty string, got {value!r}")
    return value


def _get_optional_str(config: Dict[str, Any], key: str, *, allow_empty: bool = True) -> Optional[str]:
    value = config.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or (not value and not allow_empty):
        raise ConfigError(f"{key} must be a string, got {value!r}")
    return value


def settings_from_config(config: Dict[str, Any]) -> SessionSettings:
    _get_str(config, "title_format")
    _get_str(config, "file_format")
    _get_optional_str(config, "output_dir")
    _get_optional_str(config, "language", allow_empty=False)
    try:
        return SessionSettings(
            time_goal=_get_int(config, "time_goal"),
            word_goal=_get_int(config, "word_goal"),
            strict_mode=_get_bool(config, "strict_mode"),
            backspace_enabled=_get_bool(config, "backspace_active"),
            keystroke_timeout=_get_int(config, "keystroke_timeout"),
        )
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def display_font_size(config: Dict[str, Any]) -> int:
    size = _get_int(config, "font_size")
    if size is None:
        return DEFAULT_CONFIG["font_size"]
    if size <= 0:
        raise ConfigError(f"font_size must be positive, got {size}")
    return size
