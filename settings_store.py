# settings_store.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from PySide6.QtCore import QStandardPaths

APP_NAME = "DateTimeField"
SETTINGS_FILE_NAME = "settings.json"

# Keys understood by the field and the calendar loader
DEFAULTS: Dict[str, Any] = {
    "locale": None,
    "timezone": None,
    "calendar_base_path": "/h5p/editor/",
    "loader_timeout": 30,
}

logger = logging.getLogger(__name__)


def app_config_dir() -> Path:
    """
    Return the per-user configuration directory,
    creating it if needed.
    """
    base = Path(QStandardPaths.writableLocation(QStandardPaths.AppConfigLocation))
    cfg = base / APP_NAME
    cfg.mkdir(parents=True, exist_ok=True)
    return cfg


def settings_path() -> Path:
    return app_config_dir() / SETTINGS_FILE_NAME


def load_settings() -> Dict[str, Any]:
    """Load settings.json, returning {} if missing or invalid."""
    path = settings_path()
    if not path.exists():
        return {}

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, json.JSONDecodeError) as e:
        # Broken JSON? Just ignore and start fresh.
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return {}


def save_settings(data: Dict[str, Any]) -> None:
    """Write JSON with a simple temp-file swap for safety."""
    path = settings_path()
    tmp = path.with_suffix(".tmp")

    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)

    tmp.replace(path)


def get_setting(key: str, default: Any = None) -> Any:
    if default is None:
        default = DEFAULTS.get(key)
    return load_settings().get(key, default)


def set_setting(key: str, value: Any | None) -> None:
    data = load_settings()
    if value is None:
        data.pop(key, None)
    else:
        data[key] = value
    save_settings(data)
