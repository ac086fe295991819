"""
Dokumentovač UI configuration.

Handles persistence of UI preferences and the last documents location, so
reopening the browser lands on the same search, tag and page.
Config is stored in <config dir>/ui_config.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .constants import UI_CONFIG_FILE_NAME
from .settings import get_config_dir

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "theme": "textual-dark",
    "last_location": "",
    "download_dir": "",
}


def get_ui_config_path() -> Path:
    """Get path to UI config file."""
    return get_config_dir() / UI_CONFIG_FILE_NAME


def load_ui_config() -> dict[str, Any]:
    """
    Load UI configuration from file.

    Returns:
        Config dict, or defaults if file doesn't exist or is invalid
    """
    path = get_ui_config_path()
    if path.exists():
        try:
            config = json.loads(path.read_text())
            if isinstance(config, dict):
                return {**DEFAULT_CONFIG, **config}
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable UI config %s: %s", path, e)
    return DEFAULT_CONFIG.copy()


def save_ui_config(config: dict[str, Any]) -> None:
    """Save UI configuration to file."""
    path = get_ui_config_path()
    try:
        path.write_text(json.dumps(config, indent=2) + "\n")
    except OSError as e:
        # Config is non-critical
        logger.warning("Could not save UI config %s: %s", path, e)


def get_theme() -> str:
    return str(load_ui_config().get("theme", DEFAULT_CONFIG["theme"]))


def get_last_location() -> str:
    """Last documents location (query string) the browser showed."""
    return str(load_ui_config().get("last_location") or "")


def set_last_location(location: str) -> None:
    config = load_ui_config()
    if config.get("last_location") == location:
        return
    config["last_location"] = location
    save_ui_config(config)


def get_download_dir() -> Path:
    """Directory downloads are saved into (defaults to ~/Downloads)."""
    configured = load_ui_config().get("download_dir")
    if configured:
        return Path(configured).expanduser()
    return Path.home() / "Downloads"
