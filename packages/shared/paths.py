from __future__ import annotations

import os
import sys
from pathlib import Path

APP_NAME = "ProcessTimeTracker"


def app_data_dir() -> Path:
    """Per-user data dir: %APPDATA% on Windows, $XDG_CONFIG_HOME or ~/.config elsewhere."""
    appdata = os.environ.get("APPDATA")
    if appdata:
        return Path(appdata) / APP_NAME
    if sys.platform == "win32":
        return Path.home() / APP_NAME
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_NAME.lower()


def config_path() -> Path:
    return app_data_dir() / "config.json"


def log_path() -> Path:
    return app_data_dir() / "logs" / "tracker.log"


def ensure_app_dirs() -> None:
    log_path().parent.mkdir(parents=True, exist_ok=True)
