"""Persistence of GUI preferences."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from ascii_studio.constants import (
    APP_NAME,
    DEFAULT_BRIGHTNESS,
    DEFAULT_INVERTED,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    DEFAULT_SERVICE_URL,
    DEFAULT_STYLE,
    SYSTEM_THEME,
)

SCHEMA_VERSION = 1
_SETTINGS_FILENAME = "settings.json"


def default_gui_settings() -> dict[str, Any]:
    """Default values for every persisted preference."""
    return {
        "schema_version": SCHEMA_VERSION,
        "theme": SYSTEM_THEME,
        "service_url": DEFAULT_SERVICE_URL,
        "request_timeout_sec": DEFAULT_REQUEST_TIMEOUT_SEC,
        "brightness": DEFAULT_BRIGHTNESS,
        "style": DEFAULT_STYLE,
        "invert": DEFAULT_INVERTED,
        "last_input_dir": "",
        "window_geometry": "1100x760",
        "verbose_logging": False,
    }


class GuiSettingsStore:
    """Loads and saves the settings JSON file."""

    def __init__(self, settings_path: Optional[Path] = None) -> None:
        self.settings_path = settings_path or self._build_default_settings_path()

    def load(self) -> dict[str, Any]:
        """Return stored settings merged over the defaults."""
        settings = default_gui_settings()
        loaded = self._read_json(self.settings_path)
        if loaded is not None:
            settings.update(loaded)
        settings["schema_version"] = SCHEMA_VERSION
        return settings

    def save(self, settings: Mapping[str, Any]) -> None:
        payload = default_gui_settings()
        payload.update(dict(settings))
        payload["schema_version"] = SCHEMA_VERSION

        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.settings_path.with_suffix(f"{self.settings_path.suffix}.tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2)
        tmp_path.replace(self.settings_path)

    def update(self, **changes: Any) -> dict[str, Any]:
        """Persist ``changes`` on top of the stored settings."""
        settings = self.load()
        settings.update(changes)
        self.save(settings)
        return settings

    @staticmethod
    def _read_json(path: Path) -> Optional[dict[str, Any]]:
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError):
            logging.warning("Ignoring unreadable settings file: %s", path)
            return None
        if not isinstance(data, dict):
            return None
        return data

    @staticmethod
    def _build_default_settings_path() -> Path:
        if os.name == "nt":
            app_data = os.environ.get("APPDATA")
            if app_data:
                return Path(app_data) / APP_NAME / _SETTINGS_FILENAME
            return Path.home() / f".{APP_NAME.lower()}" / _SETTINGS_FILENAME

        config_home = os.environ.get("XDG_CONFIG_HOME")
        if config_home:
            return Path(config_home) / APP_NAME.lower() / _SETTINGS_FILENAME
        return Path.home() / ".config" / APP_NAME.lower() / _SETTINGS_FILENAME
