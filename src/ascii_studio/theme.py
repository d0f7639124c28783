"""Light/dark theme preference, persisted in the settings file."""

from __future__ import annotations

import logging
from typing import Callable, Optional

import darkdetect

from ascii_studio.constants import DARK_THEME, LIGHT_THEME
from ascii_studio.gui_settings_store import GuiSettingsStore


def detect_os_theme() -> str:
    """Theme reported by the OS, light when it cannot be determined."""
    try:
        return DARK_THEME if darkdetect.isDark() else LIGHT_THEME
    except Exception:
        logging.debug("darkdetect failed; assuming light theme", exc_info=True)
        return LIGHT_THEME


class ThemePreference:
    def __init__(
        self,
        store: GuiSettingsStore,
        *,
        apply_mode: Optional[Callable[[str], None]] = None,
        detect: Callable[[], str] = detect_os_theme,
    ) -> None:
        self._store = store
        self._apply_mode = apply_mode
        self._detect = detect
        self._current = LIGHT_THEME

    @property
    def current(self) -> str:
        return self._current

    def load(self) -> str:
        """Read the stored choice, falling back to the OS preference."""
        stored = str(self._store.load().get("theme", ""))
        self._current = stored if stored in (LIGHT_THEME, DARK_THEME) else self._detect()
        self._apply()
        return self._current

    def toggle(self) -> str:
        self._current = LIGHT_THEME if self._current == DARK_THEME else DARK_THEME
        self._store.update(theme=self._current)
        self._apply()
        return self._current

    def _apply(self) -> None:
        if self._apply_mode is not None:
            self._apply_mode(self._current)
