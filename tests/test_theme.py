from __future__ import annotations

from pathlib import Path

from ascii_studio import theme as theme_module
from ascii_studio.gui_settings_store import GuiSettingsStore
from ascii_studio.theme import ThemePreference, detect_os_theme


def test_load_uses_os_theme_when_nothing_stored(tmp_path: Path) -> None:
    applied: list[str] = []
    preference = ThemePreference(
        GuiSettingsStore(settings_path=tmp_path / "settings.json"),
        apply_mode=applied.append,
        detect=lambda: "dark",
    )

    assert preference.load() == "dark"
    assert applied == ["dark"]


def test_load_prefers_stored_theme(tmp_path: Path) -> None:
    store = GuiSettingsStore(settings_path=tmp_path / "settings.json")
    store.update(theme="light")
    preference = ThemePreference(store, detect=lambda: "dark")

    assert preference.load() == "light"


def test_toggle_persists_choice(tmp_path: Path) -> None:
    store = GuiSettingsStore(settings_path=tmp_path / "settings.json")
    applied: list[str] = []
    preference = ThemePreference(store, apply_mode=applied.append, detect=lambda: "light")
    preference.load()

    assert preference.toggle() == "dark"
    assert store.load()["theme"] == "dark"
    assert preference.toggle() == "light"
    assert applied == ["light", "dark", "light"]


def test_detect_os_theme_falls_back_to_light(monkeypatch) -> None:
    def _boom() -> bool:
        raise OSError("no desktop session")

    monkeypatch.setattr(theme_module.darkdetect, "isDark", _boom)
    assert detect_os_theme() == "light"


def test_detect_os_theme_reports_dark(monkeypatch) -> None:
    monkeypatch.setattr(theme_module.darkdetect, "isDark", lambda: True)
    assert detect_os_theme() == "dark"
