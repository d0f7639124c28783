"""Shared colors and widget styling used by GUI modules."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

import customtkinter

ColorMap = Dict[str, Tuple[str, str]]

# (light, dark) pairs; customtkinter picks one from the appearance mode.
APP_COLORS: ColorMap = {
    "primary": ("#2F7FC8", "#3B8ED0"),
    "hover": ("#286CB0", "#2F74AE"),
    "text_primary": ("#1F2A37", "#E8EEF5"),
    "text_secondary": ("#5B6878", "#A9B4C2"),
    "bg_primary": ("#F4F7FB", "#171C24"),
    "bg_secondary": ("#FFFFFF", "#1F2530"),
    "bg_tertiary": ("#EFF4FA", "#262D3A"),
    "border_light": ("#D9E2EC", "#334052"),
    "warning": ("#C97A00", "#F2B441"),
    "error": ("#C62828", "#FF6B6B"),
    "success": ("#2E7D32", "#7BD88F"),
}

MONO_FONT_FAMILY = "Courier"


def style_primary_button(button: customtkinter.CTkButton, *, colors: Mapping[str, Any] = APP_COLORS) -> None:
    button.configure(
        fg_color=colors["primary"],
        hover_color=colors["hover"],
        text_color=("#FFFFFF", "#FFFFFF"),
        corner_radius=10,
        border_width=0,
    )


def style_secondary_button(button: customtkinter.CTkButton, *, colors: Mapping[str, Any] = APP_COLORS) -> None:
    button.configure(
        fg_color=colors["bg_tertiary"],
        hover_color=colors["border_light"],
        text_color=colors["text_primary"],
        border_width=1,
        border_color=colors["border_light"],
        corner_radius=10,
    )


def style_card_frame(frame: customtkinter.CTkFrame, *, colors: Mapping[str, Any] = APP_COLORS) -> None:
    frame.configure(
        fg_color=colors["bg_secondary"],
        border_width=1,
        border_color=colors["border_light"],
        corner_radius=12,
    )


def appearance_mode_for(theme: str) -> str:
    """customtkinter appearance mode name for a stored theme value."""
    return "Dark" if theme == "dark" else "Light"
