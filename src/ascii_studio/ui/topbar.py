"""Top bar UI builder and the informational popup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import customtkinter

from ascii_studio.constants import DARK_THEME

INFO_CONTENT = """
# AsciiStudio
Turns a picture into text art using the conversion service.
## Usage
- Choose a JPEG or PNG image with the button or drop it on the window.
- Pick a size preset, or choose Custom to type width and height.
- With "Keep aspect ratio" on, editing one side updates the other.
- Adjust brightness, style and invert, then press Convert.
- Click the result to copy it to the clipboard.
## Sizes
- Width counts characters; height counts rows.
- Rows are about twice as tall as characters are wide, so heights are halved.
"""


@dataclass(frozen=True)
class TopBarState:
    font_default: Any
    colors: Mapping[str, Any]
    style_primary_button: Callable[[Any], None]
    style_secondary_button: Callable[[Any], None]


@dataclass(frozen=True)
class TopBarCallbacks:
    on_select: Callable[[], None]
    on_toggle_theme: Callable[[], None]
    on_info: Callable[[], None]


@dataclass
class TopBarRefs:
    container: customtkinter.CTkFrame
    select_button: customtkinter.CTkButton
    theme_button: customtkinter.CTkButton
    info_button: customtkinter.CTkButton


def theme_button_text(theme: str) -> str:
    return "☀ Light" if theme == DARK_THEME else "☾ Dark"


def build_topbar(parent: Any, state: TopBarState, callbacks: TopBarCallbacks) -> TopBarRefs:
    container = customtkinter.CTkFrame(parent, fg_color="transparent")

    select_button = customtkinter.CTkButton(
        container,
        text="Select image",
        width=130,
        command=callbacks.on_select,
        font=state.font_default,
    )
    state.style_primary_button(select_button)
    select_button.pack(side="left")

    info_button = customtkinter.CTkButton(
        container,
        text="Info",
        width=80,
        command=callbacks.on_info,
        font=state.font_default,
    )
    state.style_secondary_button(info_button)
    info_button.pack(side="right")

    theme_button = customtkinter.CTkButton(
        container,
        text=theme_button_text(""),
        width=100,
        command=callbacks.on_toggle_theme,
        font=state.font_default,
    )
    state.style_secondary_button(theme_button)
    theme_button.pack(side="right", padx=8)

    return TopBarRefs(
        container=container,
        select_button=select_button,
        theme_button=theme_button,
        info_button=info_button,
    )


def apply_theme(refs: TopBarRefs, theme: str) -> None:
    refs.theme_button.configure(text=theme_button_text(theme))


class InfoDialog:
    """Informational popup; at most one window is open at a time."""

    def __init__(self, parent: Any, content: str = INFO_CONTENT, *, colors: Mapping[str, Any]) -> None:
        self.parent = parent
        self.content = content
        self.colors = colors
        self.window: Optional[customtkinter.CTkToplevel] = None

    @property
    def visible(self) -> bool:
        return self.window is not None

    def show(self) -> None:
        if self.window is not None:
            self.window.focus_set()
            return

        window = customtkinter.CTkToplevel(self.parent)
        window.title("About AsciiStudio")
        window.geometry("520x380")
        window.transient(self.parent)
        window.protocol("WM_DELETE_WINDOW", self.hide)
        self.window = window

        body = customtkinter.CTkScrollableFrame(window, fg_color="transparent")
        body.pack(fill="both", expand=True, padx=12, pady=12)
        for line in self.content.strip().splitlines():
            if line.startswith("# "):
                text, font, color = line[2:], customtkinter.CTkFont(size=18, weight="bold"), self.colors["text_primary"]
            elif line.startswith("## "):
                text, font, color = line[3:], customtkinter.CTkFont(size=15, weight="bold"), self.colors["primary"]
            elif line.startswith("- "):
                text, font, color = f"• {line[2:]}", customtkinter.CTkFont(size=13), self.colors["text_primary"]
            else:
                text, font, color = line, customtkinter.CTkFont(size=13), self.colors["text_secondary"]
            customtkinter.CTkLabel(
                body, text=text.strip(), font=font, text_color=color, anchor="w", justify="left", wraplength=460
            ).pack(fill="x", pady=(2, 2))

        close_button = customtkinter.CTkButton(window, text="Close", width=90, command=self.hide)
        close_button.pack(side="bottom", pady=(0, 12))

    def hide(self) -> None:
        if self.window is None:
            return
        window, self.window = self.window, None
        window.destroy()
