"""Dismissible inline error message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

import customtkinter


@dataclass(frozen=True)
class ErrorBannerState:
    font_default: Any
    colors: Mapping[str, Any]
    style_secondary_button: Callable[[Any], None]


@dataclass(frozen=True)
class ErrorBannerCallbacks:
    on_dismiss: Callable[[], None]


@dataclass
class ErrorBannerRefs:
    frame: customtkinter.CTkFrame
    message_var: customtkinter.StringVar
    message_label: customtkinter.CTkLabel
    dismiss_button: customtkinter.CTkButton
    pack_options: Mapping[str, Any]


def build_error_banner(
    parent: Any,
    state: ErrorBannerState,
    callbacks: ErrorBannerCallbacks,
    *,
    pack_options: Mapping[str, Any],
) -> ErrorBannerRefs:
    frame = customtkinter.CTkFrame(parent, fg_color=state.colors["bg_tertiary"], corner_radius=10)
    message_var = customtkinter.StringVar(value="")
    message_label = customtkinter.CTkLabel(
        frame,
        textvariable=message_var,
        anchor="w",
        font=state.font_default,
        text_color=state.colors["error"],
    )
    message_label.pack(side="left", fill="x", expand=True, padx=10, pady=6)
    dismiss_button = customtkinter.CTkButton(frame, text="✕", width=32, command=callbacks.on_dismiss)
    state.style_secondary_button(dismiss_button)
    dismiss_button.pack(side="right", padx=6, pady=6)
    return ErrorBannerRefs(
        frame=frame,
        message_var=message_var,
        message_label=message_label,
        dismiss_button=dismiss_button,
        pack_options=dict(pack_options),
    )


def show_error(refs: ErrorBannerRefs, message: str) -> None:
    refs.message_var.set(message)
    if not refs.frame.winfo_manager():
        refs.frame.pack(**refs.pack_options)


def clear_error(refs: ErrorBannerRefs) -> None:
    refs.message_var.set("")
    if refs.frame.winfo_manager():
        refs.frame.pack_forget()
