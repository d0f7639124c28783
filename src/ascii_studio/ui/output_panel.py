"""Conversion result panel: character grid plus copy acknowledgments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

import customtkinter

from ascii_studio.clipboard_feedback import FeedbackKind
from ascii_studio.submission import OutputGrid

COPY_HINT_TEXT = "Click the result (or press Enter) to copy it."
FEEDBACK_TEXTS = {
    FeedbackKind.SUCCESS: "Copied to clipboard!",
    FeedbackKind.FAILURE: "Could not copy to clipboard.",
}


@dataclass(frozen=True)
class OutputPanelState:
    font_small: Any
    font_mono: Any
    colors: Mapping[str, Any]
    style_card_frame: Callable[[Any], None]


@dataclass(frozen=True)
class OutputPanelCallbacks:
    on_activate: Callable[[], None]


@dataclass
class OutputPanelRefs:
    container: customtkinter.CTkFrame
    hint_label: customtkinter.CTkLabel
    result_box: customtkinter.CTkTextbox
    success_label: customtkinter.CTkLabel
    failure_label: customtkinter.CTkLabel


def build_output_panel(parent: Any, state: OutputPanelState, callbacks: OutputPanelCallbacks) -> OutputPanelRefs:
    container = customtkinter.CTkFrame(parent)
    state.style_card_frame(container)

    feedback_row = customtkinter.CTkFrame(container, fg_color="transparent")
    feedback_row.pack(side="top", fill="x", padx=12, pady=(10, 0))
    hint_label = customtkinter.CTkLabel(
        feedback_row,
        text="",
        anchor="w",
        font=state.font_small,
        text_color=state.colors["text_secondary"],
    )
    hint_label.pack(side="left")
    success_label = customtkinter.CTkLabel(
        feedback_row,
        text=FEEDBACK_TEXTS[FeedbackKind.SUCCESS],
        font=state.font_small,
        text_color=state.colors["success"],
    )
    failure_label = customtkinter.CTkLabel(
        feedback_row,
        text=FEEDBACK_TEXTS[FeedbackKind.FAILURE],
        font=state.font_small,
        text_color=state.colors["error"],
    )

    result_box = customtkinter.CTkTextbox(container, font=state.font_mono, wrap="none", cursor="hand2")
    result_box.pack(side="top", fill="both", expand=True, padx=12, pady=(6, 12))
    result_box.configure(state="disabled")

    def _activate(_event: Any = None) -> str:
        callbacks.on_activate()
        return "break"

    result_box.bind("<Button-1>", _activate)
    result_box.bind("<Return>", _activate)
    result_box.bind("<space>", _activate)

    return OutputPanelRefs(
        container=container,
        hint_label=hint_label,
        result_box=result_box,
        success_label=success_label,
        failure_label=failure_label,
    )


def _set_text(refs: OutputPanelRefs, text: str) -> None:
    refs.result_box.configure(state="normal")
    refs.result_box.delete("1.0", "end")
    if text:
        refs.result_box.insert("1.0", text)
    refs.result_box.configure(state="disabled")


def show_output(refs: OutputPanelRefs, grid: OutputGrid) -> None:
    _set_text(refs, grid.transcript())
    refs.hint_label.configure(text=COPY_HINT_TEXT)
    refs.result_box.focus_set()


def clear_output(refs: OutputPanelRefs) -> None:
    _set_text(refs, "")
    refs.hint_label.configure(text="")


def _feedback_label(refs: OutputPanelRefs, kind: FeedbackKind) -> customtkinter.CTkLabel:
    return refs.success_label if kind is FeedbackKind.SUCCESS else refs.failure_label


def show_feedback(refs: OutputPanelRefs, kind: FeedbackKind) -> None:
    label = _feedback_label(refs, kind)
    if not label.winfo_manager():
        label.pack(side="right")


def hide_feedback(refs: OutputPanelRefs, kind: FeedbackKind) -> None:
    label = _feedback_label(refs, kind)
    if label.winfo_manager():
        label.pack_forget()
