"""AsciiStudio desktop front end.

Pick (or drop) one JPEG/PNG image, choose an output size, and send it to the
conversion service; the returned character grid can be copied with one click.

Usage:
    python -m ascii_studio.gui_app

An ``ascii-studio`` GUI script is also provided when installed as a package.
"""

from __future__ import annotations

import logging
from pathlib import Path
from tkinter import messagebox
from typing import Any, Optional

import customtkinter
from tkinterdnd2 import COPY, DND_FILES, TkinterDnD

from ascii_studio.clipboard_feedback import (
    ClipboardFeedbackController,
    ClipboardFeedbackHooks,
    copy_text_to_clipboard,
)
from ascii_studio.constants import APP_NAME, DEFAULT_REQUEST_TIMEOUT_SEC, DEFAULT_SERVICE_URL, MAX_LENGTH
from ascii_studio.gui_settings_store import GuiSettingsStore
from ascii_studio.image_loader import ImageLoadSession
from ascii_studio.operation_flow import OperationScope, OperationScopeHooks
from ascii_studio.presets import build_default_registry
from ascii_studio.runtime_logging import configure_logging
from ascii_studio.selection_state import SelectionState
from ascii_studio.submission import ConversionClient, SubmissionHooks, SubmissionOrchestrator
from ascii_studio.theme import ThemePreference
from ascii_studio.ui.error_banner import (
    ErrorBannerCallbacks,
    ErrorBannerState,
    build_error_banner,
    clear_error,
    show_error,
)
from ascii_studio.ui.input_sources import ask_image_path, dropped_paths, setup_drag_and_drop
from ascii_studio.ui.options_panel import (
    OptionsPanelCallbacks,
    OptionsPanelState,
    apply_selection_state,
    build_options_panel,
    commit_pending_entries,
    hide_busy,
    read_conversion_values,
    set_submit_enabled,
    show_busy,
)
from ascii_studio.ui.output_panel import (
    OutputPanelCallbacks,
    OutputPanelState,
    build_output_panel,
    clear_output,
    hide_feedback,
    show_feedback,
    show_output,
)
from ascii_studio.ui.topbar import InfoDialog, TopBarCallbacks, TopBarState, apply_theme, build_topbar
from ascii_studio.ui_theme_tokens import (
    APP_COLORS,
    MONO_FONT_FAMILY,
    appearance_mode_for,
    style_card_frame,
    style_primary_button,
    style_secondary_button,
)
from ascii_studio.workflow import WorkflowController, WorkflowView

DROP_HINT_TEXT = "Drop a JPEG or PNG image here, or use “Select image”."
BUSY_TEXT = "Converting…"


class AsciiStudioApp(customtkinter.CTk, TkinterDnD.DnDWrapper):
    def __init__(self, *, settings_store: Optional[GuiSettingsStore] = None) -> None:
        super().__init__()
        self.settings_store = settings_store or GuiSettingsStore()
        self.settings = self.settings_store.load()
        self._last_input_dir = str(self.settings.get("last_input_dir", ""))

        self.title(APP_NAME)
        self.geometry(str(self.settings.get("window_geometry") or "1100x760"))
        self.minsize(820, 560)
        self.report_callback_exception = self._report_callback_exception

        self.theme = ThemePreference(
            self.settings_store,
            apply_mode=lambda theme: customtkinter.set_appearance_mode(appearance_mode_for(theme)),
        )
        self.theme.load()
        self.configure(fg_color=APP_COLORS["bg_primary"])

        self.font_default = customtkinter.CTkFont(size=14)
        self.font_small = customtkinter.CTkFont(size=12)
        self.font_mono = customtkinter.CTkFont(family=MONO_FONT_FAMILY, size=11)

        self.registry = build_default_registry(MAX_LENGTH)
        self._build_layout()
        self._build_controllers()

        setup_drag_and_drop(
            self,
            [self, self.main_frame, self.options_refs.container, self.output_refs.result_box],
            tkdnd_cls=TkinterDnD,
            dnd_files=DND_FILES,
            on_drop=self._on_drop,
        )
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self.workflow.start()
        logging.info("%s window ready", APP_NAME)

    # -------------------- layout --------------------------------
    def _build_layout(self) -> None:
        self.topbar_refs = build_topbar(
            self,
            TopBarState(
                font_default=self.font_default,
                colors=APP_COLORS,
                style_primary_button=style_primary_button,
                style_secondary_button=style_secondary_button,
            ),
            TopBarCallbacks(
                on_select=self._select_image,
                on_toggle_theme=self._toggle_theme,
                on_info=self._show_info,
            ),
        )
        self.topbar_refs.container.pack(side="top", fill="x", padx=12, pady=(12, 6))
        apply_theme(self.topbar_refs, self.theme.current)
        self.info_dialog = InfoDialog(self, colors=APP_COLORS)

        self.main_frame = customtkinter.CTkFrame(self, fg_color="transparent")
        self.main_frame.pack(side="top", fill="both", expand=True, padx=12, pady=(0, 12))

        self.error_refs = build_error_banner(
            self,
            ErrorBannerState(
                font_default=self.font_default,
                colors=APP_COLORS,
                style_secondary_button=style_secondary_button,
            ),
            ErrorBannerCallbacks(on_dismiss=self._dismiss_error),
            pack_options={"side": "top", "fill": "x", "padx": 12, "pady": (0, 6), "before": self.main_frame},
        )

        self.options_callbacks = OptionsPanelCallbacks(
            on_preset_selected=lambda key: self.workflow.on_preset_selected(key),
            on_width_entered=lambda raw: self.workflow.on_width_entered(raw),
            on_height_entered=lambda raw: self.workflow.on_height_entered(raw),
            on_aspect_toggled=lambda locked: self.workflow.on_aspect_toggled(locked),
            on_submit=self._submit,
        )
        self.options_refs = build_options_panel(
            self.main_frame,
            OptionsPanelState(
                registry=self.registry,
                brightness=float(self.settings.get("brightness", 50.0)),
                style=str(self.settings.get("style", "normal")),
                invert=bool(self.settings.get("invert", False)),
                font_default=self.font_default,
                font_small=self.font_small,
                colors=APP_COLORS,
                style_primary_button=style_primary_button,
                style_card_frame=style_card_frame,
            ),
            self.options_callbacks,
        )
        self.options_refs.container.pack(side="left", fill="y", padx=(0, 8))
        self.drop_hint_label = customtkinter.CTkLabel(
            self.options_refs.container,
            text=DROP_HINT_TEXT,
            font=self.font_default,
            text_color=APP_COLORS["text_secondary"],
            wraplength=300,
        )

        self.output_refs = build_output_panel(
            self.main_frame,
            OutputPanelState(
                font_small=self.font_small,
                font_mono=self.font_mono,
                colors=APP_COLORS,
                style_card_frame=style_card_frame,
            ),
            OutputPanelCallbacks(on_activate=self._activate_result),
        )
        self.output_refs.container.pack(side="left", fill="both", expand=True)

    def _build_controllers(self) -> None:
        scope = OperationScope(
            hooks=OperationScopeHooks(
                set_trigger_enabled=lambda enabled: set_submit_enabled(self.options_refs, enabled),
                show_busy=lambda text: show_busy(self.options_refs, text),
                hide_busy=lambda: hide_busy(self.options_refs),
            ),
            busy_text=BUSY_TEXT,
        )
        client = ConversionClient(
            str(self.settings.get("service_url") or DEFAULT_SERVICE_URL),
            timeout=float(self.settings.get("request_timeout_sec") or DEFAULT_REQUEST_TIMEOUT_SEC),
        )
        self.orchestrator = SubmissionOrchestrator(
            client=client,
            scope=scope,
            hooks=SubmissionHooks(
                clear_output=lambda: clear_output(self.output_refs),
                show_output=lambda grid: show_output(self.output_refs, grid),
                show_error=self._show_error,
                clear_error=self._clear_error,
            ),
            max_length=self.registry.max_length,
        )
        self.clipboard = ClipboardFeedbackController(
            write_text=lambda text: copy_text_to_clipboard(self, text),
            scheduler=self,
            hooks=ClipboardFeedbackHooks(
                show=lambda kind: show_feedback(self.output_refs, kind),
                hide=lambda kind: hide_feedback(self.output_refs, kind),
            ),
        )
        self.workflow = WorkflowController(
            registry=self.registry,
            view=WorkflowView(
                render_selection=self._render_selection,
                show_error=self._show_error,
                clear_error=self._clear_error,
            ),
            scheduler=self,
            loader=ImageLoadSession(),
            orchestrator=self.orchestrator,
            clipboard=self.clipboard,
        )

    # -------------------- view hooks --------------------------------
    def _render_selection(self, state: SelectionState) -> None:
        apply_selection_state(self.options_refs, state)
        if state.options_visible:
            if self.drop_hint_label.winfo_manager():
                self.drop_hint_label.pack_forget()
        elif not self.drop_hint_label.winfo_manager():
            self.drop_hint_label.pack(fill="both", expand=True, padx=24, pady=24)

    def _show_error(self, message: str) -> None:
        show_error(self.error_refs, message)

    def _clear_error(self) -> None:
        clear_error(self.error_refs)

    def _dismiss_error(self) -> None:
        self.workflow.dismiss_error()

    # -------------------- user actions --------------------------------
    def _select_image(self) -> None:
        paths = ask_image_path(self._last_input_dir)
        if not paths:
            return
        self._last_input_dir = str(paths[0].parent)
        self.workflow.on_files_selected(paths)

    def _on_drop(self, event: Any) -> str:
        paths = dropped_paths(self, event)
        logging.debug("Dropped %d item(s)", len(paths))
        if paths:
            self._last_input_dir = str(Path(paths[0]).parent)
        self.workflow.on_files_selected(paths)
        return COPY

    def _submit(self) -> None:
        commit_pending_entries(self.options_refs, self.workflow.state, self.options_callbacks)
        self.workflow.on_submit(theme=self.theme.current, **read_conversion_values(self.options_refs))

    def _activate_result(self) -> None:
        self.workflow.on_result_activated()

    def _toggle_theme(self) -> None:
        theme = self.theme.toggle()
        apply_theme(self.topbar_refs, theme)
        logging.info("Theme switched to %s", theme)

    def _show_info(self) -> None:
        self.info_dialog.show()

    # -------------------- lifecycle --------------------------------
    def _report_callback_exception(self, exc, val, tb):
        logging.error("Tkinter callback exception", exc_info=(exc, val, tb))
        messagebox.showerror("Error", f"{exc.__name__}: {val}")

    def _persist_settings(self) -> None:
        values = read_conversion_values(self.options_refs)
        try:
            self.settings_store.update(
                brightness=values["brightness"],
                style=values["style"],
                invert=values["invert"],
                last_input_dir=self._last_input_dir,
                window_geometry=self.geometry(),
            )
        except OSError:
            logging.exception("Failed to save settings to %s", self.settings_store.settings_path)

    def _on_close(self) -> None:
        self._persist_settings()
        self.clipboard.clear()
        self.info_dialog.hide()
        self.destroy()


def main() -> None:
    """Package entry point (GUI script)."""
    store = GuiSettingsStore()
    settings = store.load()
    log_path = configure_logging(verbose=bool(settings.get("verbose_logging")))
    logging.info("%s starting; run log %s", APP_NAME, log_path)
    AsciiStudioApp(settings_store=store).mainloop()


if __name__ == "__main__":
    main()
