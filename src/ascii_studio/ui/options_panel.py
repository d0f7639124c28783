"""Size and conversion options UI builder for the main GUI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping

import customtkinter

from ascii_studio.constants import MAX_BRIGHTNESS, MIN_BRIGHTNESS, STYLES
from ascii_studio.presets import PresetRegistry
from ascii_studio.selection_state import SelectionState

STYLE_LABELS: Dict[str, str] = {
    "normal": "Normal",
    "brightness": "Brightness",
    "contrast": "High contrast",
}
SUBMIT_TEXT = "Convert"


@dataclass(frozen=True)
class OptionsPanelState:
    registry: PresetRegistry
    brightness: float
    style: str
    invert: bool
    font_default: Any
    font_small: Any
    colors: Mapping[str, Any]
    style_primary_button: Callable[[Any], None]
    style_card_frame: Callable[[Any], None]


@dataclass(frozen=True)
class OptionsPanelCallbacks:
    on_preset_selected: Callable[[str], None]
    on_width_entered: Callable[[str], None]
    on_height_entered: Callable[[str], None]
    on_aspect_toggled: Callable[[bool], None]
    on_submit: Callable[[], None]


@dataclass
class OptionsPanelRefs:
    container: customtkinter.CTkFrame
    image_frame: customtkinter.CTkFrame
    preview_label: customtkinter.CTkLabel
    image_name_var: customtkinter.StringVar
    size_frame: customtkinter.CTkFrame
    preset_var: customtkinter.StringVar
    preset_buttons: List[customtkinter.CTkRadioButton]
    width_var: customtkinter.StringVar
    height_var: customtkinter.StringVar
    width_entry: customtkinter.CTkEntry
    height_entry: customtkinter.CTkEntry
    aspect_var: customtkinter.BooleanVar
    aspect_checkbox: customtkinter.CTkCheckBox
    warning_var: customtkinter.StringVar
    warning_label: customtkinter.CTkLabel
    conversion_frame: customtkinter.CTkFrame
    brightness_var: customtkinter.DoubleVar
    brightness_value_var: customtkinter.StringVar
    brightness_slider: customtkinter.CTkSlider
    style_var: customtkinter.StringVar
    style_menu: customtkinter.CTkOptionMenu
    invert_var: customtkinter.BooleanVar
    invert_checkbox: customtkinter.CTkCheckBox
    submit_button: customtkinter.CTkButton
    busy_var: customtkinter.StringVar
    busy_label: customtkinter.CTkLabel
    spinner: customtkinter.CTkProgressBar
    preview_source: Any = field(default=None, repr=False)
    preview_image: Any = field(default=None, repr=False)


def _style_label(style: str) -> str:
    return STYLE_LABELS.get(style, style)


def _style_id(label: str) -> str:
    for style_id, style_label in STYLE_LABELS.items():
        if style_label == label:
            return style_id
    return label


def _brightness_text(value: float) -> str:
    return f"{round(float(value))}"


def build_options_panel(
    parent: Any,
    state: OptionsPanelState,
    callbacks: OptionsPanelCallbacks,
) -> OptionsPanelRefs:
    container = customtkinter.CTkFrame(parent)
    state.style_card_frame(container)

    # ---- image summary ----
    image_frame = customtkinter.CTkFrame(container, fg_color="transparent")
    preview_label = customtkinter.CTkLabel(image_frame, text="", width=120, height=120)
    preview_label.pack(side="left", padx=(0, 10))
    image_name_var = customtkinter.StringVar(value="")
    customtkinter.CTkLabel(
        image_frame,
        textvariable=image_name_var,
        anchor="w",
        font=state.font_small,
        text_color=state.colors["text_secondary"],
    ).pack(side="left", fill="x", expand=True)

    # ---- size ----
    size_frame = customtkinter.CTkFrame(container, fg_color="transparent")
    customtkinter.CTkLabel(size_frame, text="Size", anchor="w", font=state.font_default).pack(fill="x")

    preset_row = customtkinter.CTkFrame(size_frame, fg_color="transparent")
    preset_row.pack(fill="x", pady=(4, 6))
    preset_var = customtkinter.StringVar(value=state.registry.default_key)

    def _on_preset() -> None:
        callbacks.on_preset_selected(preset_var.get())

    preset_buttons: List[customtkinter.CTkRadioButton] = []
    for definition in state.registry.ordered():
        button = customtkinter.CTkRadioButton(
            preset_row,
            text=definition.label,
            variable=preset_var,
            value=definition.key,
            command=_on_preset,
            font=state.font_small,
        )
        button.pack(side="left", padx=(0, 8))
        preset_buttons.append(button)

    entry_row = customtkinter.CTkFrame(size_frame, fg_color="transparent")
    entry_row.pack(fill="x")
    width_var = customtkinter.StringVar(value="")
    height_var = customtkinter.StringVar(value="")

    customtkinter.CTkLabel(entry_row, text="Width", font=state.font_small).pack(side="left")
    width_entry = customtkinter.CTkEntry(entry_row, textvariable=width_var, width=70, font=state.font_default)
    width_entry.pack(side="left", padx=(4, 12))
    customtkinter.CTkLabel(entry_row, text="Height", font=state.font_small).pack(side="left")
    height_entry = customtkinter.CTkEntry(entry_row, textvariable=height_var, width=70, font=state.font_default)
    height_entry.pack(side="left", padx=(4, 12))

    def _commit_width(_event: Any = None) -> None:
        callbacks.on_width_entered(width_var.get())

    def _commit_height(_event: Any = None) -> None:
        callbacks.on_height_entered(height_var.get())

    width_entry.bind("<Return>", _commit_width)
    width_entry.bind("<FocusOut>", _commit_width)
    height_entry.bind("<Return>", _commit_height)
    height_entry.bind("<FocusOut>", _commit_height)

    aspect_var = customtkinter.BooleanVar(value=True)
    aspect_checkbox = customtkinter.CTkCheckBox(
        entry_row,
        text="Keep aspect ratio",
        variable=aspect_var,
        command=lambda: callbacks.on_aspect_toggled(bool(aspect_var.get())),
        font=state.font_small,
    )
    aspect_checkbox.pack(side="left")

    warning_var = customtkinter.StringVar(value="")
    warning_label = customtkinter.CTkLabel(
        size_frame,
        textvariable=warning_var,
        anchor="w",
        font=state.font_small,
        text_color=state.colors["warning"],
    )

    # ---- conversion ----
    conversion_frame = customtkinter.CTkFrame(container, fg_color="transparent")
    brightness_row = customtkinter.CTkFrame(conversion_frame, fg_color="transparent")
    brightness_row.pack(fill="x", pady=(6, 0))
    customtkinter.CTkLabel(brightness_row, text="Brightness", font=state.font_small).pack(side="left")
    brightness_var = customtkinter.DoubleVar(value=state.brightness)
    brightness_value_var = customtkinter.StringVar(value=_brightness_text(state.brightness))
    brightness_slider = customtkinter.CTkSlider(
        brightness_row,
        from_=MIN_BRIGHTNESS,
        to=MAX_BRIGHTNESS,
        number_of_steps=int(MAX_BRIGHTNESS - MIN_BRIGHTNESS),
        variable=brightness_var,
        command=lambda value: brightness_value_var.set(_brightness_text(value)),
    )
    brightness_slider.pack(side="left", fill="x", expand=True, padx=8)
    customtkinter.CTkLabel(brightness_row, textvariable=brightness_value_var, width=32).pack(side="left")

    style_row = customtkinter.CTkFrame(conversion_frame, fg_color="transparent")
    style_row.pack(fill="x", pady=(6, 0))
    customtkinter.CTkLabel(style_row, text="Style", font=state.font_small).pack(side="left")
    style_var = customtkinter.StringVar(value=_style_label(state.style))
    style_menu = customtkinter.CTkOptionMenu(
        style_row,
        values=[_style_label(style) for style in STYLES],
        variable=style_var,
        width=150,
    )
    style_menu.pack(side="left", padx=8)
    invert_var = customtkinter.BooleanVar(value=state.invert)
    invert_checkbox = customtkinter.CTkCheckBox(style_row, text="Invert", variable=invert_var, font=state.font_small)
    invert_checkbox.pack(side="left", padx=8)

    submit_row = customtkinter.CTkFrame(conversion_frame, fg_color="transparent")
    submit_row.pack(fill="x", pady=(10, 0))
    submit_button = customtkinter.CTkButton(
        submit_row,
        text=SUBMIT_TEXT,
        width=120,
        command=callbacks.on_submit,
        font=state.font_default,
    )
    state.style_primary_button(submit_button)
    submit_button.pack(side="left")
    busy_var = customtkinter.StringVar(value="")
    busy_label = customtkinter.CTkLabel(
        submit_row,
        textvariable=busy_var,
        font=state.font_small,
        text_color=state.colors["text_secondary"],
    )
    spinner = customtkinter.CTkProgressBar(submit_row, mode="indeterminate", width=120)

    return OptionsPanelRefs(
        container=container,
        image_frame=image_frame,
        preview_label=preview_label,
        image_name_var=image_name_var,
        size_frame=size_frame,
        preset_var=preset_var,
        preset_buttons=preset_buttons,
        width_var=width_var,
        height_var=height_var,
        width_entry=width_entry,
        height_entry=height_entry,
        aspect_var=aspect_var,
        aspect_checkbox=aspect_checkbox,
        warning_var=warning_var,
        warning_label=warning_label,
        conversion_frame=conversion_frame,
        brightness_var=brightness_var,
        brightness_value_var=brightness_value_var,
        brightness_slider=brightness_slider,
        style_var=style_var,
        style_menu=style_menu,
        invert_var=invert_var,
        invert_checkbox=invert_checkbox,
        submit_button=submit_button,
        busy_var=busy_var,
        busy_label=busy_label,
        spinner=spinner,
    )


def _apply_preview(refs: OptionsPanelRefs, state: SelectionState) -> None:
    image = state.image
    source = image.preview if image is not None else None
    if source is refs.preview_source:
        return
    refs.preview_source = source
    if source is None:
        refs.preview_image = None
        refs.preview_label.configure(image=None)
        refs.image_name_var.set("")
        return
    refs.preview_image = customtkinter.CTkImage(light_image=source, dark_image=source, size=source.size)
    refs.preview_label.configure(image=refs.preview_image)


def apply_selection_state(refs: OptionsPanelRefs, state: SelectionState) -> None:
    """Push a ``SelectionState`` into the widgets."""
    selection = state.selection

    if state.options_visible:
        if not refs.image_frame.winfo_manager():
            refs.image_frame.pack(fill="x", padx=12, pady=(12, 4))
            refs.size_frame.pack(fill="x", padx=12, pady=4)
            refs.conversion_frame.pack(fill="x", padx=12, pady=(4, 12))
    elif refs.image_frame.winfo_manager():
        refs.image_frame.pack_forget()
        refs.size_frame.pack_forget()
        refs.conversion_frame.pack_forget()

    _apply_preview(refs, state)
    if state.image is not None:
        refs.image_name_var.set(
            f"{state.image.display_name}\n{state.image.pixel_width} x {state.image.pixel_height} px"
        )

    refs.preset_var.set(selection.active_preset_key)

    editable = "normal" if state.width_height_editable else "disabled"
    refs.width_entry.configure(state="normal")
    refs.height_entry.configure(state="normal")
    refs.width_var.set(str(selection.width))
    refs.height_var.set(str(selection.height))
    refs.width_entry.configure(state=editable)
    refs.height_entry.configure(state=editable)

    refs.aspect_var.set(selection.aspect_locked)
    refs.aspect_checkbox.configure(state="normal" if state.aspect_toggle_enabled else "disabled")

    if state.warning.active:
        refs.warning_var.set(state.warning.message)
        if not refs.warning_label.winfo_manager():
            refs.warning_label.pack(fill="x", pady=(4, 0))
    else:
        refs.warning_var.set("")
        if refs.warning_label.winfo_manager():
            refs.warning_label.pack_forget()


def commit_pending_entries(refs: OptionsPanelRefs, state: SelectionState, callbacks: OptionsPanelCallbacks) -> None:
    """Forward width/height text not yet committed with Return or focus-out.

    Both texts are read before either callback runs, so a locked edit of one
    field is not followed by a second commit of the field it recomputed.
    """
    if not state.width_height_editable:
        return
    width_text = str(refs.width_var.get()).strip()
    height_text = str(refs.height_var.get()).strip()
    if width_text != str(state.selection.width):
        callbacks.on_width_entered(width_text)
    if height_text != str(state.selection.height):
        callbacks.on_height_entered(height_text)


def read_conversion_values(refs: OptionsPanelRefs) -> Dict[str, Any]:
    """Brightness, style and invert as currently shown."""
    return {
        "brightness": float(refs.brightness_var.get()),
        "style": _style_id(refs.style_var.get()),
        "invert": bool(refs.invert_var.get()),
    }


def set_submit_enabled(refs: OptionsPanelRefs, enabled: bool) -> None:
    refs.submit_button.configure(state="normal" if enabled else "disabled")


def show_busy(refs: OptionsPanelRefs, text: str) -> None:
    refs.busy_var.set(text)
    if not refs.busy_label.winfo_manager():
        refs.busy_label.pack(side="left", padx=(10, 4))
        refs.spinner.pack(side="left", padx=4)
    refs.spinner.start()


def hide_busy(refs: OptionsPanelRefs) -> None:
    refs.spinner.stop()
    refs.busy_var.set("")
    if refs.busy_label.winfo_manager():
        refs.busy_label.pack_forget()
        refs.spinner.pack_forget()
