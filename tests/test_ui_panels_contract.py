"""Contract tests for panel update helpers, using fake widgets."""

from __future__ import annotations

from typing import Any

from ascii_studio.clipboard_feedback import FeedbackKind
from ascii_studio.presets import build_default_registry
from ascii_studio.selection_state import (
    ImageMeta,
    apply_image,
    edit_width,
    initial_state,
    select_preset,
    set_aspect_locked,
)
from ascii_studio.submission import OutputGrid
from ascii_studio.ui import error_banner, output_panel
from ascii_studio.ui.options_panel import (
    OptionsPanelCallbacks,
    OptionsPanelRefs,
    apply_selection_state,
    commit_pending_entries,
    hide_busy,
    read_conversion_values,
    set_submit_enabled,
    show_busy,
)
from ascii_studio.ui.output_panel import OutputPanelRefs


class _FakeWidget:
    def __init__(self) -> None:
        self.options: dict[str, Any] = {}
        self.visible = False
        self.text = ""
        self.started = False

    def configure(self, **kwargs: Any) -> None:
        self.options.update(kwargs)

    def pack(self, **_kwargs: Any) -> None:
        self.visible = True

    def pack_forget(self) -> None:
        self.visible = False

    def winfo_manager(self) -> str:
        return "pack" if self.visible else ""

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.started = False

    def focus_set(self) -> None:
        pass

    def delete(self, _start: str, _end: str) -> None:
        self.text = ""

    def insert(self, _index: str, text: str) -> None:
        self.text += text


class _FakeVar:
    def __init__(self, value: Any = "") -> None:
        self.value = value

    def get(self) -> Any:
        return self.value

    def set(self, value: Any) -> None:
        self.value = value


def _options_refs() -> OptionsPanelRefs:
    return OptionsPanelRefs(
        container=_FakeWidget(),
        image_frame=_FakeWidget(),
        preview_label=_FakeWidget(),
        image_name_var=_FakeVar(),
        size_frame=_FakeWidget(),
        preset_var=_FakeVar("small"),
        preset_buttons=[],
        width_var=_FakeVar(),
        height_var=_FakeVar(),
        width_entry=_FakeWidget(),
        height_entry=_FakeWidget(),
        aspect_var=_FakeVar(True),
        aspect_checkbox=_FakeWidget(),
        warning_var=_FakeVar(),
        warning_label=_FakeWidget(),
        conversion_frame=_FakeWidget(),
        brightness_var=_FakeVar(42.0),
        brightness_value_var=_FakeVar("42"),
        brightness_slider=_FakeWidget(),
        style_var=_FakeVar("High contrast"),
        style_menu=_FakeWidget(),
        invert_var=_FakeVar(True),
        invert_checkbox=_FakeWidget(),
        submit_button=_FakeWidget(),
        busy_var=_FakeVar(),
        busy_label=_FakeWidget(),
        spinner=_FakeWidget(),
    )


def test_baseline_state_hides_options() -> None:
    registry = build_default_registry()
    refs = _options_refs()

    apply_selection_state(refs, initial_state(registry))

    assert not refs.image_frame.visible
    assert not refs.conversion_frame.visible
    assert refs.width_var.get() == "30"
    assert refs.height_var.get() == "15"
    assert refs.width_entry.options["state"] == "disabled"
    assert refs.aspect_checkbox.options["state"] == "disabled"


def test_custom_state_enables_fields_and_shows_warning() -> None:
    registry = build_default_registry()
    refs = _options_refs()
    state = apply_image(initial_state(registry), ImageMeta(100, 1000, "tall.png"), registry)
    state = edit_width(select_preset(state, "custom", registry), "200", registry)

    apply_selection_state(refs, state)

    assert refs.image_frame.visible
    assert refs.preset_var.get() == "custom"
    assert refs.width_entry.options["state"] == "normal"
    assert refs.aspect_checkbox.options["state"] == "normal"
    assert refs.warning_label.visible
    assert refs.warning_var.get() == "Aspect Ratio cannot be maintained. Height cannot exceed 500."
    assert "tall.png" in refs.image_name_var.get()


def test_warning_hidden_once_cleared() -> None:
    registry = build_default_registry()
    refs = _options_refs()
    state = apply_image(initial_state(registry), ImageMeta(100, 1000, "tall.png"), registry)
    state = edit_width(select_preset(state, "custom", registry), "200", registry)
    apply_selection_state(refs, state)

    apply_selection_state(refs, edit_width(state, "20", registry))

    assert not refs.warning_label.visible
    assert refs.warning_var.get() == ""


def _recording_callbacks(calls: list, on_width=None) -> OptionsPanelCallbacks:
    def _width(raw: str) -> None:
        calls.append(("width", raw))
        if on_width is not None:
            on_width(raw)

    return OptionsPanelCallbacks(
        on_preset_selected=lambda key: calls.append(("preset", key)),
        on_width_entered=_width,
        on_height_entered=lambda raw: calls.append(("height", raw)),
        on_aspect_toggled=lambda locked: calls.append(("aspect", locked)),
        on_submit=lambda: calls.append(("submit",)),
    )


def _custom_state(registry, *, locked: bool = True):
    state = apply_image(initial_state(registry), ImageMeta(800, 400, "wide.png"), registry)
    state = select_preset(state, "custom", registry)
    return set_aspect_locked(state, locked, registry)


def test_commit_pending_entries_forwards_typed_width_once() -> None:
    registry = build_default_registry()
    refs = _options_refs()
    holder = {"state": _custom_state(registry)}
    apply_selection_state(refs, holder["state"])

    def _apply_width(raw: str) -> None:
        holder["state"] = edit_width(holder["state"], raw, registry)
        apply_selection_state(refs, holder["state"])

    calls: list = []
    refs.width_var.set("100")
    commit_pending_entries(refs, holder["state"], _recording_callbacks(calls, on_width=_apply_width))

    assert calls == [("width", "100")]
    assert (holder["state"].selection.width, holder["state"].selection.height) == (100, 25)
    assert refs.height_var.get() == "25"


def test_commit_pending_entries_forwards_both_unlocked_fields() -> None:
    registry = build_default_registry()
    refs = _options_refs()
    state = _custom_state(registry, locked=False)
    apply_selection_state(refs, state)

    calls: list = []
    refs.width_var.set(" 90 ")
    refs.height_var.set("12")
    commit_pending_entries(refs, state, _recording_callbacks(calls))

    assert calls == [("width", "90"), ("height", "12")]


def test_commit_pending_entries_ignores_unchanged_or_preset_fields() -> None:
    registry = build_default_registry()
    calls: list = []

    refs = _options_refs()
    custom = _custom_state(registry)
    apply_selection_state(refs, custom)
    commit_pending_entries(refs, custom, _recording_callbacks(calls))

    preset_refs = _options_refs()
    preset_state = apply_image(initial_state(registry), ImageMeta(800, 400, "wide.png"), registry)
    apply_selection_state(preset_refs, preset_state)
    preset_refs.width_var.set("77")
    commit_pending_entries(preset_refs, preset_state, _recording_callbacks(calls))

    assert calls == []


def test_read_conversion_values_maps_style_label() -> None:
    assert read_conversion_values(_options_refs()) == {"brightness": 42.0, "style": "contrast", "invert": True}


def test_busy_indicator_and_submit_state() -> None:
    refs = _options_refs()

    set_submit_enabled(refs, False)
    show_busy(refs, "Converting…")
    assert refs.submit_button.options["state"] == "disabled"
    assert refs.busy_label.visible and refs.spinner.started

    hide_busy(refs)
    set_submit_enabled(refs, True)
    assert refs.submit_button.options["state"] == "normal"
    assert not refs.busy_label.visible and not refs.spinner.started


def _output_refs() -> OutputPanelRefs:
    return OutputPanelRefs(
        container=_FakeWidget(),
        hint_label=_FakeWidget(),
        result_box=_FakeWidget(),
        success_label=_FakeWidget(),
        failure_label=_FakeWidget(),
    )


def test_output_panel_shows_and_clears_grid() -> None:
    refs = _output_refs()

    output_panel.show_output(refs, OutputGrid(rows=(("#", "."), (".", "#"))))
    assert refs.result_box.text == "#.\n.#"
    assert refs.result_box.options["state"] == "disabled"

    output_panel.clear_output(refs)
    assert refs.result_box.text == ""


def test_output_panel_feedback_labels() -> None:
    refs = _output_refs()

    output_panel.show_feedback(refs, FeedbackKind.SUCCESS)
    assert refs.success_label.visible and not refs.failure_label.visible

    output_panel.hide_feedback(refs, FeedbackKind.SUCCESS)
    output_panel.show_feedback(refs, FeedbackKind.FAILURE)
    assert refs.failure_label.visible and not refs.success_label.visible


def test_error_banner_show_and_clear() -> None:
    refs = error_banner.ErrorBannerRefs(
        frame=_FakeWidget(),
        message_var=_FakeVar(),
        message_label=_FakeWidget(),
        dismiss_button=_FakeWidget(),
        pack_options={"side": "top"},
    )

    error_banner.show_error(refs, "No image selected.")
    assert refs.frame.visible and refs.message_var.get() == "No image selected."

    error_banner.clear_error(refs)
    assert not refs.frame.visible and refs.message_var.get() == ""
