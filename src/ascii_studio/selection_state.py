"""Selection state and its transitions.

Every transition is a pure function taking the current ``SelectionState`` and
the preset registry and returning the next state. The workflow layer owns the
single live instance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from ascii_studio.dimension_core import (
    AXIS_HEIGHT,
    AXIS_WIDTH,
    NO_WARNING,
    RawLength,
    WarningState,
    apply_bound,
    bounded_preset_dimensions,
    clamp_length,
    height_from_width,
    resolve_preset_heights,
    width_from_height,
)
from ascii_studio.presets import CUSTOM_PRESET_KEY, PresetRegistry


@dataclass(frozen=True)
class ImageMeta:
    pixel_width: int
    pixel_height: int
    display_name: str
    preview: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.pixel_width <= 0 or self.pixel_height <= 0:
            raise ValueError("image dimensions must be positive")

    def release(self) -> None:
        """Close the preview image, if any."""
        close = getattr(self.preview, "close", None)
        if callable(close):
            try:
                close()
            except Exception:
                logging.debug("Preview close failed for %s", self.display_name, exc_info=True)


@dataclass(frozen=True)
class DimensionSelection:
    active_preset_key: str
    width: int
    height: int
    aspect_locked: bool = True

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("width and height must be at least 1")

    @property
    def is_custom(self) -> bool:
        return self.active_preset_key == CUSTOM_PRESET_KEY


@dataclass(frozen=True)
class SelectionState:
    selection: DimensionSelection
    image: Optional[ImageMeta] = None
    warning: WarningState = NO_WARNING
    natural_heights: Mapping[str, int] = field(default_factory=dict)
    options_visible: bool = False

    @property
    def width_height_editable(self) -> bool:
        return self.selection.is_custom

    @property
    def aspect_toggle_enabled(self) -> bool:
        return self.selection.is_custom


def baseline_selection(registry: PresetRegistry) -> DimensionSelection:
    """Selection shown before any image is accepted (square aspect assumed)."""
    preset = registry.default
    width = preset.fixed_width or 1
    return DimensionSelection(
        active_preset_key=preset.key,
        width=width,
        height=min(height_from_width(width, 1, 1), preset.max_height),
        aspect_locked=True,
    )


def initial_state(registry: PresetRegistry) -> SelectionState:
    return SelectionState(selection=baseline_selection(registry))


def reset_to_baseline(state: SelectionState, registry: PresetRegistry) -> SelectionState:
    """Drop the image and every value derived from it.

    The caller is responsible for releasing ``state.image``.
    """
    return initial_state(registry)


def _natural_height(state: SelectionState, preset_key: str, registry: PresetRegistry) -> int:
    height = state.natural_heights.get(preset_key)
    if height is not None:
        return height
    fixed_width = registry.definition_for(preset_key).fixed_width or 1
    return height_from_width(fixed_width, 1, 1)


def _with_preset_dimensions(state: SelectionState, preset_key: str, registry: PresetRegistry) -> SelectionState:
    natural = {preset_key: _natural_height(state, preset_key, registry)}
    width, height, warning = bounded_preset_dimensions(registry, preset_key, natural)
    selection = DimensionSelection(
        active_preset_key=preset_key,
        width=width,
        height=height,
        aspect_locked=True,
    )
    return replace(state, selection=selection, warning=warning)


def _locked_height(width: int, image: ImageMeta, registry: PresetRegistry) -> tuple[int, WarningState]:
    computed = height_from_width(width, image.pixel_width, image.pixel_height)
    return apply_bound(computed, registry.max_length, aspect_locked=True, axis=AXIS_HEIGHT)


def _locked_width(height: int, image: ImageMeta, registry: PresetRegistry) -> tuple[int, WarningState]:
    computed = width_from_height(height, image.pixel_width, image.pixel_height)
    return apply_bound(computed, registry.max_length, aspect_locked=True, axis=AXIS_WIDTH)


def apply_image(state: SelectionState, image: ImageMeta, registry: PresetRegistry) -> SelectionState:
    """Accept a freshly decoded image and recompute every preset for it."""
    natural_heights = resolve_preset_heights(registry, image.pixel_width, image.pixel_height)
    next_state = replace(state, image=image, natural_heights=natural_heights, options_visible=True)
    selection = next_state.selection

    if not selection.is_custom:
        return _with_preset_dimensions(next_state, selection.active_preset_key, registry)

    # custom without lock keeps whatever the user typed
    if not selection.aspect_locked:
        return replace(next_state, warning=NO_WARNING)

    width = min(image.pixel_width, registry.max_length)
    height, warning = _locked_height(width, image, registry)
    return replace(
        next_state,
        selection=replace(selection, width=width, height=height),
        warning=warning,
    )


def select_preset(state: SelectionState, preset_key: str, registry: PresetRegistry) -> SelectionState:
    registry.definition_for(preset_key)

    if preset_key != CUSTOM_PRESET_KEY:
        return _with_preset_dimensions(state, preset_key, registry)

    selection = replace(state.selection, active_preset_key=CUSTOM_PRESET_KEY)
    height, warning = apply_bound(
        selection.height,
        registry.max_length,
        aspect_locked=selection.aspect_locked,
        axis=AXIS_HEIGHT,
    )
    return replace(state, selection=replace(selection, height=height), warning=warning)


def set_aspect_locked(state: SelectionState, locked: bool, registry: PresetRegistry) -> SelectionState:
    selection = state.selection
    if not selection.is_custom:
        logging.debug("Aspect lock is fixed while preset %s is active", selection.active_preset_key)
        return state

    selection = replace(selection, aspect_locked=locked)
    if not locked:
        return replace(state, selection=selection, warning=NO_WARNING)
    if state.image is None:
        return replace(state, selection=selection)

    height, warning = _locked_height(selection.width, state.image, registry)
    return replace(state, selection=replace(selection, height=height), warning=warning)


def edit_width(state: SelectionState, raw: RawLength, registry: PresetRegistry) -> SelectionState:
    selection = state.selection
    if not selection.is_custom:
        logging.debug("Ignoring width edit for preset %s", selection.active_preset_key)
        return state

    width = clamp_length(raw, fallback=selection.width, max_length=registry.max_length)
    selection = replace(selection, width=width)
    if not selection.aspect_locked:
        return replace(state, selection=selection, warning=NO_WARNING)
    if state.image is None:
        return replace(state, selection=selection)

    height, warning = _locked_height(width, state.image, registry)
    return replace(state, selection=replace(selection, height=height), warning=warning)


def edit_height(state: SelectionState, raw: RawLength, registry: PresetRegistry) -> SelectionState:
    selection = state.selection
    if not selection.is_custom:
        logging.debug("Ignoring height edit for preset %s", selection.active_preset_key)
        return state

    height = clamp_length(raw, fallback=selection.height, max_length=registry.max_length)
    selection = replace(selection, height=height)
    if not selection.aspect_locked:
        return replace(state, selection=selection, warning=NO_WARNING)
    if state.image is None:
        return replace(state, selection=selection)

    width, warning = _locked_width(height, state.image, registry)
    return replace(state, selection=replace(selection, width=width), warning=warning)
