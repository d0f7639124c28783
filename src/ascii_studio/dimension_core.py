"""Pure dimension math: aspect-ratio resolution and bound evaluation.

Character cells are roughly twice as tall as they are wide, so a grid that
keeps an image's proportions has half as many rows as the pixel ratio alone
would suggest.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Union

from ascii_studio.constants import MAX_LENGTH, MIN_LENGTH
from ascii_studio.presets import PresetRegistry

AXIS_HEIGHT = "Height"
AXIS_WIDTH = "Width"

RawLength = Union[int, float, str, None]


@dataclass(frozen=True)
class WarningState:
    active: bool = False
    message: str = ""


NO_WARNING = WarningState()


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (7.5 -> 8, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def height_from_width(width: int, image_width: int, image_height: int) -> int:
    """Grid height that keeps the image proportions for ``width`` columns."""
    return max(1, round_half_up(width * image_height / image_width / 2))


def width_from_height(height: int, image_width: int, image_height: int) -> int:
    """Grid width that keeps the image proportions for ``height`` rows.

    Rounds before doubling and applies no floor, unlike ``height_from_width``.
    Callers pass the result through ``apply_bound``.
    """
    return 2 * round_half_up(height * image_width / image_height)


def resolve_preset_heights(registry: PresetRegistry, image_width: int, image_height: int) -> dict[str, int]:
    """Natural (unclamped) height of every fixed-width preset for one image."""
    heights: dict[str, int] = {}
    for preset in registry.ordered():
        if preset.fixed_width is None:
            continue
        heights[preset.key] = height_from_width(preset.fixed_width, image_width, image_height)
    return heights


def warning_message(axis: str, bound: int) -> str:
    return f"Aspect Ratio cannot be maintained. {axis} cannot exceed {bound}."


def apply_bound(
    computed: int,
    bound: int,
    *,
    aspect_locked: bool,
    axis: str = AXIS_HEIGHT,
) -> tuple[int, WarningState]:
    """Clamp ``computed`` to ``bound`` and report whether proportions were lost.

    Clamping only warns while the aspect ratio is locked; otherwise the bound
    is a plain limit.
    """
    if computed <= bound:
        return max(MIN_LENGTH, computed), NO_WARNING

    if aspect_locked:
        return bound, WarningState(active=True, message=warning_message(axis, bound))
    return bound, NO_WARNING


def clamp_length(raw: RawLength, *, fallback: int, max_length: int = MAX_LENGTH) -> int:
    """Normalize a raw field value into ``[1, max_length]``.

    Empty or non-numeric input keeps ``fallback``.
    """
    if raw is None:
        return fallback

    value: float
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return fallback
        try:
            value = float(text)
        except ValueError:
            return fallback
    else:
        value = float(raw)

    if math.isnan(value):
        return fallback
    if math.isinf(value):
        return max_length if value > 0 else MIN_LENGTH

    return max(MIN_LENGTH, min(round_half_up(value), max_length))


def bounded_preset_dimensions(
    registry: PresetRegistry,
    preset_key: str,
    natural_heights: Mapping[str, int],
) -> tuple[int, int, WarningState]:
    """Width, clamped height and warning for a fixed-width preset.

    Fixed presets always keep the aspect ratio, so exceeding the height
    ceiling warns.
    """
    preset = registry.definition_for(preset_key)
    if preset.fixed_width is None:
        raise ValueError("the custom preset has no fixed dimensions")
    height, warning = apply_bound(
        natural_heights[preset_key],
        preset.max_height,
        aspect_locked=True,
        axis=AXIS_HEIGHT,
    )
    return preset.fixed_width, height, warning
