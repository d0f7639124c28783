"""Built-in output size presets."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ascii_studio.constants import MAX_LENGTH

CUSTOM_PRESET_KEY = "custom"
DEFAULT_PRESET_KEY = "small"


@dataclass(frozen=True)
class PresetDefinition:
    key: str
    fixed_width: Optional[int]
    max_height: int
    label: str = ""

    @property
    def is_custom(self) -> bool:
        return self.fixed_width is None


def builtin_size_presets(max_length: int = MAX_LENGTH) -> list[PresetDefinition]:
    """Presets shipped with the application, in display order."""
    return [
        PresetDefinition(key="twitch", fixed_width=30, max_height=15, label="Twitch"),
        PresetDefinition(key="discord", fixed_width=32, max_height=62, label="Discord"),
        PresetDefinition(key="small", fixed_width=30, max_height=max_length, label="Small"),
        PresetDefinition(key="medium", fixed_width=60, max_height=max_length, label="Medium"),
        PresetDefinition(key="large", fixed_width=120, max_height=max_length, label="Large"),
        PresetDefinition(key=CUSTOM_PRESET_KEY, fixed_width=None, max_height=max_length, label="Custom"),
    ]


@dataclass(frozen=True)
class PresetRegistry:
    """Immutable lookup table of size presets."""

    definitions: Mapping[str, PresetDefinition]
    default_key: str = DEFAULT_PRESET_KEY
    max_length: int = MAX_LENGTH
    order: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        if self.default_key not in self.definitions:
            raise ValueError(f"unknown default preset: {self.default_key}")
        if CUSTOM_PRESET_KEY not in self.definitions:
            raise ValueError("the custom preset must be registered")
        for preset in self.definitions.values():
            if preset.fixed_width is not None and preset.fixed_width <= 0:
                raise ValueError(f"preset {preset.key} needs a positive width")
            if preset.max_height <= 0:
                raise ValueError(f"preset {preset.key} needs a positive height bound")

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[PresetDefinition],
        *,
        default_key: str = DEFAULT_PRESET_KEY,
        max_length: int = MAX_LENGTH,
    ) -> "PresetRegistry":
        ordered = list(definitions)
        return cls(
            definitions=MappingProxyType({preset.key: preset for preset in ordered}),
            default_key=default_key,
            max_length=max_length,
            order=tuple(preset.key for preset in ordered),
        )

    def definition_for(self, key: str) -> PresetDefinition:
        try:
            return self.definitions[key]
        except KeyError:
            raise KeyError(f"unknown preset: {key}") from None

    def all_keys(self) -> frozenset[str]:
        return frozenset(self.definitions)

    def ordered(self) -> list[PresetDefinition]:
        return [self.definitions[key] for key in self.order or self.definitions]

    @property
    def default(self) -> PresetDefinition:
        return self.definitions[self.default_key]


def build_default_registry(max_length: int = MAX_LENGTH) -> PresetRegistry:
    return PresetRegistry.from_definitions(builtin_size_presets(max_length), max_length=max_length)
