"""
Validation of uploaded files and conversion parameters.
"""
from __future__ import annotations

import math
from pathlib import Path
from typing import Optional, Sequence, Union

from ascii_studio.constants import (
    MAX_BRIGHTNESS,
    MAX_LENGTH,
    MIN_BRIGHTNESS,
    MIN_LENGTH,
    STYLES,
    SUPPORTED_DECODED_FORMATS,
    SUPPORTED_MEDIA_TYPES,
)
from ascii_studio.errors import (
    NO_IMAGE_SELECTED,
    TOO_MANY_IMAGES,
    UNSUPPORTED_FILE_TYPE,
    ValidationError,
)


class UploadValidator:
    """Checks a file selection before any decoding happens."""

    @classmethod
    def media_type_for(cls, path: Union[str, Path]) -> Optional[str]:
        """Media type implied by the file extension, or None if unsupported."""
        return SUPPORTED_MEDIA_TYPES.get(Path(path).suffix.lower())

    @classmethod
    def is_supported_image(cls, path: Union[str, Path]) -> bool:
        return cls.media_type_for(path) is not None

    @classmethod
    def validate_selection(cls, paths: Sequence[Union[str, Path]]) -> Path:
        """Return the single selected image path.

        Raises ValidationError for an empty selection, several files or an
        unsupported media type.
        """
        selected = [Path(p) for p in paths if str(p).strip()]
        if not selected:
            raise ValidationError(NO_IMAGE_SELECTED)
        if len(selected) > 1:
            raise ValidationError(TOO_MANY_IMAGES)

        path = selected[0]
        if not cls.is_supported_image(path):
            raise ValidationError(UNSUPPORTED_FILE_TYPE)
        return path

    @classmethod
    def validate_decoded_format(cls, decoded_format: Optional[str]) -> str:
        """Confirm the decoder agrees with the extension."""
        media_type = SUPPORTED_DECODED_FORMATS.get(str(decoded_format or "").upper())
        if media_type is None:
            raise ValidationError(UNSUPPORTED_FILE_TYPE)
        return media_type


class ParamValidator:
    """Client-side checks mirroring the conversion service."""

    @classmethod
    def validate_length(cls, value: Union[int, float, str], name: str, max_length: int = MAX_LENGTH) -> int:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValidationError(f"invalid {name}: no value entered")
            try:
                value = float(value)
            except ValueError:
                raise ValidationError(f"invalid {name}: must be a number") from None

        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            raise ValidationError(f"invalid {name}: must be a number")

        if not MIN_LENGTH <= value <= max_length or value != int(value):
            raise ValidationError(
                f"invalid {name}: must be a number between {MIN_LENGTH} and {max_length}"
            )
        return int(value)

    @classmethod
    def validate_brightness(cls, value: Union[int, float, str]) -> float:
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                raise ValidationError("invalid brightness: must be a number") from None

        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            raise ValidationError("invalid brightness: must be a number")

        if not MIN_BRIGHTNESS <= value <= MAX_BRIGHTNESS:
            raise ValidationError(
                f"invalid brightness: must be a number between {MIN_BRIGHTNESS:g} & {MAX_BRIGHTNESS:g}"
            )
        return float(value)

    @classmethod
    def validate_style(cls, value: str) -> str:
        style = str(value).strip()
        if style not in STYLES:
            raise ValidationError(
                f"invalid style: must be one of the following: {', '.join(STYLES)}"
            )
        return style
