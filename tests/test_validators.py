from __future__ import annotations

from pathlib import Path

import pytest

from ascii_studio.errors import NO_IMAGE_SELECTED, TOO_MANY_IMAGES, UNSUPPORTED_FILE_TYPE, ValidationError
from ascii_studio.validators import ParamValidator, UploadValidator


def test_validate_selection_requires_a_file() -> None:
    with pytest.raises(ValidationError, match=NO_IMAGE_SELECTED):
        UploadValidator.validate_selection([])


def test_validate_selection_ignores_blank_entries() -> None:
    with pytest.raises(ValidationError, match=NO_IMAGE_SELECTED):
        UploadValidator.validate_selection(["  "])


def test_validate_selection_rejects_several_files() -> None:
    with pytest.raises(ValidationError) as excinfo:
        UploadValidator.validate_selection([Path("a.png"), Path("b.png")])
    assert str(excinfo.value) == TOO_MANY_IMAGES


@pytest.mark.parametrize("name", ["anim.gif", "photo.webp", "scan.bmp", "README"])
def test_validate_selection_rejects_unsupported_types(name: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        UploadValidator.validate_selection([name])
    assert str(excinfo.value) == UNSUPPORTED_FILE_TYPE


@pytest.mark.parametrize("name", ["photo.jpg", "photo.JPEG", "icon.png"])
def test_validate_selection_accepts_jpeg_and_png(name: str) -> None:
    assert UploadValidator.validate_selection([name]) == Path(name)


def test_media_type_for_uses_extension() -> None:
    assert UploadValidator.media_type_for("a.JPG") == "image/jpeg"
    assert UploadValidator.media_type_for("a.png") == "image/png"
    assert UploadValidator.media_type_for("a.gif") is None


def test_validate_decoded_format() -> None:
    assert UploadValidator.validate_decoded_format("jpeg") == "image/jpeg"
    with pytest.raises(ValidationError):
        UploadValidator.validate_decoded_format("GIF")
    with pytest.raises(ValidationError):
        UploadValidator.validate_decoded_format(None)


def test_validate_length_accepts_numbers_in_range() -> None:
    assert ParamValidator.validate_length(1, "width") == 1
    assert ParamValidator.validate_length("500", "height") == 500
    assert ParamValidator.validate_length(12.0, "width") == 12


@pytest.mark.parametrize("value", [0, 501, 12.5, -3])
def test_validate_length_rejects_out_of_range(value) -> None:
    with pytest.raises(ValidationError, match="invalid width: must be a number between 1 and 500"):
        ParamValidator.validate_length(value, "width")


@pytest.mark.parametrize("value", ["", "tall", True, float("nan")])
def test_validate_length_rejects_non_numbers(value) -> None:
    with pytest.raises(ValidationError, match="invalid height"):
        ParamValidator.validate_length(value, "height")


def test_validate_brightness() -> None:
    assert ParamValidator.validate_brightness("50") == 50.0
    assert ParamValidator.validate_brightness(0) == 0.0
    with pytest.raises(ValidationError):
        ParamValidator.validate_brightness(100.5)
    with pytest.raises(ValidationError):
        ParamValidator.validate_brightness("bright")


def test_validate_style() -> None:
    assert ParamValidator.validate_style("contrast") == "contrast"
    with pytest.raises(ValidationError, match="invalid style"):
        ParamValidator.validate_style("ascii")
