"""Shared fixtures: sample images written with Pillow and a preset registry."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from ascii_studio.presets import build_default_registry


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def sample_images(tmp_path: Path) -> dict[str, Path]:
    images: dict[str, Path] = {}

    jpeg_path = tmp_path / "landscape.jpg"
    Image.new("RGB", (800, 400), color=(200, 40, 40)).save(jpeg_path, "JPEG", quality=90)
    images["jpeg"] = jpeg_path

    png_path = tmp_path / "portrait.png"
    Image.new("RGBA", (100, 400), color=(0, 200, 0, 255)).save(png_path, "PNG")
    images["png"] = png_path

    gif_path = tmp_path / "anim.gif"
    Image.new("P", (64, 64), color=0).save(gif_path, "GIF")
    images["gif"] = gif_path

    # GIF data behind a supported extension
    disguised_path = tmp_path / "disguised.png"
    Image.new("P", (64, 64), color=0).save(disguised_path, "GIF")
    images["disguised"] = disguised_path

    rotated_path = tmp_path / "rotated.jpg"
    rotated = Image.new("RGB", (200, 100), color=(10, 10, 10))
    exif = rotated.getexif()
    exif[0x0112] = 6  # Orientation: rotate 90 CW
    rotated.save(rotated_path, "JPEG", exif=exif)
    images["rotated"] = rotated_path

    text_path = tmp_path / "notes.png"
    text_path.write_text("not an image", encoding="utf-8")
    images["not_image"] = text_path

    return images
