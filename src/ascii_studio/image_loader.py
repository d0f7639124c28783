"""Background image decoding for accepted uploads."""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from ascii_studio.constants import PREVIEW_THUMBNAIL_SIZE
from ascii_studio.errors import UNSUPPORTED_FILE_TYPE, ValidationError
from ascii_studio.selection_state import ImageMeta
from ascii_studio.validators import UploadValidator

WorkerStarter = Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class LoadOutcome:
    token: int
    path: Path
    meta: Optional[ImageMeta] = None
    error: Optional[BaseException] = None


def load_image_meta(path: Path) -> ImageMeta:
    """Decode ``path`` and build its metadata with a preview thumbnail."""
    try:
        with Image.open(path) as opened:
            UploadValidator.validate_decoded_format(opened.format)
            opened.load()
            img = ImageOps.exif_transpose(opened)
    except UnidentifiedImageError:
        raise ValidationError(UNSUPPORTED_FILE_TYPE) from None
    except OSError as exc:
        raise ValidationError(f"Could not read {path.name}: {exc}") from exc

    try:
        width, height = img.size
        preview = img.copy()
        preview.thumbnail(PREVIEW_THUMBNAIL_SIZE)
    finally:
        img.close()

    return ImageMeta(pixel_width=width, pixel_height=height, display_name=path.name, preview=preview)


def _start_daemon_thread(target: Callable[[], None]) -> None:
    worker = threading.Thread(target=target, daemon=True, name="asciistudio-image-loader")
    worker.start()


class ImageLoadSession:
    """Decodes one upload at a time; newer uploads supersede older ones."""

    def __init__(self, *, start_worker: Optional[WorkerStarter] = None) -> None:
        self._queue: "queue.Queue[LoadOutcome]" = queue.Queue()
        self._start_worker = start_worker or _start_daemon_thread
        self._token = 0
        self._in_flight = 0

    @property
    def pending(self) -> bool:
        """True while any started load, current or stale, has not reported."""
        return self._in_flight > 0

    def begin(self, path: Path) -> int:
        self._token += 1
        token = self._token
        out_queue = self._queue

        def _work() -> None:
            try:
                meta = load_image_meta(path)
            except Exception as exc:
                out_queue.put(LoadOutcome(token=token, path=path, error=exc))
                return
            out_queue.put(LoadOutcome(token=token, path=path, meta=meta))

        logging.debug("Image load #%d started: %s", token, path)
        self._start_worker(_work)
        self._in_flight += 1
        return token

    def invalidate(self) -> None:
        """Forget any in-flight load; its result will be discarded."""
        self._token += 1

    def drain(self) -> List[LoadOutcome]:
        """Return finished loads for the current token, releasing stale ones."""
        current: List[LoadOutcome] = []
        while True:
            try:
                outcome = self._queue.get_nowait()
            except queue.Empty:
                break
            self._in_flight -= 1
            if outcome.token != self._token:
                logging.debug("Discarding stale image load #%d (current #%d)", outcome.token, self._token)
                if outcome.meta is not None:
                    outcome.meta.release()
                continue
            current.append(outcome)
        return current
