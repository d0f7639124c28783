"""Adapter between raw UI events and the typed workflow transitions.

The GUI forwards user input here; this controller owns the live
``SelectionState`` and the accepted image path, drives the background image
load and delegates submission and clipboard handling to their components.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ascii_studio.clipboard_feedback import ClipboardFeedbackController, FeedbackKind, Scheduler
from ascii_studio.constants import DEFAULT_BRIGHTNESS, DEFAULT_STYLE, LIGHT_THEME, QUEUE_POLL_INTERVAL_MS
from ascii_studio.dimension_core import RawLength
from ascii_studio.errors import NO_IMAGE_SELECTED, ErrorHandler, ValidationError
from ascii_studio.image_loader import ImageLoadSession
from ascii_studio.presets import PresetRegistry
from ascii_studio.selection_state import (
    ImageMeta,
    SelectionState,
    apply_image,
    edit_height,
    edit_width,
    initial_state,
    reset_to_baseline,
    select_preset,
    set_aspect_locked,
)
from ascii_studio.submission import ConversionParams, SubmissionOrchestrator
from ascii_studio.validators import UploadValidator


@dataclass(frozen=True)
class WorkflowView:
    render_selection: Callable[[SelectionState], None]
    show_error: Callable[[str], None]
    clear_error: Callable[[], None]


class WorkflowController:
    def __init__(
        self,
        *,
        registry: PresetRegistry,
        view: WorkflowView,
        scheduler: Scheduler,
        loader: ImageLoadSession,
        orchestrator: SubmissionOrchestrator,
        clipboard: ClipboardFeedbackController,
        poll_interval_ms: int = QUEUE_POLL_INTERVAL_MS,
    ) -> None:
        self._registry = registry
        self._view = view
        self._scheduler = scheduler
        self._loader = loader
        self._orchestrator = orchestrator
        self._clipboard = clipboard
        self._poll_interval_ms = poll_interval_ms
        self._state = initial_state(registry)
        self._image_path: Optional[Path] = None
        self._load_poll_scheduled = False
        self._submit_poll_scheduled = False

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def image_path(self) -> Optional[Path]:
        return self._image_path

    @property
    def registry(self) -> PresetRegistry:
        return self._registry

    def start(self) -> None:
        self._view.render_selection(self._state)

    # ---- upload ----
    def on_files_selected(self, paths: Sequence[Union[str, Path]]) -> None:
        try:
            path = UploadValidator.validate_selection(paths)
        except ValidationError as exc:
            logging.info("Upload rejected: %s", exc)
            self._reject_upload(str(exc))
            return

        self._loader.begin(path)
        self._schedule_load_poll()

    def _schedule_load_poll(self) -> None:
        if self._load_poll_scheduled:
            return
        self._load_poll_scheduled = True
        self._scheduler.after(self._poll_interval_ms, self._poll_image_load)

    def _poll_image_load(self) -> None:
        self._load_poll_scheduled = False
        for outcome in self._loader.drain():
            if outcome.meta is not None:
                self._accept_image(outcome.path, outcome.meta)
                continue
            error = outcome.error or ValidationError("Could not read the image.")
            if not isinstance(error, ValidationError):
                ErrorHandler.log_error(error, {"path": str(outcome.path)})
            self._reject_upload(ErrorHandler.get_user_friendly_message(error, filepath=outcome.path))
        if self._loader.pending:
            self._schedule_load_poll()

    def _accept_image(self, path: Path, image: ImageMeta) -> None:
        previous = self._state.image
        self._state = apply_image(self._state, image, self._registry)
        if previous is not None and previous is not image:
            previous.release()
        self._image_path = path
        self._orchestrator.supersede()
        self._clipboard.clear()
        self._view.clear_error()
        self._view.render_selection(self._state)
        logging.info("Image accepted: %s (%dx%d)", image.display_name, image.pixel_width, image.pixel_height)

    def _reject_upload(self, message: str) -> None:
        self._loader.invalidate()
        previous = self._state.image
        self._state = reset_to_baseline(self._state, self._registry)
        if previous is not None:
            previous.release()
        self._image_path = None
        self._view.render_selection(self._state)
        self._view.show_error(message)

    # ---- dimensions ----
    def on_preset_selected(self, preset_key: str) -> None:
        self._update(select_preset(self._state, preset_key, self._registry))

    def on_width_entered(self, raw: RawLength) -> None:
        self._update(edit_width(self._state, raw, self._registry))

    def on_height_entered(self, raw: RawLength) -> None:
        self._update(edit_height(self._state, raw, self._registry))

    def on_aspect_toggled(self, locked: bool) -> None:
        self._update(set_aspect_locked(self._state, locked, self._registry))

    def _update(self, state: SelectionState) -> None:
        self._state = state
        self._view.render_selection(state)

    # ---- submission ----
    def on_submit(
        self,
        *,
        brightness: float = DEFAULT_BRIGHTNESS,
        style: str = DEFAULT_STYLE,
        invert: bool = False,
        theme: str = LIGHT_THEME,
    ) -> bool:
        if self._image_path is None:
            self._view.show_error(NO_IMAGE_SELECTED)
            return False

        selection = self._state.selection
        params = ConversionParams(
            width=selection.width,
            height=selection.height,
            brightness=brightness,
            style=style,
            invert=invert,
            theme=theme,
        )
        started = self._orchestrator.submit(self._image_path, params)
        if started:
            self._schedule_submit_poll()
        return started

    def _schedule_submit_poll(self) -> None:
        if self._submit_poll_scheduled:
            return
        self._submit_poll_scheduled = True
        self._scheduler.after(self._poll_interval_ms, self._poll_submission)

    def _poll_submission(self) -> None:
        self._submit_poll_scheduled = False
        if self._orchestrator.poll():
            self._schedule_submit_poll()

    # ---- clipboard ----
    def on_result_activated(self) -> Optional[FeedbackKind]:
        return self._clipboard.activate(self._orchestrator.output)

    def dismiss_error(self) -> None:
        self._view.clear_error()
