"""Copy-to-clipboard with a transient acknowledgment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from ascii_studio.constants import CLIPBOARD_FEEDBACK_DELAY_MS
from ascii_studio.errors import ClipboardError
from ascii_studio.submission import OutputGrid


class FeedbackKind(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class Scheduler(Protocol):
    def after(self, ms: int, func: Callable[[], None]) -> Any: ...
    def after_cancel(self, id: Any) -> None: ...


@dataclass(frozen=True)
class ClipboardFeedbackHooks:
    show: Callable[[FeedbackKind], None]
    hide: Callable[[FeedbackKind], None]


@dataclass
class ClipboardFeedback:
    kind: Optional[FeedbackKind] = None
    visible: bool = False
    expiry: Any = None


def copy_text_to_clipboard(app: Any, text: str) -> None:
    """Place ``text`` on the clipboard owned by the Tk root ``app``."""
    try:
        app.clipboard_clear()
        app.clipboard_append(text)
        app.update_idletasks()
    except Exception as exc:
        raise ClipboardError(f"Clipboard write failed: {exc}") from exc


class ClipboardFeedbackController:
    """Shows one acknowledgment at a time; a new activation replaces the old one."""

    def __init__(
        self,
        *,
        write_text: Callable[[str], None],
        scheduler: Scheduler,
        hooks: ClipboardFeedbackHooks,
        delay_ms: int = CLIPBOARD_FEEDBACK_DELAY_MS,
    ) -> None:
        self._write_text = write_text
        self._scheduler = scheduler
        self._hooks = hooks
        self._delay_ms = delay_ms
        self._feedback = ClipboardFeedback()

    @property
    def feedback(self) -> ClipboardFeedback:
        return self._feedback

    def activate(self, grid: Optional[OutputGrid]) -> Optional[FeedbackKind]:
        if grid is None or grid.is_empty:
            return None

        self._cancel_pending()
        try:
            self._write_text(grid.transcript())
            kind = FeedbackKind.SUCCESS
        except ClipboardError as exc:
            logging.warning("Copy to clipboard failed: %s", exc)
            kind = FeedbackKind.FAILURE

        self._show(kind)
        return kind

    def clear(self) -> None:
        """Hide any acknowledgment immediately."""
        self._cancel_pending()
        if self._feedback.visible and self._feedback.kind is not None:
            self._hooks.hide(self._feedback.kind)
        self._feedback = ClipboardFeedback()

    def _cancel_pending(self) -> None:
        expiry = self._feedback.expiry
        if expiry is None:
            return
        try:
            self._scheduler.after_cancel(expiry)
        except Exception:
            logging.debug("after_cancel failed for %r", expiry, exc_info=True)
        self._feedback.expiry = None

    def _show(self, kind: FeedbackKind) -> None:
        previous = self._feedback
        if previous.visible and previous.kind is not None and previous.kind is not kind:
            self._hooks.hide(previous.kind)

        self._hooks.show(kind)
        self._feedback = ClipboardFeedback(kind=kind, visible=True)
        self._feedback.expiry = self._scheduler.after(self._delay_ms, self._dismiss)

    def _dismiss(self) -> None:
        feedback = self._feedback
        feedback.expiry = None
        if not feedback.visible or feedback.kind is None:
            return
        feedback.visible = False
        self._hooks.hide(feedback.kind)
