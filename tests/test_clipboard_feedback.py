from __future__ import annotations

from typing import Any, Callable, Dict, List

import pytest

from ascii_studio.clipboard_feedback import (
    ClipboardFeedbackController,
    ClipboardFeedbackHooks,
    FeedbackKind,
    copy_text_to_clipboard,
)
from ascii_studio.errors import ClipboardError
from ascii_studio.submission import OutputGrid


class FakeScheduler:
    """Stands in for Tk's after/after_cancel with a manual clock."""

    def __init__(self) -> None:
        self.now = 0
        self._next_id = 0
        self.timers: Dict[str, tuple[int, Callable[[], None]]] = {}
        self.cancelled: List[str] = []

    def after(self, ms: int, func: Callable[[], None]) -> str:
        self._next_id += 1
        timer_id = f"after#{self._next_id}"
        self.timers[timer_id] = (self.now + ms, func)
        return timer_id

    def after_cancel(self, timer_id: Any) -> None:
        self.cancelled.append(timer_id)
        self.timers.pop(timer_id, None)

    def advance(self, ms: int) -> None:
        self.now += ms
        due = sorted((t for t in self.timers.items() if t[1][0] <= self.now), key=lambda t: t[1][0])
        for timer_id, (_when, func) in due:
            self.timers.pop(timer_id, None)
            func()


class DummyClipboardApp:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.text = ""

    def clipboard_clear(self) -> None:
        if self.fail:
            raise RuntimeError("clipboard locked")
        self.text = ""

    def clipboard_append(self, text: str) -> None:
        self.text += text

    def update_idletasks(self) -> None:
        pass


GRID = OutputGrid(rows=(("a", "b"), ("c", "d")))


def _controller(scheduler: FakeScheduler, events: list, app: DummyClipboardApp) -> ClipboardFeedbackController:
    return ClipboardFeedbackController(
        write_text=lambda text: copy_text_to_clipboard(app, text),
        scheduler=scheduler,
        hooks=ClipboardFeedbackHooks(
            show=lambda kind: events.append(("show", kind)),
            hide=lambda kind: events.append(("hide", kind)),
        ),
        delay_ms=1500,
    )


def test_activate_copies_transcript_and_dismisses_after_delay() -> None:
    scheduler, events, app = FakeScheduler(), [], DummyClipboardApp()
    controller = _controller(scheduler, events, app)

    assert controller.activate(GRID) is FeedbackKind.SUCCESS
    assert app.text == "ab\ncd"
    assert controller.feedback.visible

    scheduler.advance(1499)
    assert events == [("show", FeedbackKind.SUCCESS)]
    scheduler.advance(1)
    assert events == [("show", FeedbackKind.SUCCESS), ("hide", FeedbackKind.SUCCESS)]
    assert not controller.feedback.visible


def test_second_activation_replaces_pending_dismissal() -> None:
    scheduler, events, app = FakeScheduler(), [], DummyClipboardApp()
    controller = _controller(scheduler, events, app)

    controller.activate(GRID)
    first_timer = controller.feedback.expiry
    scheduler.advance(1000)
    controller.activate(GRID)

    assert first_timer in scheduler.cancelled
    scheduler.advance(600)  # first timer would have fired here
    assert ("hide", FeedbackKind.SUCCESS) not in events

    scheduler.advance(900)
    assert events.count(("hide", FeedbackKind.SUCCESS)) == 1


def test_clipboard_failure_shows_failure_acknowledgment() -> None:
    scheduler, events, app = FakeScheduler(), [], DummyClipboardApp(fail=True)
    controller = _controller(scheduler, events, app)

    assert controller.activate(GRID) is FeedbackKind.FAILURE
    assert events == [("show", FeedbackKind.FAILURE)]


def test_switching_kind_hides_previous_acknowledgment() -> None:
    scheduler, events, app = FakeScheduler(), [], DummyClipboardApp()
    controller = _controller(scheduler, events, app)

    controller.activate(GRID)
    app.fail = True
    controller.activate(GRID)

    assert events == [
        ("show", FeedbackKind.SUCCESS),
        ("hide", FeedbackKind.SUCCESS),
        ("show", FeedbackKind.FAILURE),
    ]


@pytest.mark.parametrize("grid", [None, OutputGrid()])
def test_activate_without_output_does_nothing(grid) -> None:
    scheduler, events, app = FakeScheduler(), [], DummyClipboardApp()
    controller = _controller(scheduler, events, app)

    assert controller.activate(grid) is None
    assert events == []
    assert scheduler.timers == {}


def test_clear_hides_and_cancels() -> None:
    scheduler, events, app = FakeScheduler(), [], DummyClipboardApp()
    controller = _controller(scheduler, events, app)
    controller.activate(GRID)

    controller.clear()

    assert events[-1] == ("hide", FeedbackKind.SUCCESS)
    assert scheduler.timers == {}
    assert controller.feedback.kind is None


def test_copy_text_to_clipboard_wraps_errors() -> None:
    with pytest.raises(ClipboardError):
        copy_text_to_clipboard(DummyClipboardApp(fail=True), "x")
