from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class OperationScopeHooks:
    set_trigger_enabled: Callable[[bool], None]
    show_busy: Callable[[str], None]
    hide_busy: Callable[[], None]


class OperationScope:
    """Disables the submit trigger for the lifetime of one operation."""

    def __init__(self, *, hooks: OperationScopeHooks, busy_text: str) -> None:
        self._hooks = hooks
        self._busy_text = busy_text
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def begin(self) -> None:
        if self._active:
            return
        self._hooks.set_trigger_enabled(False)
        self._hooks.show_busy(self._busy_text)
        self._active = True

    def close(self) -> None:
        if not self._active:
            return
        self._hooks.hide_busy()
        self._hooks.set_trigger_enabled(True)
        self._active = False

    def __enter__(self) -> "OperationScope":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False
