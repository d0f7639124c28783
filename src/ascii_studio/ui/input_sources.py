"""Input source helpers (drag-and-drop and file dialog) for AsciiStudioApp."""

from __future__ import annotations

import logging
from pathlib import Path
from tkinter import filedialog
from typing import Any, Callable, List, Sequence

from ascii_studio.ui_drop_helpers import parse_drop_paths

FILE_DIALOG_TYPES = [("Images", "*.png *.jpg *.jpeg"), ("All files", "*.*")]


def setup_drag_and_drop(
    app: Any,
    targets: Sequence[Any],
    *,
    tkdnd_cls: Any,
    dnd_files: str,
    on_drop: Callable[[Any], Any],
) -> bool:
    """Register ``targets`` as file drop targets. Returns True if any succeeded."""
    if not hasattr(app, "drop_target_register"):
        logging.info("Drag and drop disabled: root widget does not support drop_target_register")
        return False

    try:
        tkdnd_cls._require(app)
    except Exception as exc:
        logging.warning("Drag and drop initialization failed: %s", exc)
        return False

    registered = 0
    for widget in targets:
        try:
            widget.drop_target_register(dnd_files)
            widget.dnd_bind("<<Drop>>", on_drop)
            registered += 1
        except Exception:
            logging.exception("Failed to register drop target: %s", widget)

    if registered:
        logging.info("Drag and drop enabled on %d widgets", registered)
    return registered > 0


def dropped_paths(app: Any, event: Any) -> List[Path]:
    return parse_drop_paths(app.tk.splitlist, getattr(event, "data", ""))


def ask_image_path(initial_dir: str = "") -> List[Path]:
    """Open the file dialog; an empty list means nothing was chosen."""
    selected = filedialog.askopenfilename(
        title="Select an image",
        filetypes=FILE_DIALOG_TYPES,
        initialdir=initial_dir or None,
    )
    return [Path(selected)] if selected else []
