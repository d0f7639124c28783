"""Helpers for parsing drag-and-drop payloads."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, List, Sequence
from urllib.parse import unquote, urlparse


def dedupe_paths(paths: List[Path]) -> List[Path]:
    """Deduplicate paths preserving order; case folds only where the OS does."""
    seen: set[str] = set()
    deduped: List[Path] = []
    for path in paths:
        marker = os.path.normcase(str(path))
        if marker in seen:
            continue
        seen.add(marker)
        deduped.append(path)
    return deduped


def normalize_dropped_path_text(value: str) -> str:
    """Turn one dropped item (plain path or file:// URI) into a path string."""
    text = value.strip()
    if not text.startswith("file://"):
        return text

    parsed = urlparse(text)
    if parsed.scheme != "file":
        return text
    normalized = unquote(parsed.path or "")
    if parsed.netloc and parsed.netloc.lower() != "localhost":
        normalized = f"//{parsed.netloc}{normalized}"
    if os.name == "nt" and len(normalized) >= 3 and normalized[0] == "/" and normalized[2] == ":":
        normalized = normalized[1:]
    return normalized or text


def parse_drop_paths(split_texts: Callable[[str], Sequence[str]], raw_data: Any) -> List[Path]:
    """Parse a Tk drop payload into paths.

    Every dropped item is kept, supported or not, so the upload validator
    sees the real number of files.
    """
    data = str(raw_data or "").strip()
    if not data:
        return []

    try:
        raw_items = list(split_texts(data))
    except Exception:
        raw_items = [data]

    expanded: List[str] = []
    for item in raw_items:
        text = str(item)
        if "\n" in text:
            expanded.extend(line for line in text.splitlines() if line.strip())
        else:
            expanded.append(text)

    paths: List[Path] = []
    for item in expanded:
        text = item.strip()
        if text.startswith("{") and text.endswith("}"):
            text = text[1:-1]
        text = normalize_dropped_path_text(text.strip().strip('"'))
        if text:
            paths.append(Path(text))
    return dedupe_paths(paths)
