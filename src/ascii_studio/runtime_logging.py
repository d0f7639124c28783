"""Per-run log files and their retention."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Mapping, Optional

from ascii_studio.constants import APP_NAME

DEFAULT_RETENTION_DAYS = 30
DEFAULT_MAX_FILES = 100
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_RUN_LOG_PREFIX = "run_"
_RUN_LOG_SUFFIX = ".log"
_RUN_ID_FORMAT = "%Y%m%d_%H%M%S"


def get_default_log_dir(
    app_name: str = APP_NAME,
    *,
    os_name: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Platform log directory for ``app_name``."""
    resolved_os_name = os_name or os.name
    resolved_env = env if env is not None else os.environ
    resolved_home = home or Path.home()
    dir_name = app_name.strip().replace(" ", "")

    if resolved_os_name == "nt":
        local_app_data = resolved_env.get("LOCALAPPDATA") or resolved_env.get("APPDATA")
        if local_app_data:
            return Path(local_app_data) / dir_name / "logs"
        return resolved_home / f".{dir_name.lower()}" / "logs"

    state_home = resolved_env.get("XDG_STATE_HOME")
    if state_home:
        return Path(state_home) / dir_name.lower() / "logs"
    return resolved_home / ".local" / "state" / dir_name.lower() / "logs"


def run_log_path(log_dir: Path, now: Optional[datetime] = None) -> Path:
    run_id = (now or datetime.now()).strftime(_RUN_ID_FORMAT)
    return log_dir / f"{_RUN_LOG_PREFIX}{run_id}{_RUN_LOG_SUFFIX}"


def prune_run_logs(
    log_dir: Path,
    *,
    retention_days: int = DEFAULT_RETENTION_DAYS,
    max_files: int = DEFAULT_MAX_FILES,
    now: Optional[datetime] = None,
) -> list[Path]:
    """Delete run logs older than ``retention_days`` or beyond ``max_files``."""
    cutoff = (now or datetime.now()) - timedelta(days=max(0, retention_days))
    removed: list[Path] = []

    for path in _list_run_logs(log_dir):
        try:
            modified_at = datetime.fromtimestamp(path.stat().st_mtime)
        except OSError:
            continue
        if modified_at < cutoff and _safe_unlink(path):
            removed.append(path)

    remaining = _list_run_logs(log_dir)
    if max_files > 0 and len(remaining) > max_files:
        for path in remaining[: len(remaining) - max_files]:
            if _safe_unlink(path):
                removed.append(path)
    return removed


def configure_logging(
    *,
    verbose: bool = False,
    log_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Attach console and run-file handlers to the root logger.

    Returns the path of this run's log file.
    """
    resolved_dir = log_dir or get_default_log_dir()
    resolved_dir.mkdir(parents=True, exist_ok=True)
    prune_run_logs(resolved_dir, now=now)
    path = run_log_path(resolved_dir, now)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT)

    for handler in list(root_logger.handlers):
        if getattr(handler, "_asciistudio_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(formatter)
    console._asciistudio_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(console)

    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    file_handler._asciistudio_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(file_handler)

    logging.info("Logging to %s", path)
    return path


def _list_run_logs(log_dir: Path) -> list[Path]:
    try:
        files = [path for path in log_dir.iterdir() if _is_run_log(path)]
    except OSError:
        return []
    return sorted(files, key=lambda p: p.stat().st_mtime)


def _is_run_log(path: Path) -> bool:
    name = path.name
    if not path.is_file() or not name.startswith(_RUN_LOG_PREFIX) or not name.endswith(_RUN_LOG_SUFFIX):
        return False
    try:
        datetime.strptime(name[len(_RUN_LOG_PREFIX) : -len(_RUN_LOG_SUFFIX)], _RUN_ID_FORMAT)
    except ValueError:
        return False
    return True


def _safe_unlink(path: Path) -> bool:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        return False
    return True
