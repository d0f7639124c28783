"""
Error types and logging helpers shared by the workflow components.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

NO_IMAGE_SELECTED = "No image selected."
TOO_MANY_IMAGES = "You can only upload one image at a time."
UNSUPPORTED_FILE_TYPE = "File type not supported. Please upload a JPEG or PNG file."


class AsciiStudioError(Exception):
    """Base class for recoverable application errors."""


class ValidationError(AsciiStudioError, ValueError):
    """Rejected user input: file selection or conversion parameters."""


class RequestError(AsciiStudioError):
    """The conversion service answered with a failure or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClipboardError(AsciiStudioError):
    """The system clipboard refused the write."""


class ErrorHandler:
    """Maps exceptions to user-facing text and writes them to the log."""

    ERROR_MESSAGES = {
        FileNotFoundError: "File not found: {filepath}",
        PermissionError: "Permission denied: {filepath}",
        MemoryError: "Out of memory. Try a smaller image.",
        OSError: "System error: {error}",
    }

    @classmethod
    def get_user_friendly_message(cls, error: Exception, **kwargs: Any) -> str:
        """Return the text shown inline for ``error``."""
        if isinstance(error, AsciiStudioError):
            return str(error)

        template = cls.ERROR_MESSAGES.get(type(error), "Unexpected error: {error}")
        if "error" not in kwargs:
            kwargs["error"] = str(error)

        try:
            return template.format(**kwargs)
        except KeyError:
            return f"{type(error).__name__}: {error}"

    @classmethod
    def log_error(cls, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        """Log the error together with its context and stack trace."""
        logging.error("Error type: %s", type(error).__name__)
        logging.error("Error message: %s", error)
        if context:
            logging.error("Context: %s", context)
        logging.error("Stack trace:", exc_info=(type(error), error, error.__traceback__))
