from __future__ import annotations

import logging

from ascii_studio.errors import ErrorHandler, RequestError, ValidationError


def test_application_errors_are_shown_verbatim() -> None:
    assert ErrorHandler.get_user_friendly_message(ValidationError("No image selected.")) == "No image selected."
    assert ErrorHandler.get_user_friendly_message(RequestError("down", status_code=503)) == "down"


def test_validation_error_is_a_value_error() -> None:
    assert isinstance(ValidationError("x"), ValueError)


def test_os_errors_use_templates() -> None:
    message = ErrorHandler.get_user_friendly_message(FileNotFoundError("gone"), filepath="/tmp/cat.png")
    assert message == "File not found: /tmp/cat.png"


def test_missing_template_argument_falls_back_to_type_name() -> None:
    message = ErrorHandler.get_user_friendly_message(PermissionError("denied"))
    assert message == "PermissionError: denied"


def test_unknown_errors_get_generic_message() -> None:
    assert ErrorHandler.get_user_friendly_message(KeyError("k")) == "Unexpected error: 'k'"


def test_log_error_records_context(caplog) -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError as exc:
        with caplog.at_level(logging.ERROR):
            ErrorHandler.log_error(exc, {"operation": "submit"})

    assert "RuntimeError" in caplog.text
    assert "operation" in caplog.text
    assert caplog.records[-1].exc_info is not None
