"""Conversion request lifecycle: payload, transport, response parsing, state."""

from __future__ import annotations

import json
import logging
import queue
import threading
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

import requests

from ascii_studio.constants import (
    DEFAULT_BRIGHTNESS,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    DEFAULT_SERVICE_URL,
    DEFAULT_STYLE,
    LIGHT_THEME,
    MAX_LENGTH,
)
from ascii_studio.errors import AsciiStudioError, ErrorHandler, RequestError, ValidationError
from ascii_studio.operation_flow import OperationScope
from ascii_studio.validators import ParamValidator, UploadValidator

PRESET_FIELD = "size"
SUCCESS_STATUS = 200


class SubmissionState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class OutputGrid:
    rows: tuple[tuple[str, ...], ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "OutputGrid":
        """Build a grid from a JSON array of strings or character arrays."""
        if not isinstance(payload, list):
            raise RequestError("Unexpected response from the conversion service.")

        rows: List[tuple[str, ...]] = []
        for raw_row in payload:
            if isinstance(raw_row, str):
                rows.append(tuple(raw_row))
                continue
            if isinstance(raw_row, list) and all(isinstance(c, str) and len(c) == 1 for c in raw_row):
                rows.append(tuple(raw_row))
                continue
            raise RequestError("Unexpected response from the conversion service.")
        return cls(rows=tuple(rows))

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def row_texts(self) -> List[str]:
        return ["".join(row) for row in self.rows]

    def transcript(self) -> str:
        return "\n".join(self.row_texts())


@dataclass(frozen=True)
class ConversionParams:
    width: int
    height: int
    brightness: float = DEFAULT_BRIGHTNESS
    style: str = DEFAULT_STYLE
    invert: bool = False
    theme: str = LIGHT_THEME

    def validated(self, max_length: int = MAX_LENGTH) -> "ConversionParams":
        return replace(
            self,
            width=ParamValidator.validate_length(self.width, "width", max_length),
            height=ParamValidator.validate_length(self.height, "height", max_length),
            brightness=ParamValidator.validate_brightness(self.brightness),
            style=ParamValidator.validate_style(self.style),
        )

    def form_fields(self) -> Dict[str, str]:
        fields = {
            "width": str(self.width),
            "height": str(self.height),
            "brightness": f"{self.brightness:g}",
            "style": self.style,
            "theme": self.theme,
        }
        if self.invert:
            fields["invert"] = "on"
        return fields


def build_form_fields(fields: Mapping[str, Any]) -> Dict[str, str]:
    """Outgoing text fields; the preset choice never leaves the client."""
    return {str(key): str(value) for key, value in fields.items() if key != PRESET_FIELD}


@dataclass(frozen=True)
class ServiceResponse:
    status_code: int
    body: str


class ConversionClient:
    """Posts the image and parameters to the conversion service."""

    def __init__(
        self,
        service_url: str = DEFAULT_SERVICE_URL,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.service_url = service_url
        self.timeout = timeout
        self._session = session or requests.Session()

    def send(self, image_path: Path, fields: Mapping[str, Any]) -> ServiceResponse:
        media_type = UploadValidator.media_type_for(image_path) or "application/octet-stream"
        data = build_form_fields(fields)
        try:
            with image_path.open("rb") as fh:
                response = self._session.post(
                    self.service_url,
                    data=data,
                    files={"image": (image_path.name, fh, media_type)},
                    timeout=self.timeout,
                )
        except requests.RequestException as exc:
            raise RequestError(f"Could not reach the conversion service: {exc}") from exc
        except OSError as exc:
            raise RequestError(f"Could not read {image_path.name}: {exc}") from exc
        return ServiceResponse(status_code=response.status_code, body=response.text)


def parse_conversion_response(response: ServiceResponse) -> OutputGrid:
    try:
        payload = json.loads(response.body)
    except ValueError:
        raise RequestError(
            f"Unexpected response from the conversion service (HTTP {response.status_code}).",
            status_code=response.status_code,
        ) from None

    if response.status_code != SUCCESS_STATUS:
        message = payload.get("error") if isinstance(payload, dict) else None
        raise RequestError(
            str(message or f"Conversion failed (HTTP {response.status_code})."),
            status_code=response.status_code,
        )
    return OutputGrid.from_payload(payload)


@dataclass(frozen=True)
class SubmissionHooks:
    clear_output: Callable[[], None]
    show_output: Callable[[OutputGrid], None]
    show_error: Callable[[str], None]
    clear_error: Callable[[], None]


@dataclass(frozen=True)
class _WorkerResult:
    generation: int
    response: Optional[ServiceResponse] = None
    error: Optional[BaseException] = None


WorkerStarter = Callable[[Callable[[], None]], None]


def _start_daemon_thread(target: Callable[[], None]) -> None:
    worker = threading.Thread(target=target, daemon=True, name="asciistudio-submit")
    worker.start()


class SubmissionOrchestrator:
    """Owns the single in-flight conversion request."""

    def __init__(
        self,
        *,
        client: ConversionClient,
        scope: OperationScope,
        hooks: SubmissionHooks,
        max_length: int = MAX_LENGTH,
        start_worker: Optional[WorkerStarter] = None,
        on_state_change: Optional[Callable[[SubmissionState], None]] = None,
    ) -> None:
        self._client = client
        self._scope = scope
        self._hooks = hooks
        self._max_length = max_length
        self._start_worker = start_worker or _start_daemon_thread
        self._on_state_change = on_state_change
        self._queue: "queue.Queue[_WorkerResult]" = queue.Queue(maxsize=1)
        self._state = SubmissionState.IDLE
        self._output: Optional[OutputGrid] = None
        self._last_outcome: Optional[SubmissionState] = None
        self._generation = 0

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def output(self) -> Optional[OutputGrid]:
        return self._output

    @property
    def last_outcome(self) -> Optional[SubmissionState]:
        return self._last_outcome

    @property
    def trigger_enabled(self) -> bool:
        return self._state is SubmissionState.IDLE

    def _set_state(self, state: SubmissionState) -> None:
        self._state = state
        if self._on_state_change is not None:
            self._on_state_change(state)

    def clear_output(self) -> None:
        self._output = None
        self._hooks.clear_output()

    def supersede(self) -> None:
        """Clear the output; a request still in flight will not be shown."""
        self._generation += 1
        self.clear_output()

    def submit(self, image_path: Path, params: ConversionParams) -> bool:
        """Start a conversion. Returns False when nothing was sent."""
        if self._state is not SubmissionState.IDLE:
            logging.debug("Submit ignored while %s", self._state.value)
            return False

        try:
            validated = params.validated(self._max_length)
        except ValidationError as exc:
            self._hooks.show_error(str(exc))
            return False

        self.clear_output()
        self._set_state(SubmissionState.SUBMITTING)
        self._scope.begin()

        client = self._client
        out_queue = self._queue
        fields = validated.form_fields()
        generation = self._generation

        def _work() -> None:
            try:
                response = client.send(image_path, fields)
            except Exception as exc:
                out_queue.put(_WorkerResult(generation, error=exc))
                return
            out_queue.put(_WorkerResult(generation, response=response))

        logging.info(
            "Submitting %s (%sx%s, style=%s)", image_path.name, validated.width, validated.height, validated.style
        )
        try:
            self._start_worker(_work)
        except Exception as exc:
            self._finish(_WorkerResult(generation, error=exc))
            return False
        return True

    def poll(self) -> bool:
        """Apply a finished request, if any. Returns True while still submitting."""
        if self._state is not SubmissionState.SUBMITTING:
            return False
        try:
            result = self._queue.get_nowait()
        except queue.Empty:
            return True
        self._finish(result)
        return False

    def _finish(self, result: _WorkerResult) -> None:
        if result.generation != self._generation:
            logging.info("Discarding conversion result for a replaced image")
            self._last_outcome = None
            self._scope.close()
            self._set_state(SubmissionState.IDLE)
            return
        try:
            if result.error is not None:
                raise result.error
            if result.response is None:
                raise RequestError("The conversion service returned no response.")
            grid = parse_conversion_response(result.response)
            self._output = grid
            self._set_state(SubmissionState.SUCCEEDED)
            self._hooks.clear_error()
            self._hooks.show_output(grid)
            logging.info("Conversion succeeded: %d rows", len(grid.rows))
        except AsciiStudioError as exc:
            self._output = None
            self._set_state(SubmissionState.FAILED)
            logging.warning("Conversion failed: %s", exc)
            self._hooks.show_error(str(exc))
        except Exception as exc:
            self._output = None
            self._set_state(SubmissionState.FAILED)
            ErrorHandler.log_error(exc, {"operation": "submit"})
            self._hooks.show_error(ErrorHandler.get_user_friendly_message(exc))
        finally:
            self._last_outcome = self._state
            self._scope.close()
            self._set_state(SubmissionState.IDLE)

