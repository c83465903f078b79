"""Turn the final field snapshot into one backend request and track its outcome."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

from core.errors import (
    SUBMISSION_FAILED_MESSAGE,
    InvalidTransitionError,
    SubmissionError,
    SubmissionInProgressError,
)
from infra.logging import log_event
from wizard.state import SubmissionStatus, WizardState

logger = logging.getLogger(__name__)

_ALLOWED_TRANSITIONS: dict[SubmissionStatus, frozenset[SubmissionStatus]] = {
    SubmissionStatus.IDLE: frozenset({SubmissionStatus.SUBMITTING}),
    SubmissionStatus.SUBMITTING: frozenset({SubmissionStatus.SUCCEEDED, SubmissionStatus.FAILED}),
    SubmissionStatus.FAILED: frozenset({SubmissionStatus.SUBMITTING}),
    SubmissionStatus.SUCCEEDED: frozenset(),
}


@dataclass(frozen=True)
class SubmissionRequest:
    """Outbound request derived from the wizard fields."""

    method: str
    path: str
    payload: Mapping[str, Any] = field(default_factory=dict)


class RequestSender(Protocol):
    def request(self, method: str, path: str, payload: Mapping[str, Any]) -> Any: ...


RequestBuilder = Callable[[Mapping[str, Any]], SubmissionRequest]


def can_transition(current: SubmissionStatus, target: SubmissionStatus) -> bool:
    return target in _ALLOWED_TRANSITIONS[current]


class SubmissionAdapter:
    """Manage the submission state machine for one :class:`WizardState`.

    The adapter only ever writes ``submission_status``, ``last_error`` and
    ``result``. Fields and the step index are left exactly as they were so a
    failed submission can be retried without re-entering data.
    """

    def __init__(
        self,
        state: WizardState,
        build_request: RequestBuilder,
        *,
        client: RequestSender,
    ) -> None:
        self._state = state
        self._build_request = build_request
        self._client = client

    @property
    def status(self) -> SubmissionStatus:
        return self._state.submission_status

    @property
    def last_error(self) -> str | None:
        return self._state.last_error

    @property
    def is_submitting(self) -> bool:
        return self.status is SubmissionStatus.SUBMITTING

    def _transition(self, target: SubmissionStatus) -> None:
        current = self._state.submission_status
        if not can_transition(current, target):
            raise InvalidTransitionError(current.value, target.value)
        self._state.submission_status = target

    def submit(self, fields: Mapping[str, Any]) -> SubmissionStatus:
        """Send exactly one request for ``fields`` and record the result.

        Raises:
            SubmissionInProgressError: If a previous submit has not resolved.
            InvalidTransitionError: If the wizard already submitted successfully.
        """

        if self.is_submitting:
            raise SubmissionInProgressError(f"wizard '{self._state.wizard_id}' is already submitting")
        self._transition(SubmissionStatus.SUBMITTING)
        self._state.last_error = None
        started = time.perf_counter()

        try:
            request = self._build_request(fields)
            body = self._client.request(request.method, request.path, request.payload)
        except SubmissionError as exc:
            return self._fail(exc.message, started, status_code=exc.status_code)
        except ValueError as exc:
            logger.warning("Could not build submission payload for '%s': %s", self._state.wizard_id, exc)
            return self._fail("Some answers are invalid. Please review them and try again.", started)
        except Exception:
            logger.exception("Submission for '%s' crashed", self._state.wizard_id)
            return self._fail(SUBMISSION_FAILED_MESSAGE, started)

        self._transition(SubmissionStatus.SUCCEEDED)
        self._state.result = body
        log_event(
            "info",
            "submission_succeeded",
            wizard_id=self._state.wizard_id,
            status=self.status.value,
            duration=round(time.perf_counter() - started, 3),
        )
        return self.status

    def _fail(self, message: str, started: float, *, status_code: int | None = None) -> SubmissionStatus:
        self._transition(SubmissionStatus.FAILED)
        self._state.last_error = message
        log_event(
            "warning",
            "submission_failed",
            wizard_id=self._state.wizard_id,
            status=self.status.value,
            duration=round(time.perf_counter() - started, 3),
            extra={"http_status": status_code} if status_code is not None else None,
        )
        return self.status


__all__ = [
    "RequestBuilder",
    "RequestSender",
    "SubmissionAdapter",
    "SubmissionRequest",
    "can_transition",
]
