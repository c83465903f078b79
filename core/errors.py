"""Custom exception types for wizard navigation and submission."""

from __future__ import annotations


class WizardError(Exception):
    """Base exception for wizard related issues."""


SUBMISSION_FAILED_MESSAGE = "Submission failed. Please try again later."


class InvalidTransitionError(WizardError):
    """Raised when the submission state machine is asked for an illegal move."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"cannot move submission status from '{current}' to '{target}'")
        self.current = current
        self.target = target


class SubmissionInProgressError(WizardError):
    """Raised when ``submit`` is called while a request is still in flight."""


class StepValidationError(WizardError):
    """Raised when an action requires a step whose gate is still closed."""

    def __init__(self, step_key: str, messages: list[str] | None = None) -> None:
        self.step_key = step_key
        self.messages = list(messages or [])
        detail = "; ".join(self.messages) if self.messages else "required fields missing"
        super().__init__(f"step '{step_key}' is incomplete: {detail}")


class SubmissionError(WizardError):
    """Raised by the API client when the backend rejects or cannot be reached."""

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or SUBMISSION_FAILED_MESSAGE
        self.status_code = status_code
        super().__init__(self.message)


class UnknownWizardError(WizardError, KeyError):
    """Raised when a wizard id is not registered."""
