"""Core package for Pickle+ wizard errors."""

from .errors import (
    InvalidTransitionError,
    StepValidationError,
    SubmissionError,
    SubmissionInProgressError,
    UnknownWizardError,
    WizardError,
)

__all__ = [
    "InvalidTransitionError",
    "StepValidationError",
    "SubmissionError",
    "SubmissionInProgressError",
    "UnknownWizardError",
    "WizardError",
]
