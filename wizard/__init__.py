"""Reusable multi-step form wizard: state, validation, navigation and submission."""

from __future__ import annotations

from .definition import WizardDefinition
from .state import SubmissionStatus, WizardState
from .steps import StepDefinition
from .store import FormStateStore
from .submission import SubmissionAdapter, SubmissionRequest
from .validation import ValidationGate
from .sequencer import StepSequencer

__all__ = [
    "FormStateStore",
    "StepDefinition",
    "StepSequencer",
    "SubmissionAdapter",
    "SubmissionRequest",
    "SubmissionStatus",
    "ValidationGate",
    "WizardDefinition",
    "WizardState",
]
