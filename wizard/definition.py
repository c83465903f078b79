"""Data-only description of a concrete wizard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, MutableMapping

from wizard.steps import StepDefinition, step_keys
from wizard.submission import RequestBuilder, RequestSender

SenderFactory = Callable[[MutableMapping[str, object]], RequestSender]


@dataclass(frozen=True)
class WizardDefinition:
    """Steps, defaults and payload mapping for one wizard.

    A concrete wizard supplies only data; navigation, validation and the
    submission lifecycle come from :class:`wizard.controller.WizardController`.
    ``sender`` replaces the backend client for wizards that finish locally.
    """

    wizard_id: str
    title: str
    steps: tuple[StepDefinition, ...]
    defaults: Mapping[str, Any]
    build_request: RequestBuilder
    description: str = ""
    success_title: str = "Submitted"
    success_message: str = ""
    failure_title: str = "Submission Failed"
    success_route: str | None = None
    sender: SenderFactory | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.steps:
            raise ValueError(f"wizard '{self.wizard_id}' has no steps")
        keys = step_keys(self.steps)
        if len(set(keys)) != len(keys):
            raise ValueError(f"wizard '{self.wizard_id}' has duplicate step keys")


__all__ = ["SenderFactory", "WizardDefinition"]
