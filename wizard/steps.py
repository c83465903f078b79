"""Static step metadata for wizard definitions."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wizard.validation import FieldRule

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from wizard.navigation_types import StepContext

StepPredicate = Callable[[Mapping[str, object]], bool]
StepRenderer = Callable[["StepContext"], None]


@dataclass(frozen=True)
class StepDefinition:
    """Metadata + validation contract for an individual wizard step.

    ``rules`` together form the step's required-field predicate. ``renderer``
    draws the inputs for the step and reports edits through the context's
    ``update`` callback; it is only needed by the Streamlit UI. Steps with
    an ``is_active`` predicate drop out of the sequence while it is false.
    """

    key: str
    label: str
    description: str = ""
    rules: tuple[FieldRule, ...] = ()
    summary_fields: tuple[str, ...] = ()
    renderer: StepRenderer | None = field(default=None, compare=False)
    is_active: StepPredicate | None = field(default=None, compare=False)

    def required_field_predicate(self, fields: Mapping[str, object]) -> bool:
        return all(rule.passes(fields) for rule in self.rules)


def resolve_active_steps(steps: Sequence[StepDefinition], fields: Mapping[str, object]) -> tuple[StepDefinition, ...]:
    """Return the steps that take part in the sequence for ``fields``, in order."""

    active = tuple(step for step in steps if step.is_active is None or step.is_active(fields))
    return active or tuple(steps)


def step_keys(steps: Sequence[StepDefinition]) -> tuple[str, ...]:
    return tuple(step.key for step in steps)


__all__ = ["StepDefinition", "StepPredicate", "StepRenderer", "resolve_active_steps", "step_keys"]
