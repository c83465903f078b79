"""One-step-at-a-time navigation over a wizard's active steps."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from wizard.steps import StepDefinition, resolve_active_steps
from wizard.validation import ValidationGate

logger = logging.getLogger(__name__)

FieldsProvider = Callable[[], Mapping[str, Any]]


class StepSequencer:
    """Own ``current_step_index`` and gate forward moves on validation.

    ``fields_provider`` returns the current field snapshot; it is read on
    every call so the sequencer always sees the latest edits.
    """

    def __init__(
        self,
        steps: Sequence[StepDefinition],
        *,
        gate: ValidationGate,
        fields_provider: FieldsProvider,
        start_index: int = 0,
    ) -> None:
        if not steps:
            raise ValueError("a wizard needs at least one step")
        self._steps: tuple[StepDefinition, ...] = tuple(steps)
        self._gate = gate
        self._fields_provider = fields_provider
        self._index = 0
        self._index = self._clamp(start_index)

    @property
    def current_step_index(self) -> int:
        self._index = self._clamp(self._index)
        return self._index

    @property
    def active_steps(self) -> tuple[StepDefinition, ...]:
        return resolve_active_steps(self._steps, self._fields_provider())

    @property
    def step_count(self) -> int:
        return len(self.active_steps)

    @property
    def current_step(self) -> StepDefinition:
        return self.active_steps[self.current_step_index]

    @property
    def progress(self) -> float:
        """Completion fraction shown by the progress bar."""

        return (self.current_step_index + 1) / self.step_count

    def _clamp(self, index: int) -> int:
        last = self.step_count - 1
        return max(0, min(index, last))

    def is_first(self) -> bool:
        return self.current_step_index == 0

    def is_last(self) -> bool:
        return self.current_step_index == self.step_count - 1

    def can_advance(self) -> bool:
        return self._gate.validate(self.current_step_index, self._fields_provider())

    def next(self) -> bool:
        """Advance one step when the current step validates.

        Returns ``True`` when the index moved. Nothing changes when the gate is
        closed or the wizard is already on its last step.
        """

        index = self.current_step_index
        if not self.can_advance():
            logger.debug("Forward navigation blocked on step '%s'", self.current_step.key)
            return False
        target = self._clamp(index + 1)
        if target == index:
            return False
        self._index = target
        logger.debug("Advanced to step '%s'", self.current_step.key)
        return True

    def previous(self) -> bool:
        """Go back one step without validation; no-op on the first step."""

        index = self.current_step_index
        target = self._clamp(index - 1)
        if target == index:
            return False
        self._index = target
        logger.debug("Went back to step '%s'", self.current_step.key)
        return True


__all__ = ["FieldsProvider", "StepSequencer"]
