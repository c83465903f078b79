from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from wizard.navigation.keys import WizardSessionKeys


@dataclass(frozen=True)
class StepContext:
    """Context passed to step renderer callables.

    ``fields`` is the snapshot taken when the step was rendered. Widget
    callbacks that rewrite nested values should start from :meth:`latest`
    so edits made earlier in the same rerun are not lost.
    """

    wizard_id: str
    fields: Mapping[str, Any]
    update: Callable[[Mapping[str, Any]], None]
    read: Callable[[], Mapping[str, Any]] | None = field(default=None, compare=False)

    def widget_key(self, field_name: str) -> str:
        return WizardSessionKeys(wizard_id=self.wizard_id).widget(field_name)

    def latest(self) -> Mapping[str, Any]:
        return self.read() if self.read is not None else self.fields
