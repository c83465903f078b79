from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class WizardSessionKeys:
    """Namespaced session-state keys for one wizard's storage."""

    wizard_id: str

    @property
    def prefix(self) -> str:
        return f"wiz:{self.wizard_id}:"

    def namespace(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @property
    def wizard_state(self) -> str:
        return self.namespace("state")

    @property
    def widget_prefix(self) -> str:
        return self.namespace("field:")

    def widget(self, field: str) -> str:
        return f"{self.widget_prefix}{field}"

    def widget_keys(self, keys: Iterable[object]) -> list[str]:
        """Return the widget keys among ``keys`` that belong to this wizard."""

        return [key for key in keys if isinstance(key, str) and key.startswith(self.widget_prefix)]
