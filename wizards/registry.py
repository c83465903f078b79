"""Lookup table of the concrete wizards shipped with the app."""

from __future__ import annotations

from typing import Callable

from core.errors import UnknownWizardError
from wizard.definition import WizardDefinition
from wizards import coach_application, coach_level1_application, goal_creation, match_creation

DefinitionFactory = Callable[[], WizardDefinition]

_FACTORIES: dict[str, DefinitionFactory] = {
    coach_application.WIZARD_ID: coach_application.build_definition,
    coach_level1_application.WIZARD_ID: coach_level1_application.build_definition,
    goal_creation.WIZARD_ID: goal_creation.build_definition,
    match_creation.WIZARD_ID: match_creation.build_definition,
}


def list_wizards() -> tuple[str, ...]:
    """Return the registered wizard ids in menu order."""

    return tuple(_FACTORIES)


def get_wizard(wizard_id: str) -> WizardDefinition:
    """Build a fresh definition for ``wizard_id``.

    Raises:
        UnknownWizardError: If no wizard is registered under that id.
    """

    try:
        factory = _FACTORIES[wizard_id]
    except KeyError as exc:
        raise UnknownWizardError(f"unknown wizard '{wizard_id}'") from exc
    return factory()


__all__ = ["get_wizard", "list_wizards"]
