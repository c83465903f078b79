"""Per-step validation gates for wizard navigation.

Every rule here is a pure function of the field snapshot. The UI calls
:meth:`ValidationGate.validate` on each rerun to decide whether Next/Submit is
enabled, so repeated calls with the same fields must return the same result.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Collection, Mapping, Sequence

from constants.patterns import EMAIL_PATTERN

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from wizard.steps import StepDefinition

logger = logging.getLogger(__name__)

FieldCheck = Callable[[Mapping[str, object]], bool]

_EMAIL_PATTERN = re.compile(EMAIL_PATTERN)


@dataclass(frozen=True)
class FieldRule:
    """A single named check over the field snapshot."""

    fields: tuple[str, ...]
    check: FieldCheck
    message: str

    def passes(self, fields: Mapping[str, object]) -> bool:
        try:
            return bool(self.check(fields))
        except (TypeError, ValueError, AttributeError, KeyError) as exc:
            logger.debug("Rule on %s rejected malformed input: %s", self.fields, exc)
            return False


def is_value_present(value: object | None) -> bool:
    """Return ``True`` when ``value`` should count as populated."""

    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set)):
        return any(is_value_present(item) for item in value)
    if isinstance(value, Mapping):
        return any(is_value_present(item) for item in value.values())
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    return True


def to_number(value: object | None) -> float | None:
    """Return ``value`` as a float, or ``None`` for blanks, booleans and junk."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            return float(cleaned)
        except ValueError:
            return None
    return None


def require_present(field: str, message: str | None = None) -> FieldRule:
    return FieldRule(
        fields=(field,),
        check=lambda fields: is_value_present(fields.get(field)),
        message=message or f"{field} is required",
    )


def require_min_length(field: str, minimum: int, message: str | None = None) -> FieldRule:
    """Require a text field of at least ``minimum`` non-blank characters."""

    def _check(fields: Mapping[str, object]) -> bool:
        value = fields.get(field)
        return isinstance(value, str) and len(value.strip()) >= minimum

    return FieldRule(
        fields=(field,),
        check=_check,
        message=message or f"{field} must be at least {minimum} characters",
    )


def require_positive(field: str, message: str | None = None) -> FieldRule:
    """Require a numeric field that is present and strictly greater than zero.

    Zero is the default for numeric inputs, so it counts as absent.
    """

    def _check(fields: Mapping[str, object]) -> bool:
        number = to_number(fields.get(field))
        return number is not None and number > 0

    return FieldRule(
        fields=(field,),
        check=_check,
        message=message or f"{field} must be greater than 0",
    )


def require_in_range(field: str, minimum: float, maximum: float, message: str | None = None) -> FieldRule:
    def _check(fields: Mapping[str, object]) -> bool:
        number = to_number(fields.get(field))
        return number is not None and minimum <= number <= maximum

    return FieldRule(
        fields=(field,),
        check=_check,
        message=message or f"{field} must be between {minimum:g} and {maximum:g}",
    )


def require_non_empty_list(field: str, message: str | None = None) -> FieldRule:
    def _check(fields: Mapping[str, object]) -> bool:
        value = fields.get(field)
        return isinstance(value, (list, tuple)) and len(value) > 0

    return FieldRule(
        fields=(field,),
        check=_check,
        message=message or f"select at least one {field}",
    )


def require_all_true(*field_names: str, message: str | None = None) -> FieldRule:
    """Require every boolean in ``field_names`` to be ``True`` at once."""

    return FieldRule(
        fields=tuple(field_names),
        check=lambda fields: all(fields.get(name) is True for name in field_names),
        message=message or "all required agreements must be accepted",
    )


def require_email(field: str, message: str | None = None) -> FieldRule:
    def _check(fields: Mapping[str, object]) -> bool:
        value = fields.get(field)
        return isinstance(value, str) and bool(_EMAIL_PATTERN.match(value.strip()))

    return FieldRule(
        fields=(field,),
        check=_check,
        message=message or f"{field} must be a valid email address",
    )


def require_choice(field: str, choices: Collection[str], message: str | None = None) -> FieldRule:
    allowed = frozenset(choices)
    return FieldRule(
        fields=(field,),
        check=lambda fields: fields.get(field) in allowed,
        message=message or f"{field} must be one of {', '.join(sorted(allowed))}",
    )


def custom_rule(field_names: Sequence[str], check: FieldCheck, message: str) -> FieldRule:
    return FieldRule(fields=tuple(field_names), check=check, message=message)


def failing_rules(rules: Sequence[FieldRule], fields: Mapping[str, object]) -> list[FieldRule]:
    """Return the rules in ``rules`` that do not hold for ``fields``."""

    return [rule for rule in rules if not rule.passes(fields)]


class ValidationGate:
    """Decide whether forward navigation may leave a given step."""

    def __init__(self, steps: Sequence["StepDefinition"]) -> None:
        self._steps: tuple["StepDefinition", ...] = tuple(steps)

    def _step_at(self, step_index: int, fields: Mapping[str, object]) -> "StepDefinition | None":
        from wizard.steps import resolve_active_steps

        active = resolve_active_steps(self._steps, fields)
        if step_index < 0 or step_index >= len(active):
            return None
        return active[step_index]

    def validate(self, step_index: int, fields: Mapping[str, object]) -> bool:
        """Return ``True`` when every rule of the step at ``step_index`` holds."""

        step = self._step_at(step_index, fields)
        if step is None:
            return False
        return step.required_field_predicate(fields)

    def explain(self, step_index: int, fields: Mapping[str, object]) -> list[str]:
        """Return user-facing messages for the rules that currently fail."""

        step = self._step_at(step_index, fields)
        if step is None:
            return []
        return [rule.message for rule in failing_rules(step.rules, fields)]


__all__ = [
    "FieldCheck",
    "FieldRule",
    "ValidationGate",
    "custom_rule",
    "failing_rules",
    "is_value_present",
    "require_all_true",
    "require_choice",
    "require_email",
    "require_in_range",
    "require_min_length",
    "require_non_empty_list",
    "require_positive",
    "require_present",
    "to_number",
]
