from __future__ import annotations

from wizard.steps import StepDefinition
from wizard.validation import (
    ValidationGate,
    custom_rule,
    is_value_present,
    require_all_true,
    require_choice,
    require_email,
    require_in_range,
    require_min_length,
    require_positive,
    to_number,
)
from wizards import coach_application, coach_level1_application

COACH_STEPS = coach_application.STEPS
PHILOSOPHY_INDEX = 1
RATES_INDEX = 3


def _coach_fields(**overrides):
    fields = dict(coach_application.DEFAULTS)
    fields.update(overrides)
    return fields


def test_short_teaching_philosophy_keeps_gate_closed() -> None:
    gate = ValidationGate(COACH_STEPS)
    fields = _coach_fields(teachingPhilosophy="short", specializations=["Dinking"])

    assert gate.validate(PHILOSOPHY_INDEX, fields) is False
    assert "Teaching philosophy must be at least 50 characters" in gate.explain(PHILOSOPHY_INDEX, fields)


def test_long_teaching_philosophy_opens_gate() -> None:
    gate = ValidationGate(COACH_STEPS)
    fields = _coach_fields(
        teachingPhilosophy="I focus on footwork first and build confidence through drills.",
        specializations=["Dinking"],
    )

    assert gate.validate(PHILOSOPHY_INDEX, fields) is True
    assert gate.explain(PHILOSOPHY_INDEX, fields) == []


def test_zero_rate_counts_as_absent() -> None:
    gate = ValidationGate(COACH_STEPS)

    assert gate.validate(RATES_INDEX, _coach_fields(hourlyRate=0)) is False
    assert gate.validate(RATES_INDEX, _coach_fields(hourlyRate=50)) is True


def test_level1_commitments_must_all_be_true() -> None:
    steps = coach_level1_application.STEPS
    gate = ValidationGate(steps)
    last = len(steps) - 1
    accepted = {"understandsLevel1": True, "commitsToCertification": True, "agreesToTerms": True}

    assert gate.validate(last, accepted) is True
    for name in accepted:
        assert gate.validate(last, {**accepted, name: False}) is False


def test_validate_is_pure_and_idempotent() -> None:
    gate = ValidationGate(COACH_STEPS)
    fields = _coach_fields(experienceYears=4)
    before = dict(fields)

    results = {gate.validate(0, fields) for _ in range(5)}

    assert results == {True}
    assert fields == before


def test_out_of_range_index_is_closed() -> None:
    gate = ValidationGate(COACH_STEPS)

    assert gate.validate(-1, {}) is False
    assert gate.validate(len(COACH_STEPS), {}) is False
    assert gate.explain(len(COACH_STEPS), {}) == []


def test_step_without_rules_is_always_open() -> None:
    gate = ValidationGate((StepDefinition(key="review", label="Review"),))

    assert gate.validate(0, {}) is True


def test_gate_indexes_active_steps_only() -> None:
    steps = (
        StepDefinition(key="format", label="Format"),
        StepDefinition(
            key="pairings",
            label="Pairings",
            rules=(require_choice("partner", ("A",)),),
            is_active=lambda fields: fields.get("format") == "doubles",
        ),
        StepDefinition(key="review", label="Review", rules=(require_all_true("confirmed"),)),
    )
    gate = ValidationGate(steps)

    singles = {"format": "singles", "confirmed": True}
    assert gate.validate(1, singles) is True
    assert gate.validate(1, {**singles, "format": "doubles"}) is False


def test_is_value_present() -> None:
    assert is_value_present("x") is True
    assert is_value_present("   ") is False
    assert is_value_present([]) is False
    assert is_value_present(["", "a"]) is True
    assert is_value_present(0) is False
    assert is_value_present(False) is False
    assert is_value_present(None) is False


def test_to_number() -> None:
    assert to_number("12.5") == 12.5
    assert to_number(3) == 3.0
    assert to_number(True) is None
    assert to_number("abc") is None
    assert to_number("") is None


def test_rule_helpers() -> None:
    assert require_min_length("t", 3).passes({"t": " abc "}) is True
    assert require_min_length("t", 3).passes({"t": "  ab  "}) is False
    assert require_positive("n").passes({"n": "0"}) is False
    assert require_in_range("r", 1, 10).passes({"r": 10}) is True
    assert require_in_range("r", 1, 10).passes({"r": 11}) is False
    assert require_email("e").passes({"e": "coach@example.com"}) is True
    assert require_email("e").passes({"e": "not-an-email"}) is False


def test_rule_with_malformed_input_fails_closed() -> None:
    rule = custom_rule(("items",), lambda fields: len(fields["items"]) > 0, "need items")

    assert rule.passes({}) is False
