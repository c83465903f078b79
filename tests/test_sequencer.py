from __future__ import annotations

from typing import Any

import pytest

from wizard.sequencer import StepSequencer
from wizard.steps import StepDefinition
from wizard.store import FormStateStore
from wizard.validation import ValidationGate, require_present

STEPS = (
    StepDefinition(key="one", label="One", rules=(require_present("name"),)),
    StepDefinition(key="two", label="Two"),
    StepDefinition(
        key="optional",
        label="Optional",
        is_active=lambda fields: fields.get("extra") is True,
    ),
    StepDefinition(key="three", label="Three"),
)


def _sequencer(fields: dict[str, Any] | None = None, start_index: int = 0) -> tuple[StepSequencer, FormStateStore]:
    store = FormStateStore(fields or {})
    sequencer = StepSequencer(
        STEPS,
        gate=ValidationGate(STEPS),
        fields_provider=store.snapshot,
        start_index=start_index,
    )
    return sequencer, store


def test_next_is_gated_by_validation() -> None:
    sequencer, store = _sequencer({"name": ""})

    assert sequencer.next() is False
    assert sequencer.current_step_index == 0

    store.update({"name": "Ana"})
    assert sequencer.next() is True
    assert sequencer.current_step.key == "two"


def test_previous_needs_no_validation_and_stops_at_zero() -> None:
    sequencer, store = _sequencer({"name": "Ana"})
    sequencer.next()
    store.update({"name": ""})

    assert sequencer.previous() is True
    assert sequencer.current_step_index == 0
    assert sequencer.previous() is False
    assert sequencer.is_first()


def test_next_on_last_step_is_a_noop() -> None:
    sequencer, _ = _sequencer({"name": "Ana"}, start_index=2)

    assert sequencer.is_last()
    assert sequencer.next() is False
    assert sequencer.current_step.key == "three"


def test_inactive_steps_are_skipped() -> None:
    sequencer, store = _sequencer({"name": "Ana"})
    assert [step.key for step in sequencer.active_steps] == ["one", "two", "three"]

    store.update({"extra": True})
    assert sequencer.step_count == 4
    sequencer.next()
    sequencer.next()
    assert sequencer.current_step.key == "optional"


def test_index_is_clamped_when_steps_drop_out() -> None:
    sequencer, store = _sequencer({"name": "Ana", "extra": True}, start_index=3)
    assert sequencer.current_step.key == "three"

    store.update({"extra": False})

    assert sequencer.current_step_index == 2
    assert sequencer.current_step.key == "three"


def test_start_index_is_clamped() -> None:
    sequencer, _ = _sequencer({}, start_index=99)

    assert sequencer.current_step_index == 2


def test_progress() -> None:
    sequencer, _ = _sequencer({"name": "Ana"})

    assert sequencer.progress == pytest.approx(1 / 3)
    sequencer.next()
    sequencer.next()
    assert sequencer.progress == 1.0


def test_empty_steps_rejected() -> None:
    with pytest.raises(ValueError):
        StepSequencer((), gate=ValidationGate(()), fields_provider=dict)
