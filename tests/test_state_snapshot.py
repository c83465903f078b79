from __future__ import annotations

import json

import pytest

from wizard.state import (
    SubmissionStatus,
    WizardState,
    build_snapshot,
    load_snapshot,
    parse_snapshot,
    serialize_snapshot,
)


def test_to_dict_round_trips_through_from_dict() -> None:
    state = WizardState(
        wizard_id="goal_creation",
        current_step_index=1,
        fields={"title": "Third shot drop"},
        submission_status=SubmissionStatus.FAILED,
        last_error="Server exploded",
    )

    assert WizardState.from_dict(state.to_dict()) == state


def test_from_dict_tolerates_junk() -> None:
    state = WizardState.from_dict(
        {"wizard_id": "x", "current_step_index": "-3", "fields": "nope", "submission_status": "weird"}
    )

    assert state.current_step_index == 0
    assert state.fields == {}
    assert state.submission_status is SubmissionStatus.IDLE


def test_snapshot_restores_idle_submission() -> None:
    state = WizardState(
        wizard_id="coach_application",
        current_step_index=3,
        fields={"hourlyRate": 50},
        submission_status=SubmissionStatus.FAILED,
        last_error="boom",
    )

    restored = load_snapshot(serialize_snapshot(build_snapshot(state)))

    assert restored.wizard_id == "coach_application"
    assert restored.current_step_index == 3
    assert restored.fields == {"hourlyRate": 50}
    assert restored.submission_status is SubmissionStatus.IDLE
    assert restored.last_error is None


def test_snapshot_records_capture_time() -> None:
    snapshot = build_snapshot(WizardState(wizard_id="x"))

    assert "captured_at" in snapshot["meta"]
    assert json.loads(serialize_snapshot(snapshot))["wizard"]["wizard_id"] == "x"


def test_parse_snapshot_accepts_bare_wizard_section() -> None:
    state = parse_snapshot({"wizard_id": "match_creation", "fields": {"format": "doubles"}})

    assert state.fields == {"format": "doubles"}


@pytest.mark.parametrize(
    "raw",
    [
        "[]",
        '{"wizard": "oops"}',
        '{"wizard": {"fields": {}}}',
        "not json",
    ],
)
def test_invalid_snapshots_raise_value_error(raw: str) -> None:
    with pytest.raises(ValueError):
        load_snapshot(raw)
