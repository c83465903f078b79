from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import pytest

from core.errors import InvalidTransitionError, SubmissionError, SubmissionInProgressError
from wizard.state import SubmissionStatus, WizardState
from wizard.submission import SubmissionAdapter, SubmissionRequest, can_transition


def _build_request(fields: Mapping[str, Any]) -> SubmissionRequest:
    return SubmissionRequest(method="POST", path="/api/things", payload={"name": fields["name"]})


def _adapter(sender: Any, **fields: Any) -> tuple[SubmissionAdapter, WizardState]:
    state = WizardState(wizard_id="demo", current_step_index=2, fields={"name": "Ana", **fields})
    return SubmissionAdapter(state, _build_request, client=sender), state


def test_success_records_result(sender_factory) -> None:
    sender = sender_factory({"id": 7})
    adapter, state = _adapter(sender)

    status = adapter.submit(state.fields)

    assert status is SubmissionStatus.SUCCEEDED
    assert state.result == {"id": 7}
    assert state.last_error is None
    assert len(sender.calls) == 1
    assert sender.calls[0] == SubmissionRequest("POST", "/api/things", {"name": "Ana"})


def test_failure_then_retry_preserves_fields(sender_factory) -> None:
    sender = sender_factory(SubmissionError("Server exploded", status_code=500), {"ok": True})
    adapter, state = _adapter(sender)
    fields_before = dict(state.fields)

    assert adapter.submit(state.fields) is SubmissionStatus.FAILED
    assert state.last_error == "Server exploded"
    assert state.fields == fields_before
    assert state.current_step_index == 2

    assert adapter.submit(state.fields) is SubmissionStatus.SUCCEEDED
    assert state.last_error is None
    assert state.result == {"ok": True}
    assert len(sender.calls) == 2


def test_payload_error_fails_without_sending(sender_factory) -> None:
    sender = sender_factory()

    def _broken(fields: Mapping[str, Any]) -> SubmissionRequest:
        raise ValueError("experienceYears must be positive")

    state = WizardState(wizard_id="demo")
    adapter = SubmissionAdapter(state, _broken, client=sender)

    assert adapter.submit({}) is SubmissionStatus.FAILED
    assert state.last_error == "Some answers are invalid. Please review them and try again."
    assert sender.calls == []


def test_submit_while_submitting_raises(sender_factory) -> None:
    adapter, state = _adapter(sender_factory())
    state.submission_status = SubmissionStatus.SUBMITTING

    with pytest.raises(SubmissionInProgressError):
        adapter.submit(state.fields)


def test_succeeded_is_terminal(sender_factory) -> None:
    sender = sender_factory({})
    adapter, state = _adapter(sender)
    adapter.submit(state.fields)

    with pytest.raises(InvalidTransitionError):
        adapter.submit(state.fields)
    assert len(sender.calls) == 1


def test_transition_table() -> None:
    assert can_transition(SubmissionStatus.IDLE, SubmissionStatus.SUBMITTING)
    assert can_transition(SubmissionStatus.FAILED, SubmissionStatus.SUBMITTING)
    assert can_transition(SubmissionStatus.SUBMITTING, SubmissionStatus.FAILED)
    assert not can_transition(SubmissionStatus.IDLE, SubmissionStatus.SUCCEEDED)
    assert not can_transition(SubmissionStatus.SUCCEEDED, SubmissionStatus.SUBMITTING)


def test_failure_is_logged_with_http_status(sender_factory, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="pickleplus")
    adapter, state = _adapter(sender_factory(SubmissionError(status_code=503)))

    adapter.submit(state.fields)

    record = json.loads(caplog.records[-1].getMessage())
    assert record["event"] == "submission_failed"
    assert record["http_status"] == "503"
    assert record["wizard"] == "demo"
    assert state.last_error == "Submission failed. Please try again later."


def test_unexpected_sender_crash_fails_and_allows_retry(sender_factory, caplog) -> None:
    sender = sender_factory(RuntimeError("boom"), {"id": 9})
    adapter, state = _adapter(sender)

    with caplog.at_level(logging.ERROR, logger="wizard.submission"):
        assert adapter.submit(state.fields) is SubmissionStatus.FAILED
    assert state.last_error == "Submission failed. Please try again later."
    assert not adapter.is_submitting
    assert "crashed" in caplog.text

    assert adapter.submit(state.fields) is SubmissionStatus.SUCCEEDED
    assert state.result == {"id": 9}


def test_request_builder_crash_fails_without_sending(sender_factory) -> None:
    sender = sender_factory()

    def _broken(fields: Mapping[str, Any]) -> SubmissionRequest:
        return SubmissionRequest("POST", "/api/things", {"name": fields["missing"]})

    state = WizardState(wizard_id="demo")
    adapter = SubmissionAdapter(state, _broken, client=sender)

    assert adapter.submit({}) is SubmissionStatus.FAILED
    assert sender.calls == []
