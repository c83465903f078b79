from __future__ import annotations

import json
import logging
from typing import Any

from infra.logging import log_event
from utils.logging_context import (
    configure_logging,
    log_context,
    set_wizard_id,
    set_wizard_step,
)


def test_records_carry_wizard_context(caplog: Any) -> None:
    configure_logging()
    set_wizard_id("coach_application")
    set_wizard_step("basics")
    logger = logging.getLogger("test.logging.wizard")
    caplog.set_level(logging.INFO, logger=logger.name)

    with log_context(wizard_step="legal"):
        logger.info("Submitting application")

    logger.info("Back on the step")

    inside = next(record for record in caplog.records if record.message == "Submitting application")
    after = next(record for record in caplog.records if record.message == "Back on the step")
    assert inside.wizard_id == "coach_application"
    assert inside.wizard_step == "legal"
    assert after.wizard_step == "basics"


def test_blank_context_values_render_as_dash(caplog: Any) -> None:
    set_wizard_id("  ")
    set_wizard_step(None)
    logger = logging.getLogger("test.logging.blank")
    caplog.set_level(logging.INFO, logger=logger.name)

    logger.info("No wizard active")

    record = caplog.records[-1]
    assert (record.wizard_id, record.wizard_step) == ("-", "-")


def test_log_event_emits_sorted_json(caplog: Any) -> None:
    caplog.set_level(logging.INFO, logger="pickleplus")

    record = log_event(
        "info",
        "submission_succeeded",
        wizard_id="goal_creation",
        status="succeeded",
        duration=0.25,
    )

    assert record == {
        "duration": "0.25",
        "event": "submission_succeeded",
        "level": "info",
        "status": "succeeded",
        "wizard": "goal_creation",
    }
    logged = [r for r in caplog.records if r.name == "pickleplus"]
    assert json.loads(logged[-1].getMessage()) == record
    assert logged[-1].levelno == logging.INFO


def test_log_event_redacts_api_token(monkeypatch: Any, caplog: Any) -> None:
    monkeypatch.setenv("API_TOKEN", "tok-123")
    caplog.set_level(logging.WARNING, logger="pickleplus")

    record = log_event("warning", "submission_failed", extra={"detail": "bearer tok-123 rejected"})

    assert record["detail"] == "bearer [redacted] rejected"
    assert "tok-123" not in caplog.text
