"""Structured logging utilities for Pickle+ wizards."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict

LOGGER = logging.getLogger("pickleplus")


def _redact(value: str) -> str:
    """Redact known secrets from a string."""

    secrets = [os.getenv("API_TOKEN"), os.getenv("SECRET_KEY")]
    for secret in secrets:
        if secret:
            value = value.replace(secret, "[redacted]")
    return value


def log_event(
    level: str,
    event: str,
    *,
    wizard_id: str | None = None,
    step: str | None = None,
    status: str | None = None,
    duration: float | None = None,
    extra: Dict[str, Any] | None = None,
) -> Dict[str, str]:
    """Emit a structured log line for a wizard lifecycle event.

    Args:
        level: Logging level name (e.g., ``"info"``).
        event: Short event name such as ``"submission_failed"``.
        wizard_id: Wizard identifier.
        step: Step key active when the event happened.
        status: Submission status after the event.
        duration: Duration of the operation in seconds.
        extra: Additional scalar fields to include.

    Returns:
        The redacted record that was logged.
    """

    record: Dict[str, Any] = {
        "event": event,
        "level": level.lower(),
        "wizard": wizard_id,
        "step": step,
        "status": status,
        "duration": duration,
    }
    if extra:
        record.update(extra)
    safe_record = {k: _redact(str(v)) for k, v in record.items() if v is not None}
    LOGGER.log(getattr(logging, level.upper(), logging.INFO), json.dumps(safe_record, sort_keys=True))
    return safe_record
