"""Serializable wizard state and autosave snapshot helpers."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Mapping

AutosavePayload = dict[str, Any]


class SubmissionStatus(StrEnum):
    """Lifecycle of the single outbound submission request."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is SubmissionStatus.SUCCEEDED


def _coerce_status(value: object) -> SubmissionStatus:
    if isinstance(value, SubmissionStatus):
        return value
    if isinstance(value, str):
        try:
            return SubmissionStatus(value.strip().lower())
        except ValueError:
            return SubmissionStatus.IDLE
    return SubmissionStatus.IDLE


def _coerce_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            return int(cleaned)
        except ValueError:
            return None
    return None


@dataclass
class WizardState:
    """One active wizard instance: position, fields and submission outcome."""

    wizard_id: str
    current_step_index: int = 0
    fields: dict[str, Any] = field(default_factory=dict)
    submission_status: SubmissionStatus = SubmissionStatus.IDLE
    last_error: str | None = None
    result: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "wizard_id": self.wizard_id,
            "current_step_index": self.current_step_index,
            "fields": copy.deepcopy(self.fields),
            "submission_status": self.submission_status.value,
            "last_error": self.last_error,
            "result": copy.deepcopy(self.result),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WizardState":
        fields_raw = data.get("fields")
        index = _coerce_int(data.get("current_step_index"))
        last_error = data.get("last_error")
        return cls(
            wizard_id=str(data.get("wizard_id", "")),
            current_step_index=max(0, index or 0),
            fields=copy.deepcopy(dict(fields_raw)) if isinstance(fields_raw, Mapping) else {},
            submission_status=_coerce_status(data.get("submission_status")),
            last_error=last_error if isinstance(last_error, str) else None,
            result=copy.deepcopy(data.get("result")),
        )


def build_snapshot(state: WizardState) -> AutosavePayload:
    """Return a portable snapshot that can be exported or restored later.

    Only the position and the fields are captured; a restored wizard always
    starts with an idle submission.
    """

    return {
        "wizard": {
            "wizard_id": state.wizard_id,
            "current_step_index": state.current_step_index,
            "fields": copy.deepcopy(state.fields),
        },
        "meta": {"captured_at": datetime.now(timezone.utc).isoformat()},
    }


def parse_snapshot(payload: Mapping[str, Any]) -> WizardState:
    """Normalise a snapshot payload from autosave or upload."""

    wizard_raw = payload.get("wizard") if "wizard" in payload else payload
    if not isinstance(wizard_raw, Mapping):
        raise ValueError("snapshot does not contain a wizard section")
    if not wizard_raw.get("wizard_id"):
        raise ValueError("snapshot is missing the wizard id")
    state = WizardState.from_dict(wizard_raw)
    state.submission_status = SubmissionStatus.IDLE
    state.last_error = None
    state.result = None
    return state


def serialize_snapshot(snapshot: Mapping[str, Any]) -> bytes:
    """Return a JSON representation of ``snapshot`` for download."""

    return json.dumps(snapshot, ensure_ascii=False, indent=2).encode("utf-8")


def load_snapshot(raw: bytes | str) -> WizardState:
    """Parse an uploaded JSON snapshot into a :class:`WizardState`."""

    text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    payload = json.loads(text)
    if not isinstance(payload, Mapping):
        raise ValueError("snapshot must be a JSON object")
    return parse_snapshot(payload)


__all__ = [
    "AutosavePayload",
    "SubmissionStatus",
    "WizardState",
    "build_snapshot",
    "load_snapshot",
    "parse_snapshot",
    "serialize_snapshot",
]
