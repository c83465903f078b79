from pathlib import Path
import sys
from dataclasses import dataclass
from typing import Any, Mapping

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wizard.submission import SubmissionRequest  # noqa: E402


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> _SessionDict:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield session_state


@pytest.fixture(autouse=True)
def _isolate_api_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``.env`` values out of the tests."""

    for name in ("API_BASE_URL", "API_TOKEN", "API_TIMEOUT", "DEFAULT_WIZARD"):
        monkeypatch.delenv(name, raising=False)
    yield


class RecordingSender:
    """Request sender that records calls and replays scripted outcomes."""

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[SubmissionRequest] = []

    def request(self, method: str, path: str, payload: Mapping[str, Any]) -> Any:
        self.calls.append(SubmissionRequest(method=method, path=path, payload=dict(payload)))
        outcome = self.outcomes.pop(0) if self.outcomes else {}
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def sender_factory():
    return RecordingSender
