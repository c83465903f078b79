"""Session-scoped hand-off of finalized wizard results."""

from __future__ import annotations

import copy
import uuid
from typing import Any, Mapping, MutableMapping

from constants.keys import StateKeys


def _results(session_state: MutableMapping[str, object]) -> dict[str, Any]:
    bucket = session_state.get(StateKeys.SESSION_RESULTS)
    if not isinstance(bucket, dict):
        bucket = {}
        session_state[StateKeys.SESSION_RESULTS] = bucket
    return bucket


def store_result(session_state: MutableMapping[str, object], payload: Any) -> str:
    """Store ``payload`` under a freshly generated id and return the id."""

    result_id = uuid.uuid4().hex
    _results(session_state)[result_id] = copy.deepcopy(payload)
    return result_id


def load_result(session_state: MutableMapping[str, object], result_id: str) -> Any | None:
    """Return the payload stored under ``result_id`` or ``None``."""

    return copy.deepcopy(_results(session_state).get(result_id))


def discard_result(session_state: MutableMapping[str, object], result_id: str) -> None:
    _results(session_state).pop(result_id, None)


class SessionResultSender:
    """Finish a wizard locally by handing its payload to the session store.

    Implements the API client's ``request`` contract; the response carries
    the generated ``resultId``.
    """

    def __init__(self, session_state: MutableMapping[str, object]) -> None:
        self._session_state = session_state

    def request(self, method: str, path: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        result_id = store_result(self._session_state, dict(payload))
        return {"resultId": result_id, "route": path, "data": copy.deepcopy(dict(payload))}


__all__ = ["SessionResultSender", "discard_result", "load_result", "store_result"]
