"""Thin JSON client for the Pickle+ REST backend."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import requests
from requests import Response

import config
from core.errors import SUBMISSION_FAILED_MESSAGE, SubmissionError

logger = logging.getLogger(__name__)

_ALLOWED_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _extract_error_message(resp: Response) -> str | None:
    """Return the backend's ``message`` field from an error body, if any."""

    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, Mapping):
        message = body.get("message") or body.get("error")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


def _decode_body(resp: Response) -> Any:
    if not resp.content:
        return {}
    try:
        return resp.json()
    except ValueError:
        logger.warning("Backend returned a non-JSON success body (status %s)", resp.status_code)
        return {}


class ApiClient:
    """Issue one JSON request per call; never retries on its own."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or config.get_api_base_url()).rstrip("/")
        self.token = token if token is not None else config.get_api_token()
        self.timeout = timeout or config.get_api_timeout()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "PicklePlusWizards/1.0",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, payload: Mapping[str, Any]) -> Any:
        """Send ``payload`` as JSON and return the decoded response body.

        Raises:
            SubmissionError: On a non-2xx response (carrying the backend's
                ``message`` verbatim when present) or a network failure.
        """

        verb = method.upper()
        if verb not in _ALLOWED_METHODS:
            raise ValueError(f"unsupported submission method: {method}")
        url = self.url_for(path)
        try:
            resp = requests.request(
                verb,
                url,
                json=dict(payload),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise SubmissionError(
                "Could not reach the server. Please check your connection and try again."
            ) from exc

        status = resp.status_code
        if not 200 <= status < 300:
            message = _extract_error_message(resp) or SUBMISSION_FAILED_MESSAGE
            logger.warning("%s %s returned status %s", verb, url, status)
            raise SubmissionError(message, status_code=status)
        return _decode_body(resp)


__all__ = ["ApiClient"]
