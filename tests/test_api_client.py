from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from api.client import ApiClient
from core.errors import SubmissionError


def _response(status: int, body: Any = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return resp


@pytest.fixture
def captured(monkeypatch):
    calls: list[dict[str, Any]] = []
    responses: list[Any] = []

    def _fake_request(method, url, **kwargs):
        calls.append({"method": method, "url": url, **kwargs})
        outcome = responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr("api.client.requests.request", _fake_request)
    return calls, responses


def test_posts_json_with_auth_header(captured) -> None:
    calls, responses = captured
    responses.append(_response(201, {"id": 42}))
    client = ApiClient("https://api.example.com/", token="tok", timeout=5)

    body = client.request("post", "/api/coach/application/submit", {"experienceYears": 3})

    assert body == {"id": 42}
    call = calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.example.com/api/coach/application/submit"
    assert call["json"] == {"experienceYears": 3}
    assert call["headers"]["Authorization"] == "Bearer tok"
    assert call["timeout"] == 5


def test_backend_message_is_surfaced_verbatim(captured) -> None:
    _, responses = captured
    responses.append(_response(400, {"message": "You already have a pending application"}))
    client = ApiClient("https://api.example.com", token="")

    with pytest.raises(SubmissionError) as excinfo:
        client.request("POST", "/api/coach/application/submit", {})

    assert excinfo.value.message == "You already have a pending application"
    assert excinfo.value.status_code == 400


def test_server_error_without_message_uses_generic_text(captured) -> None:
    _, responses = captured
    responses.append(_response(500))
    client = ApiClient("https://api.example.com", token="")

    with pytest.raises(SubmissionError) as excinfo:
        client.request("POST", "/x", {})

    assert excinfo.value.message == "Submission failed. Please try again later."
    assert excinfo.value.status_code == 500


def test_network_error_becomes_submission_error(captured) -> None:
    _, responses = captured
    responses.append(requests.ConnectionError("boom"))
    client = ApiClient("https://api.example.com", token="")

    with pytest.raises(SubmissionError) as excinfo:
        client.request("POST", "/x", {})

    assert "Could not reach the server" in excinfo.value.message
    assert excinfo.value.status_code is None


def test_empty_success_body_decodes_to_empty_dict(captured) -> None:
    _, responses = captured
    responses.append(_response(204))
    client = ApiClient("https://api.example.com", token="")

    assert client.request("PUT", "/x", {}) == {}


def test_read_only_methods_are_rejected(captured) -> None:
    calls, _ = captured
    client = ApiClient("https://api.example.com", token="")

    with pytest.raises(ValueError):
        client.request("GET", "/x", {})
    assert calls == []


def test_no_authorization_header_without_token(captured) -> None:
    calls, responses = captured
    responses.append(_response(200, {}))

    ApiClient("https://api.example.com", token="").request("POST", "/x", {})

    assert "Authorization" not in calls[0]["headers"]
