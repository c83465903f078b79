from types import SimpleNamespace

import pytest

import config


@pytest.fixture
def fake_secrets(monkeypatch):
    secrets: dict[str, object] = {}
    monkeypatch.setattr(config, "st", SimpleNamespace(secrets=secrets), raising=False)
    return secrets


def test_api_base_url_resolution_order(monkeypatch, fake_secrets):
    fake_secrets["API_BASE_URL"] = "https://secrets.example.com/"
    monkeypatch.setenv("API_BASE_URL", "https://env.example.com")

    # Direct Streamlit secret wins over environment variables.
    assert config.get_api_base_url() == "https://secrets.example.com"

    # Nested pickleplus section is used when the top-level key is missing.
    fake_secrets.pop("API_BASE_URL")
    fake_secrets["pickleplus"] = {"API_BASE_URL": "https://section.example.com"}
    assert config.get_api_base_url() == "https://section.example.com"

    # Environment variable is the final fallback.
    fake_secrets["pickleplus"].pop("API_BASE_URL")  # type: ignore[union-attr]
    assert config.get_api_base_url() == "https://env.example.com"

    monkeypatch.delenv("API_BASE_URL")
    assert config.get_api_base_url() == "http://localhost:5000"


def test_blank_secret_falls_through_to_environment(monkeypatch, fake_secrets):
    fake_secrets["API_TOKEN"] = "   "
    monkeypatch.setenv("API_TOKEN", "env-token")

    assert config.get_api_token() == "env-token"


def test_api_token_defaults_to_empty(fake_secrets):
    assert config.get_api_token() == ""


def test_api_timeout_parsing(monkeypatch, fake_secrets):
    assert config.get_api_timeout() == 15.0

    fake_secrets["API_TIMEOUT"] = 30
    assert config.get_api_timeout() == 30.0

    fake_secrets["API_TIMEOUT"] = "-5"
    assert config.get_api_timeout() == 15.0


def test_api_timeout_warns_on_garbage(fake_secrets):
    fake_secrets["API_TIMEOUT"] = "soon"

    with pytest.warns(RuntimeWarning):
        assert config.get_api_timeout() == 15.0
