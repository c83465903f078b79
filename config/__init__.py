"""Central configuration for the Pickle+ wizard front end.

Values are resolved in the same order everywhere: Streamlit secrets first,
then environment variables (optionally loaded from a ``.env`` file), then the
defaults below. ``API_BASE_URL`` points at the Pickle+ REST backend that
receives wizard submissions.
"""

import logging
import os
import warnings
from typing import Mapping

import streamlit as st

try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass


logger = logging.getLogger(__name__)

_DEFAULT_API_BASE_URL = "http://localhost:5000"
_DEFAULT_API_TIMEOUT = 15.0
_SECRETS_SECTION = "pickleplus"


def _coerce_secret_value(value: object | None) -> str:
    """Return ``value`` as a stripped string or ``""`` when unusable."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _read_setting(name: str) -> str:
    """Resolve ``name`` from Streamlit secrets, their section, then the environment."""

    try:
        direct_secret = st.secrets[name]
    except Exception:
        direct_secret = None
    value = _coerce_secret_value(direct_secret)
    if value:
        return value

    try:
        section = st.secrets[_SECRETS_SECTION]
    except Exception:
        section = None
    if isinstance(section, Mapping):
        section_value = _coerce_secret_value(section.get(name))
        if section_value:
            return section_value

    return _coerce_secret_value(os.getenv(name))


def _parse_positive_float(value: str, *, setting: str, default: float) -> float:
    """Return a positive float parsed from ``value`` or ``default``."""

    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        warnings.warn(
            "%s is not a number; ignoring %s" % (value, setting),
            RuntimeWarning,
        )
        return default
    if parsed <= 0:
        return default
    return parsed


def get_api_base_url() -> str:
    """Return the backend base URL without a trailing slash."""

    return (_read_setting("API_BASE_URL") or _DEFAULT_API_BASE_URL).rstrip("/")


def get_api_token() -> str:
    """Return the optional bearer token for backend requests."""

    return _read_setting("API_TOKEN")


def get_api_timeout() -> float:
    """Return the request timeout in seconds."""

    return _parse_positive_float(
        _read_setting("API_TIMEOUT"),
        setting="API_TIMEOUT",
        default=_DEFAULT_API_TIMEOUT,
    )


API_BASE_URL = get_api_base_url()
API_TIMEOUT = get_api_timeout()
LOG_LEVEL = (_read_setting("LOG_LEVEL") or "INFO").upper()
DEFAULT_WIZARD = _read_setting("DEFAULT_WIZARD") or "coach_application"
STREAMLIT_ENV = os.getenv("STREAMLIT_ENV", "development")


__all__ = [
    "API_BASE_URL",
    "API_TIMEOUT",
    "DEFAULT_WIZARD",
    "LOG_LEVEL",
    "STREAMLIT_ENV",
    "get_api_base_url",
    "get_api_timeout",
    "get_api_token",
]
