"""Utility helpers for rendering notifications in Streamlit."""

from __future__ import annotations

from typing import Final

import streamlit as st

from constants.keys import StateKeys

_DETAILS_LABEL: Final[str] = "Details"


def is_debug_session_active() -> bool:
    """Return ``True`` when technical details may be shown to the user."""

    return bool(st.session_state.get(StateKeys.DEBUG_MODE))


def display_error(msg: str, detail: str | None = None) -> None:
    """Render a user-facing error with optional debug details.

    Args:
        msg: Short error message for the user, shown verbatim.
        detail: Optional technical detail shown when debug mode is enabled.
    """

    st.error(msg)
    if detail and is_debug_session_active():
        with st.expander(_DETAILS_LABEL):
            st.code(detail)


def notify(title: str, description: str | None = None, *, icon: str | None = None) -> None:
    """Show a transient toast notification."""

    text = f"**{title}**" if not description else f"**{title}**\n\n{description}"
    st.toast(text, icon=icon)
