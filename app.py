# app.py: Pickle+ wizards (Streamlit entrypoint)
from __future__ import annotations

import logging
from pathlib import Path
import sys
from typing import Any, Mapping

import streamlit as st

APP_ROOT = Path(__file__).resolve().parent
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

import config  # noqa: E402
from constants.keys import StateKeys, UIKeys  # noqa: E402
from core.errors import UnknownWizardError, WizardError  # noqa: E402
from utils.errors import display_error  # noqa: E402
from utils.logging_context import configure_logging  # noqa: E402
from wizard.controller import WizardController  # noqa: E402
from wizard.navigation.ui import render_wizard  # noqa: E402
from wizard.state import SubmissionStatus, load_snapshot  # noqa: E402
from wizards.registry import get_wizard, list_wizards  # noqa: E402

APP_VERSION = "1.0.0"

configure_logging(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Pickle+ Wizards",
    page_icon="🎾",
    layout="centered",
    initial_sidebar_state="expanded",
)


def _wizard_label(wizard_id: str) -> str:
    try:
        return get_wizard(wizard_id).title
    except UnknownWizardError:
        return wizard_id


def _select_wizard() -> str:
    wizard_ids = list(list_wizards())
    preferred = st.session_state.get(StateKeys.ACTIVE_WIZARD) or config.DEFAULT_WIZARD
    if preferred not in wizard_ids:
        logger.warning("Unknown default wizard '%s'; falling back to '%s'", preferred, wizard_ids[0])
        preferred = wizard_ids[0]
    st.session_state.setdefault(UIKeys.WIZARD_SELECT, preferred)
    selected = st.sidebar.radio(
        "Wizard",
        wizard_ids,
        format_func=_wizard_label,
        key=UIKeys.WIZARD_SELECT,
    )
    st.session_state[StateKeys.ACTIVE_WIZARD] = selected
    return str(selected)


def _render_autosave(controller: WizardController) -> None:
    with st.sidebar.expander("Save & resume"):
        st.download_button(
            "Download progress",
            data=controller.export_snapshot(),
            file_name=f"{controller.definition.wizard_id}.json",
            mime="application/json",
            use_container_width=True,
        )
        upload = st.file_uploader("Resume from file", type=["json"], key=UIKeys.AUTOSAVE_UPLOAD)
        if upload is None:
            return
        if not st.button("Restore", key=f"{UIKeys.AUTOSAVE_UPLOAD}.apply", use_container_width=True):
            return
        try:
            state = load_snapshot(upload.getvalue())
            controller.restore(state)
        except (ValueError, WizardError) as exc:
            logger.warning("Could not restore snapshot: %s", exc)
            display_error("The uploaded file could not be restored.", str(exc))
            return
        st.rerun()


def _render_result(result: Any) -> None:
    if isinstance(result, Mapping) and result.get("resultId"):
        st.caption(f"Reference: `{result['resultId']}`")
    if result:
        with st.expander("Details"):
            st.json(result)


def _render_success(controller: WizardController) -> None:
    definition = controller.definition
    st.success(f"**{definition.success_title}**\n\n{definition.success_message}".strip())
    _render_result(controller.state.result)
    if definition.success_route:
        st.caption(f"Next: `{definition.success_route}`")
    if st.button("Start over", type="primary"):
        controller.reset()
        st.rerun()


def main() -> None:
    wizard_id = _select_wizard()
    st.sidebar.toggle("Debug details", key=StateKeys.DEBUG_MODE)
    st.sidebar.caption(f"v{APP_VERSION} · {config.STREAMLIT_ENV}")

    definition = get_wizard(wizard_id)
    controller = WizardController(definition)
    _render_autosave(controller)

    st.title(definition.title)
    if definition.description:
        st.caption(definition.description)

    if controller.submission_status is SubmissionStatus.SUCCEEDED:
        _render_success(controller)
        return
    render_wizard(controller)


main()
