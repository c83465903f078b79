from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Literal, Mapping, Sequence

import streamlit as st
from streamlit.delta_generator import DeltaGenerator

from core.errors import StepValidationError, SubmissionInProgressError, WizardError
from utils.errors import display_error, notify
from wizard.controller import WizardController
from wizard.state import SubmissionStatus

logger = logging.getLogger(__name__)

_NAVIGATION_STYLE = """
<style>
.wizard-nav-marker + div[data-testid="stHorizontalBlock"] {
    display: flex;
    justify-content: center;
    gap: var(--space-sm, 0.6rem);
    align-items: stretch;
    margin: 1.2rem auto 0.65rem;
    max-width: 520px;
}

.wizard-nav-marker + div[data-testid="stHorizontalBlock"] > div[data-testid="column"] {
    flex: 1 1 0;
}

.wizard-nav-marker + div[data-testid="stHorizontalBlock"] button {
    width: 100%;
    border-radius: 14px;
}

.wizard-nav-warning-area {
    margin: 0.45rem auto 0;
    max-width: 520px;
}

.wizard-nav-warning {
    padding: 0.6rem 0.85rem;
    border-radius: 12px;
    border: 1px solid rgba(245, 158, 11, 0.35);
    background: rgba(251, 191, 36, 0.18);
    font-size: 0.92rem;
    line-height: 1.35;
}

@media (max-width: 768px) {
    .wizard-nav-marker + div[data-testid="stHorizontalBlock"] {
        flex-direction: column;
    }
}
</style>
"""


class NavigationDirection(str, Enum):
    """Direction metadata for wizard navigation controls."""

    PREVIOUS = "previous"
    NEXT = "next"
    SUBMIT = "submit"


@dataclass(frozen=True)
class NavigationButtonState:
    """Typed configuration for a single navigation button."""

    direction: NavigationDirection
    label: str
    enabled: bool = True
    primary: bool = False
    hint: str | None = None
    on_click: Callable[[], None] | None = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class NavigationState:
    """Aggregated state used to render navigation controls."""

    current_key: str
    missing: tuple[str, ...] = ()
    previous: NavigationButtonState | None = None
    forward: NavigationButtonState | None = None


def inject_navigation_style() -> None:
    """Emit the navigation CSS; Streamlit drops it unless re-sent on every run."""

    st.markdown(_NAVIGATION_STYLE, unsafe_allow_html=True)


def _notice_key(controller: WizardController) -> str:
    return controller.session_keys.namespace("notice")


def _submit(controller: WizardController) -> None:
    definition = controller.definition
    try:
        with st.spinner("Submitting…"):
            status = controller.submit()
    except (StepValidationError, SubmissionInProgressError) as exc:
        logger.info("Submit ignored for '%s': %s", definition.wizard_id, exc)
        return
    except WizardError as exc:
        logger.warning("Submit rejected for '%s': %s", definition.wizard_id, exc)
        return

    if status is SubmissionStatus.SUCCEEDED:
        st.session_state[_notice_key(controller)] = (definition.success_title, definition.success_message, "✅")
    elif status is SubmissionStatus.FAILED:
        st.session_state[_notice_key(controller)] = (definition.failure_title, controller.last_error, "⚠️")


def build_navigation_state(controller: WizardController) -> NavigationState:
    """Derive the button configuration for the controller's current step."""

    missing = tuple(controller.validation_messages())
    previous_button = (
        None
        if controller.is_first()
        else NavigationButtonState(
            direction=NavigationDirection.PREVIOUS,
            label="◀ Back",
            on_click=controller.previous,
        )
    )

    if controller.is_last():
        submitting = controller.submission_status is SubmissionStatus.SUBMITTING
        forward = NavigationButtonState(
            direction=NavigationDirection.SUBMIT,
            label="Submitting…" if submitting else "Submit",
            enabled=controller.can_submit(),
            primary=True,
            hint="Please complete the required fields before submitting." if missing else None,
            on_click=lambda: _submit(controller),
        )
    else:
        forward = NavigationButtonState(
            direction=NavigationDirection.NEXT,
            label="Next ▶",
            enabled=not missing,
            primary=True,
            hint="Please complete the required fields before continuing." if missing else None,
            on_click=controller.next,
        )

    return NavigationState(
        current_key=controller.current_step.key,
        missing=missing,
        previous=previous_button,
        forward=forward,
    )


def _render_navigation_button(
    column: DeltaGenerator,
    button: NavigationButtonState | None,
    state: NavigationState,
) -> bool:
    """Render a single navigation button and return whether it fired."""

    if button is None:
        column.write("")
        return False

    button_type: Literal["primary", "secondary"] = "primary" if button.primary else "secondary"
    triggered = column.button(
        button.label,
        key=f"wizard_{button.direction.value}_{state.current_key}",
        type=button_type,
        disabled=not button.enabled,
        use_container_width=True,
    )
    if button.hint:
        column.caption(button.hint)
    if triggered and button.on_click is not None:
        button.on_click()
        return True
    return False


def render_navigation(state: NavigationState) -> None:
    """Render Back / Next / Submit controls and rerun after a transition."""

    st.markdown("<div class='wizard-nav-marker'></div>", unsafe_allow_html=True)
    cols = st.columns((1, 1), gap="small")
    fired = _render_navigation_button(cols[0], state.previous, state)
    fired = _render_navigation_button(cols[1], state.forward, state) or fired
    if fired:
        st.rerun()


def render_validation_warnings(messages: Sequence[str]) -> None:
    if not messages:
        return
    combined = "<br />".join(html.escape(message) for message in dict.fromkeys(messages))
    st.markdown(
        f"""
        <div class="wizard-nav-warning-area">
            <div class="wizard-nav-warning">{combined}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_step_header(controller: WizardController) -> None:
    step = controller.current_step
    position = controller.current_step_index + 1
    st.progress(controller.progress, text=f"Step {position} of {controller.step_count}: {step.label}")
    st.subheader(step.label)
    if step.description:
        st.caption(step.description)


def flush_notice(controller: WizardController) -> None:
    """Show the pending submission toast, if any, exactly once."""

    notice = st.session_state.pop(_notice_key(controller), None)
    if not notice:
        return
    title, description, icon = notice
    notify(title, description or None, icon=icon)


def _humanize(field_name: str) -> str:
    words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", field_name).split()
    return " ".join(words).capitalize()


def _format_summary_value(value: object) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, Mapping):
        return str(value.get("displayName") or value.get("title") or "")
    if isinstance(value, (list, tuple)):
        return ", ".join(text for text in map(_format_summary_value, value) if text)
    if value is None:
        return ""
    return str(value).strip()


def build_summary(controller: WizardController) -> list[tuple[str, str]]:
    """Return ``(label, value)`` rows for the summary fields of earlier steps.

    Blank values are left out.
    """

    fields = controller.fields
    rows: list[tuple[str, str]] = []
    for step in controller.steps[: controller.current_step_index]:
        for name in step.summary_fields:
            text = _format_summary_value(fields.get(name))
            if text:
                rows.append((_humanize(name), text))
    return rows


def render_summary(controller: WizardController) -> None:
    rows = build_summary(controller)
    if not rows:
        return
    with st.expander("Review your answers", expanded=True):
        for label, text in rows:
            st.markdown(f"**{html.escape(label)}:** {html.escape(text)}")


def render_wizard(controller: WizardController) -> None:
    """Render the current step of ``controller`` with its navigation."""

    inject_navigation_style()
    flush_notice(controller)
    render_step_header(controller)

    step = controller.current_step
    if step.renderer is not None:
        step.renderer(controller.step_context())
    if controller.is_last():
        render_summary(controller)

    if controller.submission_status is SubmissionStatus.FAILED and controller.last_error:
        display_error(controller.last_error)

    state = build_navigation_state(controller)
    render_validation_warnings(state.missing)
    render_navigation(state)


__all__ = [
    "NavigationButtonState",
    "NavigationDirection",
    "NavigationState",
    "build_navigation_state",
    "build_summary",
    "flush_notice",
    "inject_navigation_style",
    "render_navigation",
    "render_step_header",
    "render_summary",
    "render_validation_warnings",
    "render_wizard",
]
