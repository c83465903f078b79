from __future__ import annotations

import copy
import logging
from typing import Any, Mapping, MutableMapping, cast

import streamlit as st

from api.client import ApiClient
from core.errors import StepValidationError, WizardError
from infra.logging import log_event
from utils.logging_context import set_wizard_id, set_wizard_step
from wizard.definition import WizardDefinition
from wizard.navigation.keys import WizardSessionKeys
from wizard.navigation_types import StepContext
from wizard.sequencer import StepSequencer
from wizard.state import SubmissionStatus, WizardState, build_snapshot, serialize_snapshot
from wizard.steps import StepDefinition
from wizard.store import FormStateStore
from wizard.submission import RequestSender, SubmissionAdapter
from wizard.validation import ValidationGate

logger = logging.getLogger(__name__)


class WizardController:
    """Drive one wizard instance outside the UI layer.

    The controller composes the form store, validation gate, step sequencer
    and submission adapter for a :class:`WizardDefinition` and keeps the
    resulting :class:`WizardState` in ``session_state`` (Streamlit's session
    state unless another mapping is injected), namespaced by wizard id.
    """

    def __init__(
        self,
        definition: WizardDefinition,
        *,
        session_state: MutableMapping[str, object] | None = None,
        client: RequestSender | None = None,
    ) -> None:
        self._definition = definition
        self._session_state = cast(
            MutableMapping[str, object],
            session_state if session_state is not None else st.session_state,
        )
        self._session_keys = WizardSessionKeys(wizard_id=definition.wizard_id)
        self._client = self._resolve_sender(client)
        self._state = self._load_state()
        self._store = FormStateStore(self._state.fields)
        self._gate = ValidationGate(definition.steps)
        self._sequencer = StepSequencer(
            definition.steps,
            gate=self._gate,
            fields_provider=self._store.snapshot,
            start_index=self._state.current_step_index,
        )
        self._adapter = self._build_adapter()
        set_wizard_id(definition.wizard_id)
        self._sync()

    # ── state plumbing ──────────────────────────────────────────

    def _new_state(self) -> WizardState:
        return WizardState(wizard_id=self._definition.wizard_id, fields=copy.deepcopy(dict(self._definition.defaults)))

    def _load_state(self) -> WizardState:
        raw_state = self._session_state.get(self._session_keys.wizard_state)
        if isinstance(raw_state, WizardState):
            state = raw_state
        elif isinstance(raw_state, Mapping):
            state = WizardState.from_dict(raw_state)
        else:
            state = self._new_state()
        for key, value in self._definition.defaults.items():
            state.fields.setdefault(key, copy.deepcopy(value))
        return state

    def _resolve_sender(self, client: RequestSender | None) -> RequestSender:
        if self._definition.sender is not None:
            return self._definition.sender(self._session_state)
        return client if client is not None else ApiClient()

    def _build_adapter(self) -> SubmissionAdapter:
        return SubmissionAdapter(self._state, self._definition.build_request, client=self._client)

    def _drop_widget_values(self) -> None:
        for key in self._session_keys.widget_keys(list(self._session_state.keys())):
            del self._session_state[key]

    def _sync(self) -> None:
        self._state.fields = self._store.snapshot()
        self._state.current_step_index = self._sequencer.current_step_index
        self._session_state[self._session_keys.wizard_state] = self._state
        set_wizard_step(self._sequencer.current_step.key)

    # ── read-only views ─────────────────────────────────────────

    @property
    def definition(self) -> WizardDefinition:
        return self._definition

    @property
    def session_keys(self) -> WizardSessionKeys:
        return self._session_keys

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def fields(self) -> dict[str, Any]:
        return self._store.snapshot()

    @property
    def steps(self) -> tuple[StepDefinition, ...]:
        return self._sequencer.active_steps

    @property
    def current_step(self) -> StepDefinition:
        return self._sequencer.current_step

    @property
    def current_step_index(self) -> int:
        return self._sequencer.current_step_index

    @property
    def step_count(self) -> int:
        return self._sequencer.step_count

    @property
    def progress(self) -> float:
        return self._sequencer.progress

    @property
    def submission_status(self) -> SubmissionStatus:
        return self._adapter.status

    @property
    def last_error(self) -> str | None:
        return self._adapter.last_error

    def is_first(self) -> bool:
        return self._sequencer.is_first()

    def is_last(self) -> bool:
        return self._sequencer.is_last()

    def can_proceed(self) -> bool:
        """Return whether the current step's gate is open."""

        return self._gate.validate(self.current_step_index, self._store.snapshot())

    def validation_messages(self) -> list[str]:
        return self._gate.explain(self.current_step_index, self._store.snapshot())

    def can_submit(self) -> bool:
        return (
            self.is_last()
            and self.can_proceed()
            and self.submission_status in (SubmissionStatus.IDLE, SubmissionStatus.FAILED)
        )

    def step_context(self) -> StepContext:
        """Return the context handed to the current step's renderer."""

        return StepContext(
            wizard_id=self._definition.wizard_id,
            fields=self.fields,
            update=self.update,
            read=lambda: self.fields,
        )

    # ── actions ─────────────────────────────────────────────────

    def update(self, partial: Mapping[str, Any]) -> None:
        """Merge user edits from any step into the form state."""

        self._store.update(partial)
        self._sync()

    def next(self) -> bool:
        moved = self._sequencer.next()
        self._sync()
        return moved

    def previous(self) -> bool:
        moved = self._sequencer.previous()
        self._sync()
        return moved

    def submit(self) -> SubmissionStatus:
        """Submit the wizard from its last step.

        Raises:
            WizardError: When called before the last step.
            StepValidationError: When the last step's gate is closed.
        """

        step = self.current_step
        if not self.is_last():
            raise WizardError(f"submit is only available on the last step, not '{step.key}'")
        fields = self._store.snapshot()
        if not self._gate.validate(self.current_step_index, fields):
            raise StepValidationError(step.key, self._gate.explain(self.current_step_index, fields))
        log_event("info", "submission_started", wizard_id=self._definition.wizard_id, step=step.key)
        status = self._adapter.submit(fields)
        self._sync()
        return status

    def reset(self) -> None:
        """Discard the wizard state and start over from the defaults."""

        self._state = self._new_state()
        self._store.reset(self._state.fields)
        self._sequencer = StepSequencer(
            self._definition.steps,
            gate=self._gate,
            fields_provider=self._store.snapshot,
        )
        self._adapter = self._build_adapter()
        self._drop_widget_values()
        self._sync()
        logger.info("Wizard '%s' reset", self._definition.wizard_id)

    def restore(self, state: WizardState) -> None:
        """Resume from an autosave snapshot of the same wizard."""

        if state.wizard_id != self._definition.wizard_id:
            raise WizardError(
                f"snapshot belongs to wizard '{state.wizard_id}', not '{self._definition.wizard_id}'"
            )
        for key, value in self._definition.defaults.items():
            state.fields.setdefault(key, copy.deepcopy(value))
        self._state = state
        self._store.reset(state.fields)
        self._sequencer = StepSequencer(
            self._definition.steps,
            gate=self._gate,
            fields_provider=self._store.snapshot,
            start_index=state.current_step_index,
        )
        self._adapter = self._build_adapter()
        self._drop_widget_values()
        self._sync()

    def export_snapshot(self) -> bytes:
        return serialize_snapshot(build_snapshot(self._state))


__all__ = ["WizardController"]
