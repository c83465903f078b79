from __future__ import annotations

from datetime import date
from typing import Any

import pytest
import streamlit as st

from wizard.navigation_types import StepContext
from wizard.widgets import (
    field_checkbox,
    field_date_input,
    field_multiselect,
    field_number_input,
    field_selectbox,
    field_text_input,
)


class _Recorder:
    def __init__(self) -> None:
        self.fields: dict[str, Any] = {}
        self.calls: list[dict[str, Any]] = []

    def update(self, partial: Any) -> None:
        self.fields.update(partial)

    def context(self, **fields: Any) -> StepContext:
        self.fields.update(fields)
        return StepContext(wizard_id="demo", fields=dict(self.fields), update=self.update)

    def widget(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append({"args": args, **kwargs})
        return st.session_state.get(kwargs["key"])


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> _Recorder:
    rec = _Recorder()
    for name in ("text_input", "number_input", "selectbox", "multiselect", "checkbox", "date_input"):
        monkeypatch.setattr(st, name, rec.widget)
    return rec


def test_text_input_primes_state_and_syncs_back(recorder, _stub_streamlit_session_state) -> None:
    ctx = recorder.context(firstName="Sam")

    value = field_text_input(ctx, "firstName", "First name")

    assert value == "Sam"
    assert recorder.calls[0]["key"] == "wiz:demo:field:firstName"
    _stub_streamlit_session_state["wiz:demo:field:firstName"] = "Samuel"
    recorder.calls[0]["on_change"]()
    assert recorder.fields["firstName"] == "Samuel"


def test_number_input_matches_float_bounds(recorder, _stub_streamlit_session_state) -> None:
    ctx = recorder.context(hourlyRate=0)

    field_number_input(ctx, "hourlyRate", "Rate", min_value=0.0, step=5.0)

    assert _stub_streamlit_session_state["wiz:demo:field:hourlyRate"] == 0.0
    assert isinstance(_stub_streamlit_session_state["wiz:demo:field:hourlyRate"], float)


def test_selectbox_drops_unknown_value(recorder, _stub_streamlit_session_state) -> None:
    ctx = recorder.context(skillLevel="9.9")

    field_selectbox(ctx, "skillLevel", "Skill", ["3.0", "3.5"])

    assert _stub_streamlit_session_state["wiz:demo:field:skillLevel"] is None
    assert recorder.calls[0]["index"] is None


def test_multiselect_stores_lists(recorder, _stub_streamlit_session_state) -> None:
    ctx = recorder.context(specializations=["Dinking", "Gone"])

    field_multiselect(ctx, "specializations", "Specializations", ["Dinking", "Mental Game"])
    _stub_streamlit_session_state["wiz:demo:field:specializations"] = ("Dinking", "Mental Game")
    recorder.calls[0]["on_change"]()

    assert recorder.fields["specializations"] == ["Dinking", "Mental Game"]


def test_checkbox_and_date_normalisation(recorder, _stub_streamlit_session_state) -> None:
    ctx = recorder.context(agreed="yes", targetDate="2026-04-01")

    assert field_checkbox(ctx, "agreed", "Agree") is False
    assert field_date_input(ctx, "targetDate", "Target") == date(2026, 4, 1)

    _stub_streamlit_session_state["wiz:demo:field:targetDate"] = date(2026, 5, 2)
    recorder.calls[1]["on_change"]()
    assert recorder.fields["targetDate"] == "2026-05-02"


def test_managed_kwargs_are_rejected(recorder) -> None:
    ctx = recorder.context()

    with pytest.raises(ValueError):
        field_text_input(ctx, "name", "Name", key="custom")
