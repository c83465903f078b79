"""Field-bound widget helpers for wizard step renderers."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Sequence, TypeVar, cast

import streamlit as st

from wizard.navigation_types import StepContext

T = TypeVar("T")

__all__ = [
    "field_checkbox",
    "field_date_input",
    "field_multiselect",
    "field_number_input",
    "field_selectbox",
    "field_text_area",
    "field_text_input",
]


def _ensure_widget_state(key: str, value: Any) -> None:
    """Prime ``st.session_state`` with ``value`` when ``key`` is missing."""

    if key not in st.session_state:
        st.session_state[key] = value


def _normalize_session_value(value: Any) -> Any:
    """Convert widget values to JSON-friendly structures before storing."""

    if isinstance(value, (tuple, set)):
        return list(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _build_on_change(ctx: StepContext, field: str, key: str) -> Callable[[], None]:
    """Return a callback that syncs the widget value back into the form state."""

    def _callback() -> None:
        ctx.update({field: _normalize_session_value(st.session_state.get(key))})

    return _callback


def _reject_managed_kwargs(name: str, kwargs: dict[str, Any]) -> None:
    for managed in ("on_change", "key", "value"):
        if managed in kwargs:
            raise ValueError(f"{name} manages {managed} internally")


def field_text_input(ctx: StepContext, field: str, label: str, **kwargs: Any) -> str:
    """Render a text input bound to ``field``."""

    _reject_managed_kwargs("field_text_input", kwargs)
    key = ctx.widget_key(field)
    current = ctx.fields.get(field)
    _ensure_widget_state(key, "" if current is None else str(current))
    return st.text_input(label, key=key, on_change=_build_on_change(ctx, field, key), **kwargs)


def field_text_area(ctx: StepContext, field: str, label: str, **kwargs: Any) -> str:
    """Render a text area bound to ``field``."""

    _reject_managed_kwargs("field_text_area", kwargs)
    key = ctx.widget_key(field)
    current = ctx.fields.get(field)
    _ensure_widget_state(key, "" if current is None else str(current))
    return st.text_area(label, key=key, on_change=_build_on_change(ctx, field, key), **kwargs)


def field_number_input(
    ctx: StepContext,
    field: str,
    label: str,
    *,
    min_value: float | int | None = None,
    max_value: float | int | None = None,
    step: float | int | None = None,
    **kwargs: Any,
) -> float | int | None:
    """Render a number input bound to ``field``.

    Empty fields start as ``None`` so the input renders blank instead of
    showing a misleading zero.
    """

    _reject_managed_kwargs("field_number_input", kwargs)
    key = ctx.widget_key(field)
    current = ctx.fields.get(field)
    if isinstance(current, bool) or not isinstance(current, (int, float)):
        current = None
    elif any(isinstance(bound, float) for bound in (min_value, max_value, step)):
        current = float(current)
    else:
        current = int(current)
    _ensure_widget_state(key, current)
    return st.number_input(
        label,
        min_value=min_value,
        max_value=max_value,
        step=step,
        key=key,
        on_change=_build_on_change(ctx, field, key),
        **kwargs,
    )


def field_selectbox(
    ctx: StepContext,
    field: str,
    label: str,
    options: Sequence[T],
    *,
    format_func: Callable[[T], str] = str,
    **kwargs: Any,
) -> T | None:
    """Render a selectbox bound to ``field``.

    An unset field renders with no selection (``index=None``) so the user
    has to make an explicit choice.
    """

    _reject_managed_kwargs("field_selectbox", kwargs)
    option_list = list(options)
    if not option_list:
        raise ValueError("field_selectbox requires at least one option")

    key = ctx.widget_key(field)
    current = ctx.fields.get(field)
    _ensure_widget_state(key, current if current in option_list else None)
    return st.selectbox(
        label,
        option_list,
        index=None,
        format_func=format_func,
        key=key,
        on_change=_build_on_change(ctx, field, key),
        **kwargs,
    )


def field_multiselect(
    ctx: StepContext,
    field: str,
    label: str,
    options: Sequence[T],
    *,
    format_func: Callable[[T], str] = str,
    **kwargs: Any,
) -> list[T]:
    """Render a multiselect bound to ``field``."""

    _reject_managed_kwargs("field_multiselect", kwargs)
    option_list = list(options)
    key = ctx.widget_key(field)
    current = ctx.fields.get(field)
    if isinstance(current, (list, tuple, set, frozenset)):
        selection = [item for item in current if item in option_list]
    else:
        selection = []
    _ensure_widget_state(key, selection)
    return list(
        st.multiselect(
            label,
            option_list,
            format_func=format_func,
            key=key,
            on_change=_build_on_change(ctx, field, key),
            **kwargs,
        )
    )


def field_checkbox(ctx: StepContext, field: str, label: str, **kwargs: Any) -> bool:
    """Render a checkbox bound to a boolean ``field``."""

    _reject_managed_kwargs("field_checkbox", kwargs)
    key = ctx.widget_key(field)
    _ensure_widget_state(key, ctx.fields.get(field) is True)
    return bool(st.checkbox(label, key=key, on_change=_build_on_change(ctx, field, key), **kwargs))


def field_date_input(ctx: StepContext, field: str, label: str, **kwargs: Any) -> date | None:
    """Render a date input bound to an ISO-formatted ``field``."""

    _reject_managed_kwargs("field_date_input", kwargs)
    key = ctx.widget_key(field)
    current = ctx.fields.get(field)
    parsed: date | None = None
    if isinstance(current, date):
        parsed = current
    elif isinstance(current, str) and current.strip():
        try:
            parsed = date.fromisoformat(current.strip()[:10])
        except ValueError:
            parsed = None
    _ensure_widget_state(key, parsed)
    return cast(
        "date | None",
        st.date_input(label, key=key, on_change=_build_on_change(ctx, field, key), **kwargs),
    )
