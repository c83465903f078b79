"""Attach the active wizard and step to every log record.

The values live in context variables so concurrent Streamlit sessions never
see each other's context. ``configure_logging`` installs a record factory
that copies them onto each record as ``wizard_id`` and ``wizard_step``.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

_LOG_FORMAT = "%(asctime)s %(levelname)s [wizard=%(wizard_id)s step=%(wizard_step)s] %(name)s: %(message)s"
_UNSET = "-"

_CONTEXT: dict[str, contextvars.ContextVar[str]] = {
    "wizard_id": contextvars.ContextVar("wizard_id", default=_UNSET),
    "wizard_step": contextvars.ContextVar("wizard_step", default=_UNSET),
}

_base_factory = logging.getLogRecordFactory()
_factory_installed = False


def _stamp(record: logging.LogRecord) -> logging.LogRecord:
    for attribute, var in _CONTEXT.items():
        setattr(record, attribute, var.get())
    return record


class _ContextFilter(logging.Filter):
    """Stamp records created before the factory was installed."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - logging protocol
        _stamp(record)
        return True


def _normalise(value: str | None) -> str:
    if value is None:
        return _UNSET
    return value.strip() or _UNSET


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(*, level: int | str = logging.INFO) -> None:
    """Format root log output with the wizard context; safe to call repeatedly."""

    global _factory_installed

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=_resolve_level(level), format=_LOG_FORMAT)
    for handler in root.handlers:
        if handler.formatter is None:
            handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    if not any(isinstance(flt, _ContextFilter) for flt in root.filters):
        root.addFilter(_ContextFilter())

    if _factory_installed:
        return

    def _factory(*args: object, **kwargs: object) -> logging.LogRecord:
        return _stamp(_base_factory(*args, **kwargs))

    logging.setLogRecordFactory(_factory)
    _factory_installed = True


def set_wizard_id(wizard_id: str | None) -> None:
    """Bind the active wizard for subsequent log records."""

    configure_logging()
    _CONTEXT["wizard_id"].set(_normalise(wizard_id))


def set_wizard_step(step: str | None) -> None:
    _CONTEXT["wizard_step"].set(_normalise(step))


@contextmanager
def log_context(
    *,
    wizard_id: str | None = None,
    wizard_step: str | None = None,
) -> Iterator[None]:
    """Override the wizard context for the duration of the block."""

    overrides = {"wizard_id": wizard_id, "wizard_step": wizard_step}
    tokens = [
        (_CONTEXT[attribute], _CONTEXT[attribute].set(_normalise(value)))
        for attribute, value in overrides.items()
        if value is not None
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


__all__ = [
    "configure_logging",
    "log_context",
    "set_wizard_id",
    "set_wizard_step",
]
