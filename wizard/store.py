"""Accumulated form state shared by every step of a wizard."""

from __future__ import annotations

import copy
import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class FormStateStore:
    """Hold all wizard fields in one record updated by shallow merge.

    Keys are never removed once set. Clearing a field means writing its
    empty sentinel (``""``, ``[]``, ``0`` or ``False``) back into the store.
    """

    def __init__(self, defaults: Mapping[str, Any] | None = None) -> None:
        self._fields: dict[str, Any] = copy.deepcopy(dict(defaults or {}))

    def update(self, partial: Mapping[str, Any]) -> None:
        """Merge ``partial`` into the stored fields; later writes win."""

        if not partial:
            return
        for key, value in partial.items():
            self._fields[str(key)] = copy.deepcopy(value)
        logger.debug("Merged fields %s", sorted(str(key) for key in partial))

    def snapshot(self) -> dict[str, Any]:
        """Return a deep copy of all fields for validation or submission."""

        return copy.deepcopy(self._fields)

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._fields.get(key, default))

    def reset(self, fields: Mapping[str, Any]) -> None:
        """Replace the stored fields with a previously captured snapshot."""

        self._fields = copy.deepcopy(dict(fields))

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __len__(self) -> int:
        return len(self._fields)


__all__ = ["FormStateStore"]
