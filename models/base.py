"""Shared configuration for request bodies sent to the Pickle+ backend."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request bodies the backend expects in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body, omitting unset optional values."""

        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


__all__ = ["CamelModel"]
