"""HTTP access to the Pickle+ backend."""

from .client import ApiClient

__all__ = ["ApiClient"]
