"""Concrete Pickle+ wizards built on the :mod:`wizard` package."""

from __future__ import annotations
