"""OData query option helpers."""

from __future__ import annotations

from .parameters import Parameters, bool_to_string

__all__ = ["Parameters", "bool_to_string"]
