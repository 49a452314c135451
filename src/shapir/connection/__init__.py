"""Connection exports for shapir."""

from __future__ import annotations

from .builder import ConnectionBuilder
from .connection import Connection, decode_json

__all__ = ["Connection", "ConnectionBuilder", "decode_json"]
