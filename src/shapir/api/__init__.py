"""Entity clients for shapir."""

from __future__ import annotations

from .items import Items
from .shares import Shares
from .users import Users

__all__ = ["Items", "Shares", "Users"]
