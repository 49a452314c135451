"""Public model exports for shapir."""

from __future__ import annotations

from .item import Item, ItemKind, item_from_json, items_from_json
from .path import Path, PathKind
from .share import AccessRight, Share, ShareConfig, ShareKind, share_from_json
from .user_id import UserId, UserIdKind

__all__ = [
    "Path",
    "PathKind",
    "Item",
    "ItemKind",
    "item_from_json",
    "items_from_json",
    "AccessRight",
    "Share",
    "ShareConfig",
    "ShareKind",
    "share_from_json",
    "UserId",
    "UserIdKind",
]
