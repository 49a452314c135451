"""Data model for ShareFile items (files and folders)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from shapir.errors import DeserializationError
from shapir.util.time import parse_api_datetime


class ItemKind(str, Enum):
    """Item kind, derived from the `odata.type` property."""

    FOLDER = "ShareFile.Api.Models.Folder"
    FILE = "ShareFile.Api.Models.File"

    @property
    def is_folder(self) -> bool:
        return self is ItemKind.FOLDER

    @property
    def is_file(self) -> bool:
        return self is ItemKind.FILE


@dataclass(slots=True)
class Item:
    """
    Represents a file or folder.

    Notes:
        - `parent_id` is only known when the response carries `Parent.Id`
          (request it with `$expand=Parent`).
        - `meta` holds the raw JSON object when meta collection is enabled on
          the Items client.
    """

    kind: ItemKind
    id: str
    name: str

    filename: str = ""
    description: str = ""
    size: int = 0
    url: Optional[str] = None
    parent_id: Optional[str] = None
    creation_date: Optional[datetime] = None
    meta: Optional[dict[str, Any]] = None

    @property
    def is_folder(self) -> bool:
        return self.kind.is_folder

    @property
    def is_file(self) -> bool:
        return self.kind.is_file


def item_from_json(data: Any, *, with_meta: bool = False) -> Item:
    """
    Build an Item from one decoded JSON object.

    Raises:
        DeserializationError: if the object is not an item or lacks required fields.
    """
    if not isinstance(data, dict):
        raise DeserializationError("Item can be constructed from JSON object only")

    odata_type = data.get("odata.type")
    if not isinstance(odata_type, str):
        raise DeserializationError("Item.odata.type property is missing")
    try:
        kind = ItemKind(odata_type)
    except ValueError as exc:
        raise DeserializationError(
            f"Unknown item kind {odata_type}",
            details={"odata.type": odata_type},
            cause=exc,
        ) from exc

    item_id = data.get("Id")
    if not isinstance(item_id, str) or not item_id:
        raise DeserializationError("Item.Id property is missing")

    name = data.get("Name")
    if not isinstance(name, str):
        raise DeserializationError(
            "Item.Name property is missing",
            details={"id": item_id},
        )

    size = data.get("FileSizeBytes", 0)
    if isinstance(size, str) and size.isdigit():
        size = int(size)
    elif not isinstance(size, int) or isinstance(size, bool):
        size = 0

    creation_date = None
    if isinstance(data.get("CreationDate"), str):
        try:
            creation_date = parse_api_datetime(data["CreationDate"])
        except ValueError as exc:
            raise DeserializationError(
                "Item.CreationDate property is invalid",
                details={"id": item_id, "value": data["CreationDate"]},
                cause=exc,
            ) from exc

    parent = data.get("Parent")
    parent_id = parent.get("Id") if isinstance(parent, dict) else None

    filename = data.get("FileName")
    description = data.get("Description")
    url = data.get("url")
    return Item(
        kind=kind,
        id=item_id,
        name=name,
        filename=filename if isinstance(filename, str) else "",
        description=description if isinstance(description, str) else "",
        size=size,
        url=url if isinstance(url, str) else None,
        parent_id=parent_id if isinstance(parent_id, str) else None,
        creation_date=creation_date,
        meta=dict(data) if with_meta else None,
    )


def items_from_json(data: Any, *, with_meta: bool = False) -> list[Item]:
    """
    Build Items from a decoded response that may be a single item or a feed.

    A feed is recognized by its `odata.count` property and carries the items in
    `value`.
    """
    if isinstance(data, dict) and "odata.count" in data:
        values = data.get("value")
        if not isinstance(values, list):
            raise DeserializationError("Item feed has no 'value' array")
        return [item_from_json(v, with_meta=with_meta) for v in values]
    return [item_from_json(data, with_meta=with_meta)]
