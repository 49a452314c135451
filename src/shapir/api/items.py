"""Items entity: files and folders."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Iterable, Optional

import requests

from shapir.errors import (
    DeserializationError,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
)
from shapir.models import Item, Path, PathKind, item_from_json, items_from_json
from shapir.odata import Parameters, bool_to_string

from .content import open_download, request_upload_spec, upload_chunks

if TYPE_CHECKING:
    from shapir.connection import Connection

logger = logging.getLogger(__name__)

DOWNLOAD_BLOCK_SIZE = 64 * 1024


class Items:
    """
    Client for the Items entity.

    Obtain it from an authenticated connection with `Connection.items()`.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn
        self._meta = False

    def include_meta(self, include: bool = True) -> None:
        """Keep the raw JSON object of every returned item in `Item.meta`."""
        self._meta = include

    # ----------------------------
    # Read
    # ----------------------------
    def stat(self, path: Path, parameters: Optional[Parameters] = None) -> Optional[Item]:
        """
        Return the item at `path`, or None if it does not exist.

        Errors other than "not found" are raised.
        """
        uri, pairs = path.entity()
        if parameters is not None:
            pairs = pairs + parameters.to_pairs()

        try:
            data = self._conn.query_json("GET", uri, params=pairs)
        except NotFoundError:
            logger.debug("[stat] not found; path:%s", path)
            return None

        found = items_from_json(data, with_meta=self._meta)
        if not found:
            return None
        if len(found) > 1:
            raise DeserializationError(
                "There is more than one item on path",
                details={"path": str(path), "count": len(found)},
            )
        return found[0]

    def list(
        self,
        path: Path,
        filter: Optional[str] = None,
        parameters: Optional[Parameters] = None,
    ) -> list[Item]:
        """
        List the children of the folder at `path`.

        Args:
            path: Folder to list.
            filter: Optional OData `$filter` expression, e.g.
                ``"isof('ShareFile.Api.Models.File')"``.
            parameters: Additional OData options.

        Raises:
            NotFoundError: if the folder does not exist.
        """
        folder = self._resolve(path)
        params = parameters.copy() if parameters is not None else Parameters()
        if filter:
            params.filter_add(filter)

        uri, pairs = folder.entity("/Children")
        data = self._conn.query_json("GET", uri, params=pairs + params.to_pairs())
        if data is None:
            return []
        return items_from_json(data, with_meta=self._meta)

    # ----------------------------
    # Write
    # ----------------------------
    def mkdir(
        self,
        path: Path,
        name: str,
        *,
        description: str = "",
        overwrite: bool = False,
    ) -> Item:
        """Create folder `name` inside the folder at `path`."""
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Folder name must be a non-empty string")

        parent_id = self._resolve_id(path)
        params = [
            ("overwrite", bool_to_string(overwrite)),
            ("passthrough", bool_to_string(False)),
        ]
        data = self._conn.query_json(
            "POST",
            f"Items({parent_id})/Folder",
            params=params,
            json={"Name": name, "Description": description},
        )
        item = item_from_json(data, with_meta=self._meta)
        logger.info("[mkdir] created folder; id:%s name:%s parent:%s", item.id, name, parent_id)
        return item

    def remove(self, path: Path) -> None:
        """
        Delete the item at `path`.

        Raises:
            NotFoundError: if the item does not exist.
        """
        item_id = self._resolve_id(path)
        params = [
            ("singleversion", bool_to_string(False)),
            ("forceSync", bool_to_string(False)),
        ]
        self._conn.query_json("DELETE", f"Items({item_id})", params=params)
        logger.info("[remove] deleted item; id:%s", item_id)

    def remove_bulk(self, paths: Iterable[Path]) -> None:
        """
        Delete several items.

        Items are grouped by parent folder and each group is deleted with one
        BulkDelete request. Every path is resolved before anything is deleted.

        Raises:
            NotFoundError: if any of the items does not exist.
        """
        groups: dict[str, list[str]] = {}
        for path in paths:
            item = self._stat_required(path, Parameters().expand_add("Parent"))
            if item.parent_id is None:
                raise DeserializationError(
                    "Item.Parent.Id property is missing",
                    details={"id": item.id},
                )
            groups.setdefault(item.parent_id, []).append(item.id)

        for parent_id, ids in groups.items():
            params = [
                ("forceSync", bool_to_string(False)),
                ("deletePermanently", bool_to_string(False)),
            ]
            self._conn.query_json(
                "POST",
                f"Items({parent_id})/BulkDelete",
                params=params,
                json=ids,
            )
            logger.info("[remove_bulk] deleted items; parent:%s count:%s", parent_id, len(ids))

    def move(self, path: Path, new_parent: Path) -> Item:
        """Move the item at `path` into the folder at `new_parent`."""
        item_id = self._resolve_id(path)
        parent_id = self._resolve_id(new_parent)
        data = self._conn.query_json(
            "PATCH",
            f"Items({item_id})",
            json={"Parent": {"Id": parent_id}},
        )
        return item_from_json(data, with_meta=self._meta)

    # ----------------------------
    # Content
    # ----------------------------
    def upload(
        self,
        path: Path,
        name: str,
        data: bytes,
        *,
        chunk_size: Optional[int] = None,
        overwrite: bool = False,
        unzip: bool = False,
    ) -> None:
        """
        Upload `data` as file `name` into the folder at `path`.

        The payload is sent in sequential chunks of `chunk_size` bytes
        (default: the connection's `upload_chunk_size`). A failing chunk
        aborts the upload and its error is raised.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidArgumentError("data must be bytes")
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("File name must be a non-empty string")

        size = chunk_size if chunk_size is not None else self._conn.settings.upload_chunk_size
        if not isinstance(size, int) or size <= 0:
            raise InvalidArgumentError(
                "chunk_size must be a positive integer",
                details={"chunk_size": size},
            )

        payload = bytes(data)
        folder_id = self._resolve_id(path)
        chunk_uri = request_upload_spec(
            self._conn,
            folder_id,
            name,
            len(payload),
            overwrite=overwrite,
            unzip=unzip,
        )
        sent = upload_chunks(self._conn, chunk_uri, payload, size)
        logger.info(
            "[upload] uploaded; name:%s folder:%s bytes:%s chunks:%s",
            name,
            folder_id,
            len(payload),
            sent,
        )

    def download(self, path: Path) -> bytes:
        """Return the content of the file at `path`."""
        item_id = self._resolve_id(path)
        response = open_download(self._conn, item_id)
        try:
            return response.content
        finally:
            response.close()

    def download_file(
        self,
        path: Path,
        local_path: str,
        *,
        overwrite: bool = False,
    ) -> None:
        """Download the file at `path` into `local_path`."""
        if not overwrite and os.path.exists(local_path):
            raise InvalidArgumentError(
                "Destination file exists and overwrite is False",
                details={"local_path": local_path},
            )

        item_id = self._resolve_id(path)
        response = open_download(self._conn, item_id)

        parent_dir = os.path.dirname(local_path)
        if parent_dir:
            os.makedirs(parent_dir, exist_ok=True)

        try:
            with open(local_path, "wb") as f:
                for block in response.iter_content(chunk_size=DOWNLOAD_BLOCK_SIZE):
                    if block:
                        f.write(block)
        except requests.exceptions.RequestException as exc:
            _discard(local_path)
            logger.warning("[download_file] download interrupted; id:%s error:%s", item_id, exc)
            raise NetworkError(
                "Download interrupted",
                details={"item_id": item_id, "local_path": local_path},
                cause=exc,
            ) from exc
        except OSError:
            _discard(local_path)
            raise
        finally:
            response.close()
        logger.info("[download_file] downloaded; id:%s to:%s", item_id, local_path)

    # ----------------------------
    # Internals
    # ----------------------------
    def _resolve(self, path: Path) -> Path:
        if path.addressable:
            return path
        return Path.by_id(self._stat_required(path).id)

    def _resolve_id(self, path: Path) -> str:
        if path.kind is PathKind.ID:
            return str(path.item_id)
        return self._stat_required(path).id

    def _stat_required(self, path: Path, parameters: Optional[Parameters] = None) -> Item:
        item = self.stat(path, parameters)
        if item is None:
            raise NotFoundError(
                f"The item is not found: {path}",
                details={"path": str(path), "status_code": 404},
            )
        return item


def _discard(local_path: str) -> None:
    if os.path.exists(local_path):
        os.remove(local_path)
