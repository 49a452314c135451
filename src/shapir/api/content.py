"""Item content transfer: chunked upload and download."""

from __future__ import annotations

import hashlib
import logging
import math
from typing import TYPE_CHECKING, Iterator

from shapir.errors import DeserializationError, ShapirError
from shapir.odata import Parameters, bool_to_string

if TYPE_CHECKING:
    import requests

    from shapir.connection import Connection

logger = logging.getLogger(__name__)

OCTET_STREAM = {"Content-Type": "application/octet-stream"}


def chunk_count(size: int, chunk_size: int) -> int:
    """Number of chunk requests an upload of `size` bytes issues (at least one)."""
    return max(1, math.ceil(size / chunk_size))


def iter_chunks(data: bytes, chunk_size: int) -> Iterator[tuple[int, int, bytes]]:
    """Yield (index, offset, chunk) triples; empty data yields one empty chunk."""
    if not data:
        yield 0, 0, b""
        return
    for index, offset in enumerate(range(0, len(data), chunk_size)):
        yield index, offset, data[offset:offset + chunk_size]


def request_upload_spec(
    conn: Connection,
    folder_id: str,
    name: str,
    size: int,
    *,
    overwrite: bool,
    unzip: bool,
) -> str:
    """
    Ask for an upload specification and return its chunk URI.

    Raises:
        DeserializationError: if the specification has no `ChunkUri`.
    """
    params = Parameters().custom(
        [
            ("method", "streamed"),
            ("raw", "true"),
            ("responseFormat", "json"),
            ("unzip", unzip),
            ("overwrite", overwrite),
            ("fileName", name),
            ("fileSize", size),
        ]
    )
    spec = conn.query_json("GET", f"Items({folder_id})/Upload", params=params.to_pairs())
    chunk_uri = spec.get("ChunkUri") if isinstance(spec, dict) else None
    if not isinstance(chunk_uri, str) or not chunk_uri:
        raise DeserializationError(
            "UploadSpecification.ChunkUri property is missing",
            details={"folder_id": folder_id},
        )
    return chunk_uri


def upload_chunks(conn: Connection, chunk_uri: str, data: bytes, chunk_size: int) -> int:
    """
    POST `data` to `chunk_uri` in sequential chunks.

    The last chunk carries `finish=true`. The first failing chunk raises its
    mapped error and no further chunk is sent.

    Returns:
        Number of chunks sent.
    """
    total = chunk_count(len(data), chunk_size)
    sent = 0
    for index, offset, chunk in iter_chunks(data, chunk_size):
        params: list[tuple[str, str]] = []
        if index == total - 1:
            params.append(("finish", "true"))
        params.extend(
            [
                ("index", str(index)),
                ("offset", str(offset)),
                ("filehash", hashlib.md5(chunk).hexdigest()),
            ]
        )

        response = conn.custom_request(
            "POST",
            chunk_uri,
            params=params,
            data=chunk,
            headers=OCTET_STREAM,
        )
        try:
            conn.check_response(response)
        except ShapirError:
            logger.error("[upload_chunks] chunk failed; index:%s of:%s", index, total)
            raise
        sent += 1

    return sent


def open_download(conn: Connection, item_id: str) -> requests.Response:
    """
    Resolve the download URL of an item and open a streamed response.

    Raises:
        DeserializationError: if the specification has no `DownloadUrl`.
    """
    params = [("redirect", bool_to_string(False))]
    spec = conn.query_json("GET", f"Items({item_id})/Download", params=params)
    download_url = spec.get("DownloadUrl") if isinstance(spec, dict) else None
    if not isinstance(download_url, str) or not download_url:
        raise DeserializationError(
            "DownloadSpecification.DownloadUrl property is missing",
            details={"item_id": item_id},
        )

    response = conn.custom_request("GET", download_url, stream=True)
    conn.check_response(response)
    return response

