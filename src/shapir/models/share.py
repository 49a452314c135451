"""Share models: share kinds, share configuration and created shares."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from shapir.errors import DeserializationError, InvalidArgumentError
from shapir.util.time import parse_api_datetime, to_api_date

from .user_id import UserId


class ShareKind(str, Enum):
    """`Send` shares deliver items to users; `Request` shares collect uploads."""

    SEND = "Send"
    REQUEST = "Request"

    @property
    def is_send(self) -> bool:
        return self is ShareKind.SEND

    @property
    def is_request(self) -> bool:
        return self is ShareKind.REQUEST


class AccessRight(str, Enum):
    """
    Access right of a share.

    The API does not document other values; every share is treated as full
    control.
    """

    FULL_CONTROL = "FullControl"

    @classmethod
    def from_json(cls, _value: Any) -> AccessRight:
        return cls.FULL_CONTROL


@dataclass(slots=True)
class ShareConfig:
    """Parameters of a share to be created."""

    kind: ShareKind
    title: Optional[str] = None
    items: list[str] = field(default_factory=list)
    recipients: list[UserId] = field(default_factory=list)
    expiration_date: Optional[date] = None
    require_login: bool = False
    require_user_info: bool = False
    max_downloads: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ShareKind):
            raise InvalidArgumentError("ShareConfig.kind must be a ShareKind")
        if self.max_downloads is not None and self.max_downloads < 0:
            raise InvalidArgumentError(
                "ShareConfig.max_downloads must not be negative",
                details={"max_downloads": self.max_downloads},
            )

    def to_json(self) -> dict[str, Any]:
        """Request body for share creation."""
        body: dict[str, Any] = {
            "ShareType": self.kind.value,
            "RequireLogin": self.require_login,
            "RequireUserInfo": self.require_user_info,
            "UsesStreamIDs": False,
        }
        if self.title is not None:
            body["Title"] = self.title
        if self.items:
            body["Items"] = [{"Id": item_id} for item_id in self.items]
        if self.recipients:
            body["Recipients"] = [{"User": user.to_json()} for user in self.recipients]
        if self.expiration_date is not None:
            body["ExpirationDate"] = to_api_date(self.expiration_date)
        if self.max_downloads is not None:
            body["MaxDownloads"] = self.max_downloads
        return body


@dataclass(slots=True)
class Share:
    """Details of a share as returned by the API."""

    id: str
    kind: ShareKind
    access_right: AccessRight = AccessRight.FULL_CONTROL

    alias_id: Optional[str] = None
    title: Optional[str] = None
    uri: Optional[str] = None
    sent_message_title: Optional[str] = None
    signature: Optional[str] = None

    creation_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    track_until_date: Optional[datetime] = None

    max_downloads: Optional[int] = None
    total_downloads: int = 0

    is_archived: bool = False
    is_consumed: bool = False
    is_read: bool = False
    is_view_only: bool = False
    require_login: bool = False
    require_user_info: bool = False
    has_sent_message: bool = False
    uses_stream_ids: bool = False


def share_from_json(data: Any) -> Share:
    """
    Build a Share from a decoded JSON object.

    Raises:
        DeserializationError: if `Id` or `ShareType` is missing or invalid.
    """
    if not isinstance(data, dict):
        raise DeserializationError("Share can be constructed from JSON object only")

    share_id = data.get("Id")
    if not isinstance(share_id, str) or not share_id:
        raise DeserializationError("Share.Id property is missing")

    share_type = data.get("ShareType")
    try:
        kind = ShareKind(share_type)
    except ValueError as exc:
        raise DeserializationError(
            f"Share.ShareType property is invalid: {share_type!r}",
            details={"id": share_id},
            cause=exc,
        ) from exc

    max_downloads = data.get("MaxDownloads")
    total_downloads = data.get("TotalDownloads")
    return Share(
        id=share_id,
        kind=kind,
        access_right=AccessRight.from_json(data.get("ShareAccessRight")),
        alias_id=_str_or_none(data.get("AliasID")),
        title=_str_or_none(data.get("Title")),
        uri=_str_or_none(data.get("Uri")),
        sent_message_title=_str_or_none(data.get("SentMessageTitle")),
        signature=_str_or_none(data.get("Signature")),
        creation_date=_date_or_none(data, "CreationDate"),
        expiration_date=_date_or_none(data, "ExpirationDate"),
        track_until_date=_date_or_none(data, "TrackUntilDate"),
        max_downloads=max_downloads if isinstance(max_downloads, int) else None,
        total_downloads=total_downloads if isinstance(total_downloads, int) else 0,
        is_archived=bool(data.get("IsArchived", False)),
        is_consumed=bool(data.get("IsConsumed", False)),
        is_read=bool(data.get("IsRead", False)),
        is_view_only=bool(data.get("IsViewOnly", False)),
        require_login=bool(data.get("RequireLogin", False)),
        require_user_info=bool(data.get("RequireUserInfo", False)),
        has_sent_message=bool(data.get("HasSentMessage", False)),
        uses_stream_ids=bool(data.get("UsesStreamIDs", False)),
    )


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _date_or_none(data: dict[str, Any], key: str) -> Optional[datetime]:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    try:
        return parse_api_datetime(value)
    except ValueError as exc:
        raise DeserializationError(
            f"Share.{key} property is invalid",
            details={"value": value},
            cause=exc,
        ) from exc
