"""Users entity."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shapir.models import UserId

if TYPE_CHECKING:
    from shapir.connection import Connection


class Users:
    """User identifiers for shares and other entities. Performs no requests."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def by_id(self, user_id: str) -> UserId:
        return UserId.by_id(user_id)

    def by_email(self, email: str) -> UserId:
        """Raises InvalidArgumentError for malformed mailboxes."""
        return UserId.by_email(email)
