"""Shares entity."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shapir.models import Share, ShareConfig, share_from_json
from shapir.odata import bool_to_string

if TYPE_CHECKING:
    from shapir.connection import Connection

logger = logging.getLogger(__name__)


class Shares:
    """Client for the Shares entity."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def create(self, config: ShareConfig, notify: bool = False) -> Share:
        """
        Create a share from `config`.

        Args:
            config: Share parameters.
            notify: Ask ShareFile to e-mail the recipients.

        Returns:
            The created share, with its assigned id.
        """
        data = self._conn.query_json(
            "POST",
            "Shares",
            params=[("notify", bool_to_string(notify))],
            json=config.to_json(),
        )
        share = share_from_json(data)
        logger.info("[create] created share; id:%s kind:%s", share.id, share.kind.value)
        return share
