"""Fluent builder for connections."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from shapir.auth import Authenticator, ConnectionSettings

from .connection import Connection


class ConnectionBuilder:
    """
    Accumulate connection parameters and open a connection.

    Example:
        >>> conn = (Connection.new()
        ...         .subdomain("acme")
        ...         .username("user@acme.com")
        ...         .password("secret")
        ...         .client_id("id")
        ...         .client_secret("client-secret")
        ...         .connect())
    """

    def __init__(self, settings: Optional[ConnectionSettings] = None) -> None:
        self._settings = settings or ConnectionSettings()

    def subdomain(self, value: str) -> ConnectionBuilder:
        return self._set(subdomain=value)

    def username(self, value: str) -> ConnectionBuilder:
        return self._set(username=value)

    def password(self, value: str) -> ConnectionBuilder:
        return self._set(password=value)

    def client_id(self, value: str) -> ConnectionBuilder:
        return self._set(client_id=value)

    def client_secret(self, value: str) -> ConnectionBuilder:
        return self._set(client_secret=value)

    def upload_chunk_size(self, value: int) -> ConnectionBuilder:
        return self._set(upload_chunk_size=value)

    def timeout(self, value: Optional[float]) -> ConnectionBuilder:
        return self._set(timeout=value)

    def settings(self) -> ConnectionSettings:
        """Return the immutable settings accumulated so far."""
        return self._settings

    def connect(self, *, authenticator: Optional[Authenticator] = None) -> Connection:
        """
        Validate the settings and open an authenticated connection.

        Validation happens before any request is sent.
        """
        self._settings.validate()
        return Connection.configured(self._settings).connect(authenticator=authenticator)

    def _set(self, **changes: Any) -> ConnectionBuilder:
        self._settings = replace(self._settings, **changes)
        return self
