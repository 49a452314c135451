"""shapir public API.

Unofficial client for the ShareFile REST API. Open a `Connection` and use its
entity clients:

    >>> conn = (Connection.new()
    ...         .subdomain("acme")
    ...         .username("user@acme.com")
    ...         .password("secret")
    ...         .client_id("id")
    ...         .client_secret("client-secret")
    ...         .connect())
    >>> conn.items().list(Path.home())
"""

from __future__ import annotations

from shapir.api import Items, Shares, Users
from shapir.auth import (
    DEFAULT_CHUNK_SIZE,
    AuthData,
    Authenticator,
    ConnectionSettings,
    settings_from_env,
)
from shapir.connection import Connection, ConnectionBuilder
from shapir.errors import (
    AuthenticationError,
    ConfigurationError,
    DeserializationError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    ServerError,
    ServiceError,
    ShapirError,
    UnauthorizedError,
    ValidationError,
    map_http_error,
)
from shapir.models import (
    AccessRight,
    Item,
    ItemKind,
    Path,
    PathKind,
    Share,
    ShareConfig,
    ShareKind,
    UserId,
    UserIdKind,
)
from shapir.odata import Parameters

__all__ = [
    # Connection
    "Connection",
    "ConnectionBuilder",
    "ConnectionSettings",
    "DEFAULT_CHUNK_SIZE",
    "settings_from_env",
    # Auth
    "AuthData",
    "Authenticator",
    # Entities
    "Items",
    "Shares",
    "Users",
    # Models
    "Path",
    "PathKind",
    "Item",
    "ItemKind",
    "Share",
    "ShareConfig",
    "ShareKind",
    "AccessRight",
    "UserId",
    "UserIdKind",
    "Parameters",
    # Errors
    "ShapirError",
    "ConfigurationError",
    "InvalidArgumentError",
    "AuthenticationError",
    "UnauthorizedError",
    "NotFoundError",
    "ValidationError",
    "ServerError",
    "NetworkError",
    "DeserializationError",
    "HttpErrorInfo",
    "ServiceError",
    "map_http_error",
]
