"""Public auth exports for shapir."""

from __future__ import annotations

from .authenticator import AuthData, Authenticator, auth_data_from_token
from .settings import DEFAULT_CHUNK_SIZE, ConnectionSettings, settings_from_env

__all__ = [
    "AuthData",
    "Authenticator",
    "auth_data_from_token",
    "ConnectionSettings",
    "DEFAULT_CHUNK_SIZE",
    "settings_from_env",
]
