"""Connection settings for shapir."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from shapir.errors import ConfigurationError

DEFAULT_CHUNK_SIZE: int = 16 * 1024

REQUIRED_FIELDS: tuple[str, ...] = (
    "subdomain",
    "username",
    "password",
    "client_id",
    "client_secret",
)

_FIELD_LABELS: dict[str, str] = {
    "subdomain": "Subdomain",
    "username": "Username",
    "password": "Password",
    "client_id": "Client ID",
    "client_secret": "Client Secret",
}


@dataclass(slots=True, frozen=True)
class ConnectionSettings:
    """
    Parameters needed to open a ShareFile connection.

    Every credential field is optional until `validate()` is called, so a
    partially filled value can travel through the builder.
    """

    subdomain: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    upload_chunk_size: int = DEFAULT_CHUNK_SIZE
    timeout: Optional[float] = None

    def validate(self) -> None:
        """Raise ConfigurationError unless the settings can be used to connect."""
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"{_FIELD_LABELS[name]} is required",
                    details={"field": name},
                )

        if not isinstance(self.upload_chunk_size, int) or self.upload_chunk_size <= 0:
            raise ConfigurationError(
                "upload_chunk_size must be a positive integer",
                details={"upload_chunk_size": self.upload_chunk_size},
            )

        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(
                "timeout must be positive",
                details={"timeout": self.timeout},
            )

    @property
    def token_url(self) -> str:
        """OAuth token endpoint of the account."""
        return f"https://{self.subdomain}.sharefile.com/oauth/token"


def settings_from_env(
    prefix: str = "SHAPIR_",
    environ: Optional[Mapping[str, str]] = None,
) -> ConnectionSettings:
    """
    Construct ConnectionSettings from environment variables.

    Recognized variables (with the default prefix):
        SHAPIR_SUBDOMAIN, SHAPIR_USERNAME, SHAPIR_PASSWORD,
        SHAPIR_CLIENT_ID, SHAPIR_CLIENT_SECRET: credentials.
        SHAPIR_UPLOAD_CHUNK_SIZE: upload chunk size in bytes (default: 16384).
        SHAPIR_TIMEOUT: HTTP timeout in seconds (default: none).

    Missing credentials are left as None; call `validate()` (or connect) to
    enforce them.
    """
    env = os.environ if environ is None else environ

    def _get(name: str) -> Optional[str]:
        value = env.get(f"{prefix}{name}", "").strip()
        return value or None

    chunk_raw = _get("UPLOAD_CHUNK_SIZE")
    timeout_raw = _get("TIMEOUT")
    try:
        chunk_size = int(chunk_raw) if chunk_raw else DEFAULT_CHUNK_SIZE
        timeout = float(timeout_raw) if timeout_raw else None
    except ValueError as exc:
        raise ConfigurationError(
            "Invalid numeric setting in environment",
            details={"upload_chunk_size": chunk_raw, "timeout": timeout_raw},
            cause=exc,
        ) from exc

    return ConnectionSettings(
        subdomain=_get("SUBDOMAIN"),
        username=_get("USERNAME"),
        password=_get("PASSWORD"),
        client_id=_get("CLIENT_ID"),
        client_secret=_get("CLIENT_SECRET"),
        upload_chunk_size=chunk_size,
        timeout=timeout,
    )
