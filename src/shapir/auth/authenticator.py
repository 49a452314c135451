"""OAuth2 password-grant authentication against ShareFile."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

import requests
from oauthlib.oauth2 import LegacyApplicationClient, MissingTokenError, OAuth2Error
from requests_oauthlib import OAuth2Session

from shapir.errors import (
    AuthenticationError,
    DeserializationError,
    NetworkError,
    error_info_from_response,
    map_http_error,
)
from shapir.util.time import now_utc

from .settings import ConnectionSettings

logger = logging.getLogger(__name__)

API_HOST_TEMPLATE = "https://{subdomain}.sf-api.com/sf/v3/"


@dataclass(slots=True, frozen=True)
class AuthData:
    """Result of a successful token exchange."""

    subdomain: str
    access_token: str
    token_type: str = "bearer"
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    obtained_at: Optional[datetime] = None

    @property
    def endpoint(self) -> str:
        """Base URL of the account's API host."""
        return API_HOST_TEMPLATE.format(subdomain=self.subdomain)

    @property
    def expires_at(self) -> Optional[datetime]:
        if self.expires_in is None or self.obtained_at is None:
            return None
        return self.obtained_at + timedelta(seconds=self.expires_in)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Return True once the access token lifetime has elapsed."""
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return (now or now_utc()) >= expires_at


def auth_data_from_token(
    token: Mapping[str, Any],
    *,
    obtained_at: Optional[datetime] = None,
) -> AuthData:
    """
    Build AuthData from a decoded token response.

    Raises:
        DeserializationError: if required properties are missing.
    """
    for key in ("access_token", "subdomain"):
        value = token.get(key)
        if not isinstance(value, str) or not value:
            raise DeserializationError(
                f"Auth {key} is missing",
                details={"field": key},
            )

    expires_in = token.get("expires_in")
    try:
        expires_in = int(expires_in) if expires_in is not None else None
    except (TypeError, ValueError):
        expires_in = None

    refresh_token = token.get("refresh_token")
    token_type = token.get("token_type")
    return AuthData(
        subdomain=str(token["subdomain"]),
        access_token=str(token["access_token"]),
        token_type=token_type if isinstance(token_type, str) else "bearer",
        refresh_token=refresh_token if isinstance(refresh_token, str) else None,
        expires_in=expires_in,
        obtained_at=obtained_at or now_utc(),
    )


class Authenticator:
    """
    Exchange account credentials for an access token and the API host.

    Without an injected `oauth_session`, each `authenticate()` call opens its
    own OAuth2 session and closes it once the token is fetched.
    """

    def __init__(
        self,
        settings: ConnectionSettings,
        *,
        oauth_session: Optional[OAuth2Session] = None,
    ) -> None:
        settings.validate()
        self._settings = settings
        self._oauth = oauth_session
        self._status = _StatusRecorder()

    def authenticate(self) -> AuthData:
        """
        Run the password grant once.

        Returns:
            AuthData for the authenticated account.

        Raises:
            AuthenticationError: if the credentials are rejected.
            ServerError: if the token endpoint answers with status >= 500.
            NetworkError: if the token endpoint cannot be reached.
            DeserializationError: if the token response has an unexpected shape.
        """
        if self._oauth is not None:
            return self._fetch(self._oauth)
        client = LegacyApplicationClient(client_id=self._settings.client_id)
        with OAuth2Session(client=client) as oauth:
            return self._fetch(oauth)

    # ----------------------------
    # Internals
    # ----------------------------
    def _fetch(self, oauth: OAuth2Session) -> AuthData:
        settings = self._settings
        token_url = settings.token_url
        logger.debug("[authenticate] requesting token; url:%s user:%s", token_url, settings.username)

        status = self._status
        status.status_code = None
        oauth.register_compliance_hook("access_token_response", status)
        oauth.register_compliance_hook("access_token_response", check_token_response)

        try:
            token = oauth.fetch_token(
                token_url,
                username=settings.username,
                password=settings.password,
                client_id=settings.client_id,
                client_secret=settings.client_secret,
                include_client_id=True,
                timeout=settings.timeout,
            )
        except MissingTokenError as exc:
            logger.error("[authenticate] token response has no access token; url:%s", token_url)
            raise DeserializationError(
                "Auth access_token is missing",
                details={"token_url": token_url, "status_code": status.status_code},
                cause=exc,
            ) from exc
        except OAuth2Error as exc:
            logger.error("[authenticate] credentials rejected; error:%s", exc.error)
            raise AuthenticationError(
                exc.description or "Authentication failed",
                details={
                    "token_url": token_url,
                    "error": exc.error,
                    "status_code": exc.status_code or status.status_code,
                },
                cause=exc,
            ) from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("[authenticate] network error; url:%s error:%s", token_url, exc)
            raise NetworkError(
                "Authentication request failed",
                details={"token_url": token_url},
                cause=exc,
            ) from exc

        auth = auth_data_from_token(token)
        logger.info("[authenticate] authenticated; subdomain:%s", auth.subdomain)
        return auth


class _StatusRecorder:
    """Compliance hook keeping the status code of the token response."""

    def __init__(self) -> None:
        self.status_code: Optional[int] = None

    def __call__(self, response: Any) -> Any:
        status_code = getattr(response, "status_code", None)
        self.status_code = status_code if isinstance(status_code, int) else None
        return response


def check_token_response(response: Any) -> Any:
    """
    Compliance hook mapping failed token responses that carry no OAuth error.

    Responses with status >= 500 raise the mapped ServerError. 401/403 without
    an OAuth `error` field raise AuthenticationError, other such 4xx the mapped
    error. Everything else is left to oauthlib.
    """
    status_code = getattr(response, "status_code", 0)
    if not isinstance(status_code, int) or status_code < 400:
        return response

    info = error_info_from_response(response)
    if status_code >= 500:
        logger.error("[check_token_response] token endpoint failed; status:%s", status_code)
        raise map_http_error(info)
    if _has_oauth_error(response):
        return response

    logger.error("[check_token_response] token request failed; status:%s", status_code)
    if status_code in (401, 403):
        raise AuthenticationError(
            info.message or f"Authentication failed: HTTP {status_code}",
            details={"status_code": status_code, "reason": info.reason},
        )
    raise map_http_error(info)


def _has_oauth_error(response: Any) -> bool:
    content = getattr(response, "content", None)
    if not isinstance(content, (bytes, bytearray)) or not content:
        return False
    try:
        payload = json.loads(content.decode("utf-8"))
    except ValueError:
        return False
    return isinstance(payload, dict) and isinstance(payload.get("error"), str)
