"""Authenticated ShareFile connection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

import requests

from shapir.auth import AuthData, Authenticator, ConnectionSettings
from shapir.errors import (
    DeserializationError,
    NetworkError,
    UnauthorizedError,
    ValidationError,
    error_info_from_response,
    map_http_error,
    parse_service_error,
)

if TYPE_CHECKING:
    from shapir.api import Items, Shares, Users

    from .builder import ConnectionBuilder

logger = logging.getLogger(__name__)

QueryPairs = Sequence[tuple[str, str]]


class Connection:
    """
    Authenticated session against one ShareFile account.

    The connection owns a single `requests.Session` reused by every call and
    hands out entity clients (`items()`, `shares()`, `users()`). Entity clients
    are only available once `connect()` succeeded. A connection is meant for
    sequential use by one owner.
    """

    def __init__(
        self,
        settings: ConnectionSettings,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._auth: Optional[AuthData] = None

    @staticmethod
    def new() -> ConnectionBuilder:
        """Start building a connection."""
        from .builder import ConnectionBuilder

        return ConnectionBuilder()

    @classmethod
    def configured(cls, settings: ConnectionSettings) -> Connection:
        """Create a connection that is not authenticated yet."""
        return cls(settings)

    @classmethod
    def from_session(
        cls,
        session: Any,
        auth: AuthData,
        settings: Optional[ConnectionSettings] = None,
    ) -> Connection:
        """Create an authenticated connection from a pre-built session (useful for tests)."""
        obj = cls(settings or ConnectionSettings(subdomain=auth.subdomain), session=session)
        obj._auth = auth
        return obj

    # ----------------------------
    # Session
    # ----------------------------
    @property
    def settings(self) -> ConnectionSettings:
        return self._settings

    @property
    def auth(self) -> Optional[AuthData]:
        return self._auth

    @property
    def is_authenticated(self) -> bool:
        return self._auth is not None

    @property
    def endpoint(self) -> str:
        return self._require_auth().endpoint

    def connect(self, *, authenticator: Optional[Authenticator] = None) -> Connection:
        """
        Authenticate (or re-authenticate after token expiry).

        Raises:
            ConfigurationError: if required settings are missing (no request is sent).
            AuthenticationError, ServerError, NetworkError, DeserializationError:
                on token failure.
        """
        self._settings.validate()
        authenticator = authenticator or Authenticator(self._settings)
        self._auth = authenticator.authenticate()
        return self

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ----------------------------
    # Entities
    # ----------------------------
    def items(self) -> Items:
        from shapir.api import Items

        self._require_auth()
        return Items(self)

    def shares(self) -> Shares:
        from shapir.api import Shares

        self._require_auth()
        return Shares(self)

    def users(self) -> Users:
        from shapir.api import Users

        self._require_auth()
        return Users(self)

    # ----------------------------
    # Requests
    # ----------------------------
    def query(
        self,
        method: str,
        uri: str,
        *,
        params: Optional[QueryPairs] = None,
        json: Any = None,
        data: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        stream: bool = False,
    ) -> requests.Response:
        """Send an authorized request to `uri`, relative to the API endpoint."""
        auth = self._require_auth()
        all_headers = {
            "Authorization": f"Bearer {auth.access_token}",
            "Accept": "application/json",
        }
        if headers:
            all_headers.update(headers)

        return self._send(
            method,
            f"{auth.endpoint}{uri}",
            params=params,
            json=json,
            data=data,
            headers=all_headers,
            stream=stream,
        )

    def query_json(
        self,
        method: str,
        uri: str,
        *,
        params: Optional[QueryPairs] = None,
        json: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Send an authorized request and return the decoded JSON body.

        Returns None for empty bodies (e.g. 204 No Content).

        Raises:
            ShapirError subclass mapped from the HTTP status, DeserializationError
            for non-JSON bodies, ValidationError for vendor errors in a 2xx body.
        """
        response = self.query(method, uri, params=params, json=json, headers=headers)
        self.check_response(response)
        return decode_json(response)

    def custom_request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[QueryPairs] = None,
        data: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        stream: bool = False,
    ) -> requests.Response:
        """Send an unauthenticated request to an absolute URL issued by the API."""
        self._require_auth()
        return self._send(
            method,
            url,
            params=params,
            data=data,
            headers=dict(headers) if headers else None,
            stream=stream,
        )

    @staticmethod
    def check_response(response: Any) -> None:
        """Raise the mapped shapir error unless the response status is 2xx."""
        status_code = getattr(response, "status_code", 0)
        if isinstance(status_code, int) and 200 <= status_code < 300:
            return
        info = error_info_from_response(response)
        logger.warning(
            "[check_response] request failed; status:%s code:%s",
            info.status_code,
            info.code,
        )
        raise map_http_error(info)

    # ----------------------------
    # Internals
    # ----------------------------
    def _require_auth(self) -> AuthData:
        if self._auth is None:
            raise UnauthorizedError("Not authenticated. Call connect() first.")
        return self._auth

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("[_send] %s %s", method, url)
        try:
            return self._session.request(method, url, timeout=self._settings.timeout, **kwargs)
        except requests.exceptions.RequestException as exc:
            logger.warning("[_send] network error; %s %s error:%s", method, url, exc)
            raise NetworkError(
                "Network error",
                details={"method": method, "url": url},
                cause=exc,
            ) from exc


def decode_json(response: Any) -> Any:
    """Decode a successful response body, checking for an embedded vendor error."""
    content = getattr(response, "content", b"")
    if not content:
        return None

    try:
        payload = response.json()
    except ValueError as exc:
        raise DeserializationError(
            "Response body is not valid JSON",
            details={"status_code": getattr(response, "status_code", None)},
            cause=exc,
        ) from exc

    service_error = parse_service_error(payload)
    if service_error is not None:
        raise ValidationError(
            service_error.message,
            details={
                "status_code": getattr(response, "status_code", None),
                "code": service_error.code,
            },
        )
    return payload
