"""Exception hierarchy and HTTP error mapping for shapir."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional


class ShapirError(Exception):
    """
    Base exception for shapir.

    Attributes:
        details: Optional structured information (e.g., HTTP status, vendor code).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status code of the failed response, if any."""
        value = self.details.get("status_code")
        return value if isinstance(value, int) else None


class ConfigurationError(ShapirError):
    """Raised when connection settings are incomplete or invalid."""


class InvalidArgumentError(ShapirError):
    """Raised when a caller-supplied argument is invalid."""


class AuthenticationError(ShapirError):
    """Raised when the OAuth token endpoint rejects the credentials."""


class UnauthorizedError(ShapirError):
    """Raised when a request is not authorized (HTTP 401/403) or no session exists."""


class NotFoundError(ShapirError):
    """Raised when a ShareFile resource is not found (HTTP 404)."""


class ValidationError(ShapirError):
    """Raised when the API rejects a request (HTTP 4xx other than 401/403/404)."""


class ServerError(ShapirError):
    """Raised for HTTP 5xx responses."""


class NetworkError(ShapirError):
    """Raised when network/timeout issues prevent the request."""


class DeserializationError(ShapirError):
    """Raised when a response body does not have the expected shape."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to shapir exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    code: str | None = None
    details: dict[str, Any] | None = None


@dataclass(frozen=True)
class ServiceError:
    """Error code and message returned in a ShareFile response body."""

    message: str
    code: str | None = None

    def __str__(self) -> str:
        if self.code:
            return f"{self.code}: {self.message}"
        return self.message


def parse_service_error(payload: Any) -> Optional[ServiceError]:
    """
    Extract the vendor error from a decoded JSON body.

    ShareFile reports errors as::

        {"code": "NotFound", "message": {"lang": "en-US", "value": "..."}}

    Returns None when the payload carries no error code.
    """
    if not isinstance(payload, dict):
        return None

    code = payload.get("code")
    if not isinstance(code, str) or not code:
        return None

    message = payload.get("message")
    if isinstance(message, dict):
        message = message.get("value")
    if not isinstance(message, str) or not message:
        message = code

    return ServiceError(message=message, code=code)


def error_info_from_response(response: Any) -> HttpErrorInfo:
    """
    Build HttpErrorInfo from a failed HTTP response.

    Bodies of responses below 500 are parsed for the vendor message; server
    errors carry only their status and reason.
    """
    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int):
        status_code = 0
    reason = getattr(response, "reason", None)
    reason = reason if isinstance(reason, str) else None

    if status_code >= 500:
        return HttpErrorInfo(status_code=status_code, reason=reason)

    service_error = None
    content = getattr(response, "content", None)
    if isinstance(content, (bytes, bytearray)) and content:
        try:
            service_error = parse_service_error(json.loads(content.decode("utf-8")))
        except ValueError:
            service_error = None

    if service_error is None:
        return HttpErrorInfo(status_code=status_code, reason=reason)

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason,
        message=service_error.message,
        code=service_error.code,
    )


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> ShapirError:
    """
    Map an HTTP error to a shapir exception.

    Policy:
        - 401/403 -> UnauthorizedError
        - 404 -> NotFoundError
        - 5xx -> ServerError
        - other non-success codes -> ValidationError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.code is not None:
        details["code"] = info.code
    if info.details:
        details.update(info.details)

    if info.message:
        message = info.message
    elif info.reason:
        message = f"HTTP error {info.status_code}: {info.reason}"
    else:
        message = f"HTTP error {info.status_code}"

    if info.status_code in (401, 403):
        return UnauthorizedError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code >= 500:
        return ServerError(message, details=details, cause=cause)

    return ValidationError(message, details=details, cause=cause)
