"""Public error exports for shapir."""

from __future__ import annotations

from .exceptions import (
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
    error_info_from_response,
    map_http_error,
    parse_service_error,
)

__all__ = [
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
    "parse_service_error",
    "error_info_from_response",
    "map_http_error",
]
