"""Exceptions for the Smartcar client library."""

from __future__ import annotations

from typing import Any


class SmartcarError(Exception):
    """Base exception for all Smartcar client errors."""

    def __init__(self, message: str = "", *args: Any) -> None:
        self.message = message
        super().__init__(message, *args)


class ValidationError(SmartcarError, TypeError):
    """Raised when an invalid parameter is provided."""

    def __init__(self, parameter: str, value: Any, reason: str | None = None) -> None:
        self.parameter = parameter
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{parameter}': {value!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class ApiError(SmartcarError):
    """Raised when the API returns an error response."""

    def __init__(
        self,
        message: str = "",
        status_code: int | None = None,
        response_body: str | None = None,
        description: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.description = description
        self.code = code

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class AuthenticationError(ApiError):
    """Raised when the access token is missing, invalid or expired."""

    pass


class AuthorizationError(ApiError):
    """Raised when the token lacks the permission an endpoint requires."""

    pass


class VehicleNotFoundError(ApiError):
    """Raised when the vehicle (or resource) does not exist."""

    pass


class TransportError(SmartcarError):
    """Raised when no response was received from the API."""

    pass


class ConnectionError(TransportError):
    """Raised when a connection to the API cannot be established."""

    pass


class TimeoutError(TransportError):
    """Raised when an API request times out."""

    pass
