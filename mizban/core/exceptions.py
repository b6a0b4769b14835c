"""
Custom Exceptions.

Every failure the CLI can report is a MizbanError subclass. Commands catch
MizbanError at their boundary and turn it into a message and exit code.
"""

from typing import Any


class MizbanError(Exception):
    """Base exception for all CLI errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class BuildError(MizbanError):
    """Raised when a request cannot be constructed (bad URL or body)."""

    def __init__(self, message: str = "Could not build request") -> None:
        super().__init__(message, code="REQ_BUILD_FAILED")


class TransportError(MizbanError):
    """Raised when the server cannot be reached or the call times out."""

    def __init__(self, message: str = "Network error") -> None:
        super().__init__(message, code="NET_TRANSPORT_ERROR")


class UnauthorizedError(MizbanError):
    """Raised on HTTP 401."""

    def __init__(
        self, message: str = "unauthorized: please login again using 'mizban login'",
    ) -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class RateLimitedError(MizbanError):
    """Raised on HTTP 429."""

    def __init__(self, message: str = "rate limited: please wait and try again") -> None:
        super().__init__(message, code="RATE_LIMITED")


class MalformedResponseError(MizbanError):
    """Raised when the response body is not a valid envelope."""

    def __init__(self, message: str = "Malformed response") -> None:
        super().__init__(message, code="RESP_MALFORMED")


class APIError(MizbanError):
    """
    Raised when the API answers with success=false.

    The message is the server's own message, unchanged. Field-level
    validation reasons, when the server sends them, are kept in `errors`.
    """

    def __init__(
        self,
        message: str,
        errors: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        self.errors = errors or {}
        self.status_code = status_code
        super().__init__(message, code="API_ERROR")


class DecodeError(MizbanError):
    """Raised when envelope data does not match the requested shape."""

    def __init__(self, message: str = "Could not decode response data") -> None:
        super().__init__(message, code="RESP_DECODE_ERROR")


class ConfigError(MizbanError):
    """Raised when the configuration file cannot be written."""

    def __init__(self, message: str = "Configuration error") -> None:
        super().__init__(message, code="CFG_ERROR")


class InvalidInputError(MizbanError):
    """Raised when command input is rejected before any request is sent."""

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message, code="VAL_INVALID_INPUT")
