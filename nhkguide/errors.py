"""Error types raised by the NHK Program Guide client.

Every failure surfaced by the client derives from `NhkError`, so callers can
catch a single base class or branch on the concrete kind:

- `TransportError`: the request never produced an HTTP response.
- `UpstreamApiError`: the API answered with a non-200 status.
- `DecodeError`: a response body could not be decoded into the expected shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nhkguide.models import ApiError

__all__ = ["DecodeError", "NhkError", "TransportError", "UpstreamApiError"]

API_ERROR_PREFIX = "An error occurred during calling NHK API."


class NhkError(RuntimeError):
    """Base class for all client errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = str(message)

    def __str__(self) -> str:
        return self.message


class TransportError(NhkError):
    """Raised when the HTTP request fails before a response is received."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class UpstreamApiError(NhkError):
    """Raised when the API returns a non-200 status code."""

    def __init__(self, status_code: int, api_error: "ApiError | None" = None) -> None:
        self.status_code = int(status_code)
        self.api_error = api_error
        message = f"{API_ERROR_PREFIX} [status: {self.status_code}]"
        if api_error is not None:
            message += f"[code: {api_error.code}][message: {api_error.message}]"
        super().__init__(message)


class DecodeError(NhkError):
    """Raised when a response body is not valid JSON of the expected shape."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = int(status_code) if status_code is not None else None

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status={self.status_code})"
