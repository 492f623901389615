"""Exception classes for Amplitude export requests.

This module defines a hierarchy of exception classes for handling
the error conditions of a single export download: transport failures,
HTTP error statuses, missing credentials and archive unpacking.
"""

from __future__ import annotations

from typing import Final, Optional

# Human-readable explanations for the statuses the Export API documents
HTTP_ERROR_MAP: Final = {
    400: "Bad request - malformed range or export exceeds the 4GB limit",
    401: "Invalid or missing project API key / secret key",
    403: "Project access denied",
    404: "No data found for the requested range",
    429: "Rate limit exceeded",
    500: "Amplitude internal error",
    502: "Bad gateway at Amplitude",
    503: "Service unavailable",
    504: "Export timed out - try a smaller range",
}


class ExportAPIError(Exception):
    """Error during an Amplitude Export API request.

    Raised when the export fails because of the network, the credentials,
    the requested range, or the remote service. Keeps the raw response
    body when one was received.
    """

    def __init__(self, code: int, message: str, body: Optional[bytes] = None) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or 0 for local errors
            message: Human-readable error message
            body: Optional raw response body for debugging
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.body: Optional[bytes] = body

    @property
    def is_client_error(self) -> bool:
        """True for 400-499 status codes."""
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        """True for 500-599 status codes."""
        return self.code >= 500

    @classmethod
    def from_status(cls, status_code: int, body: Optional[bytes] = None) -> ExportAPIError:
        """Create the matching error for a non-2xx HTTP status.

        Args:
            status_code: HTTP status code
            body: Response body as received

        Returns:
            Appropriate ExportAPIError subclass
        """
        message = HTTP_ERROR_MAP.get(status_code, f"Unexpected HTTP status {status_code}")
        if 400 <= status_code < 500:
            if status_code in (401, 403):
                return AuthenticationError(status_code, message, body)
            elif status_code == 400:
                return BadRangeError(status_code, message, body)
            elif status_code == 404:
                return NoDataError(status_code, message, body)
            elif status_code == 429:
                return RateLimitError(status_code, message, body)
            return ClientError(status_code, message, body)
        elif status_code >= 500:
            return ServerError(status_code, message, body)

        return cls(status_code, message, body)


class NetworkError(ExportAPIError):
    """Raised when a DNS, TLS or connection failure prevents the request."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(0, message)
        self.original_error = original_error


class MissingCredentialsError(ExportAPIError):
    """Raised when a credential environment variable is unset or empty."""

    def __init__(self, variable: str) -> None:
        super().__init__(0, f"{variable} environment variable not set")
        self.variable = variable


class AuthenticationError(ExportAPIError):
    """Raised when Amplitude rejects the key/secret pair."""

    pass


class BadRangeError(ExportAPIError):
    """Raised on 400, usually a malformed or oversized time range."""

    pass


class NoDataError(ExportAPIError):
    """Raised when the range holds no exported data."""

    pass


class RateLimitError(ExportAPIError):
    """Raised when rate limits are exceeded."""

    pass


class ClientError(ExportAPIError):
    """Raised for other 4xx client errors."""

    pass


class ServerError(ExportAPIError):
    """Raised for 5xx server errors."""

    pass


class ExtractError(ExportAPIError):
    """Raised when the downloaded bundle cannot be unpacked."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(0, message)
        self.original_error = original_error
