"""Exception hierarchy for NovelAI Hub.

Every failure the client can report to a page is a ``NovelHubError``:

- ValidationError: input rejected before any request is sent
- RequestError and its status subclasses: the API answered with an error
- NetworkError: the API could not be reached
- InvalidResponseError: the API answered 2xx with an unexpected body
"""

from __future__ import annotations

from typing import Any


class NovelHubError(Exception):
    """Base exception for client errors.

    Args:
        message: Human-readable error message, safe to show to users
        code: Machine-readable error code for programmatic handling
        details: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ValidationError(NovelHubError):
    """Raised when client-side validation fails.

    ``field`` names the offending form field when there is one.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details={"field": field})
        self.field = field


class NetworkError(NovelHubError):
    """Connectivity lost or request timed out."""

    def __init__(self, message: str = "Network error - Unable to connect to server") -> None:
        super().__init__(message, code="NETWORK_ERROR")


class InvalidResponseError(NovelHubError):
    """The API responded successfully but not in the documented shape."""

    def __init__(self, message: str = "Invalid response format") -> None:
        super().__init__(message, code="INVALID_RESPONSE")


class RetryExhaustedError(NovelHubError):
    """Every attempt of a bounded retry failed."""

    def __init__(self, attempts: int, last_error: Exception | None = None) -> None:
        super().__init__(
            f"Gave up after {attempts} attempts",
            code="RETRY_EXHAUSTED",
            details={"attempts": attempts},
        )
        self.attempts = attempts
        self.last_error = last_error


# =============================================================================
# Request errors
# =============================================================================


class RequestError(NovelHubError):
    """The API rejected a request."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(
            message,
            code=f"HTTP_{status_code}",
            details={"status_code": status_code},
        )
        self.status_code = status_code


class BadRequestError(RequestError):
    """400 - invalid request."""

    def __init__(self, message: str = "Invalid request") -> None:
        super().__init__(message, status_code=400)


class UnauthorizedError(RequestError):
    """401 - authentication required or failed."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, status_code=401)


class ForbiddenError(RequestError):
    """403 - access denied."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message, status_code=403)


class NotFoundError(RequestError):
    """404 - resource not found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class RateLimitError(RequestError):
    """429 - rate limited."""

    def __init__(
        self,
        message: str = "Too many requests - please try again later",
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after
        if retry_after is not None:
            self.details["retry_after"] = retry_after


class ServerError(RequestError):
    """500 - server error."""

    def __init__(self, message: str = "Server error - please try again later") -> None:
        super().__init__(message, status_code=500)


GENERIC_ERROR_MESSAGE = "An error occurred"

DEFAULT_STATUS_MESSAGES: dict[int, str] = {
    400: "Invalid request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    429: "Too many requests - please try again later",
    500: "Server error - please try again later",
}

_STATUS_ERRORS: dict[int, type[RequestError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitError,
    500: ServerError,
}


def error_for_status(
    status_code: int,
    message: str | None = None,
    overrides: dict[int, str] | None = None,
    retry_after: int | None = None,
) -> RequestError:
    """Build the typed error for an HTTP error status.

    Args:
        status_code: HTTP status returned by the API
        message: Message supplied by the server, preferred when present
        overrides: Per-service default messages, keyed by status
        retry_after: Seconds from a ``Retry-After`` header (429 only)

    Returns:
        RequestError subclass matching the status
    """
    defaults = {**DEFAULT_STATUS_MESSAGES, **(overrides or {})}
    text = message or defaults.get(status_code, GENERIC_ERROR_MESSAGE)

    error_class = _STATUS_ERRORS.get(status_code)
    if error_class is None:
        return RequestError(text, status_code=status_code)
    if error_class is RateLimitError:
        return RateLimitError(text, retry_after=retry_after)
    return error_class(text)
