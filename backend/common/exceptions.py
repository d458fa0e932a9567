"""
Standardized error handling for API responses.

This module provides the error types shared by the backend services. Errors
carry a user-facing message that is safe to expose, a machine-readable error
code for clients that branch on it, and optionally the internal exception that
caused them (logged, never returned).

Architecture:
    The module uses a two-tier error handling approach:
    1. Internal errors are logged with full details for debugging
    2. User-facing errors contain only safe, generic messages

Example:
    ```python
    from common.exceptions import APIError, HTTP_429_TOO_MANY_REQUESTS

    raise APIError(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        error_code="RATE_LIMIT_EXCEEDED",
    )
    ```
"""

from loguru import logger

# HTTP Status Code Constants
HTTP_200_OK = 200
HTTP_206_PARTIAL_CONTENT = 206
HTTP_400_BAD_REQUEST = 400
HTTP_401_UNAUTHORIZED = 401
HTTP_403_FORBIDDEN = 403
HTTP_404_NOT_FOUND = 404
HTTP_422_UNPROCESSABLE_ENTITY = 422
HTTP_429_TOO_MANY_REQUESTS = 429
HTTP_500_INTERNAL_SERVER_ERROR = 500
HTTP_503_SERVICE_UNAVAILABLE = 503

_DEFAULT_MESSAGES = {
    HTTP_400_BAD_REQUEST: "Invalid request. Please check your input and try again.",
    HTTP_401_UNAUTHORIZED: "Authentication failed. Please check your credentials.",
    HTTP_403_FORBIDDEN: "Access denied. You don't have permission to perform this action.",
    HTTP_404_NOT_FOUND: "Resource not found.",
    HTTP_422_UNPROCESSABLE_ENTITY: "Validation error. Please check your request parameters.",
    HTTP_429_TOO_MANY_REQUESTS: "Rate limit exceeded. Please try again later.",
    HTTP_503_SERVICE_UNAVAILABLE: "Service temporarily unavailable. Please try again later.",
}

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request. Please try again later."


def default_message_for_status(status_code: int) -> str:
    """Return the generic user-facing message for an HTTP status code."""
    return _DEFAULT_MESSAGES.get(status_code, GENERIC_ERROR_MESSAGE)


class APIError(Exception):
    """
    Base exception class for API errors with user-friendly messages.

    This exception class is designed for use in API endpoints and dependencies
    where you need to raise errors that will be converted to HTTP responses by a
    registered exception handler. It separates user-facing messages from
    internal error details for security compliance.

    Attributes:
        message (str): User-friendly error message that can be safely exposed to clients.
        status_code (int): HTTP status code to return (default: 500).
        error_code (str | None): Machine-readable code (e.g. "RATE_LIMIT_EXCEEDED").
        internal_error (Exception | None): The original exception that caused this error,
            stored for logging purposes but not exposed to clients.

    Note:
        - The message should never contain sensitive information
        - Internal errors are logged but not included in API responses
    """

    def __init__(
        self,
        message: str | None = None,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str | None = None,
        internal_error: Exception | None = None,
    ) -> None:
        """
        Initialize an APIError instance.

        Args:
            message: User-friendly error message safe to expose to API clients.
                If None, a generic message appropriate for the status code is used.
            status_code: HTTP status code to return. Defaults to 500.
            error_code: Optional machine-readable error code.
            internal_error: Optional original exception that caused this error. This is
                logged for debugging but never exposed to clients.
        """
        self.message = message or default_message_for_status(status_code)
        self.status_code = status_code
        self.error_code = error_code
        self.internal_error = internal_error
        if internal_error:
            logger.opt(exception=internal_error).error(
                f"API error ({status_code}): {internal_error}"
            )
        super().__init__(self.message)
