"""Custom exception classes for Slite API client."""

from typing import Any

from sop_assistant.ai.rag.exceptions import (
    DocumentStoreError,
    DocumentStoreTransportError,
)


class SliteAPIError(DocumentStoreError):
    """Base exception for all Slite API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SliteAPIError.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
            response_data: Response data from the API
        """
        super().__init__(message, status_code=status_code)
        self.response_data = response_data

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code:
            return f"Slite API Error ({self.status_code}): {self.message}"
        return f"Slite API Error: {self.message}"


class SliteAuthenticationError(SliteAPIError):
    """Exception raised for authentication errors (401)."""

    def __init__(
        self,
        message: str = "Invalid API key or authentication failed",
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, status_code=401, response_data=response_data)


class SliteBadRequestError(SliteAPIError):
    """Exception raised for bad request errors (400)."""

    def __init__(
        self,
        message: str = "Bad request - malformed or missing required parameters",
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, status_code=400, response_data=response_data)


class SliteNotFoundError(SliteAPIError):
    """Exception raised when a note does not exist (404)."""

    def __init__(
        self,
        message: str = "Resource not found",
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, status_code=404, response_data=response_data)


class SliteRateLimitError(SliteAPIError):
    """Exception raised for rate limit errors (429)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        response_data: dict[str, Any] | None = None,
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message=message, status_code=429, response_data=response_data)
        self.retry_after = retry_after


class SliteServerError(SliteAPIError):
    """Exception raised for server errors (5xx)."""

    def __init__(
        self,
        message: str = "Internal server error occurred",
        status_code: int = 500,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, status_code=status_code, response_data=response_data
        )


class SliteConnectionError(SliteAPIError, DocumentStoreTransportError):
    """Exception raised for connection errors."""

    def __init__(
        self,
        message: str = "Failed to connect to Slite API",
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message=message)
        self.original_error = original_error


class SliteTimeoutError(SliteConnectionError):
    """Exception raised for request timeout errors."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout_duration: float | None = None,
    ) -> None:
        super().__init__(message=message)
        self.timeout_duration = timeout_duration
