"""
Error Handling Module

Defines domain exceptions and error categories for the registry.
Domain exceptions are pure and have no external dependencies.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    INVALID_REQUEST = "invalid_request"
    FILE_TOO_LARGE = "file_too_large"
    FILE_NOT_FOUND = "file_not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    SYSTEM_ERROR = "system_error"


# Fallback messages used when no technical message is supplied
ERROR_MESSAGES: Dict[ErrorCategory, str] = {
    ErrorCategory.INVALID_REQUEST: "The request is missing required information or contains invalid data.",
    ErrorCategory.FILE_TOO_LARGE: "The uploaded file exceeds the maximum allowed size.",
    ErrorCategory.FILE_NOT_FOUND: "file not found.",
    ErrorCategory.METHOD_NOT_ALLOWED: "Method Not Allowed.",
    ErrorCategory.SYSTEM_ERROR: "An unexpected error occurred while processing your request.",
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class EntryNotFoundError(DomainError):
    """
    Raised when a key has no live entry.

    Expired entries that the reaper has not swept yet count as absent.
    """

    def __init__(self, key: str, expired: bool = False):
        reason = "expired" if expired else "not found"
        super().__init__(f"Entry {key!r} {reason}")
        self.key = key
        self.expired = expired


class ConfigurationError(DomainError):
    """Raised when the service configuration is invalid."""
    pass


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Base application error with category and client-facing message.

    Bridges domain errors with the JSON bodies returned by the API.
    """

    def __init__(self, category: ErrorCategory, message: Optional[str] = None):
        """
        Initialize application error.

        Args:
            category: Error category
            message: Message sent to the client, defaults to the category message
        """
        self.category = category
        self.message = message or ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "message": self.message,
            "error": self.category.value,
        }


def create_error_response(
    category: ErrorCategory,
    message: Optional[str] = None,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        message: Message sent to the client
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, message)
    return error.to_dict(), status_code
