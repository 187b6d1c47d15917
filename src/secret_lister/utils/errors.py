"""Custom exceptions and error handling for the Secret Lister service.

This module provides the exception hierarchy used across the service and
utilities for enhancing error messages with actionable recovery guidance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


@dataclass
class EnhancedError:
    """An error with enhanced context for the caller.

    Wraps error messages with a category code and a suggestion so that
    callers can tell an authorization failure apart from a network failure.
    """

    error: str
    """The original error message."""

    error_code: str
    """A categorized error code (e.g., 'NOT_FOUND', 'AUTH_FAILED')."""

    suggestion: str
    """Actionable suggestion for recovery."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for a response body."""
        return {
            "error": self.error,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
        }


@dataclass
class ErrorPattern:
    """A pattern for matching and enhancing errors."""

    pattern: str
    """Regex pattern to match against error messages."""

    error_code: str
    """The error code to assign when this pattern matches."""

    suggestion: str
    """The suggestion to provide when this pattern matches."""


# Order matters: more specific patterns come first.
ERROR_PATTERNS: list[ErrorPattern] = [
    ErrorPattern(
        pattern=r"(?i)cannot list resource \"secrets\"|secrets is forbidden",
        error_code="LIST_FORBIDDEN",
        suggestion="The service account may not list Secrets in this namespace. "
        "Grant the 'list' verb on 'secrets' through a Role and RoleBinding.",
    ),
    ErrorPattern(
        pattern=r"(?i)unauthorized|forbidden|403|401|authentication.*fail",
        error_code="AUTH_FAILED",
        suggestion="Authentication or authorization failed. Check that the "
        "credential is valid and bound to a role that allows this operation.",
    ),
    ErrorPattern(
        pattern=r"(?i)namespace.*not found",
        error_code="NAMESPACE_NOT_FOUND",
        suggestion="The configured namespace does not exist. Check the "
        "SECRET_LISTER_NAMESPACE setting.",
    ),
    ErrorPattern(
        pattern=r"(?i)not found|does not exist|404",
        error_code="NOT_FOUND",
        suggestion="The requested resource was not found. Verify the "
        "namespace is correct.",
    ),
    ErrorPattern(
        pattern=r"(?i)timed? ?out|timeout",
        error_code="TIMEOUT",
        suggestion="The Kubernetes API did not answer in time. Check cluster "
        "health or raise request_timeout_seconds.",
    ),
    ErrorPattern(
        pattern=r"(?i)connection.*refused|network.*unreachable|max retries|name or service not known",
        error_code="CONNECTION_FAILED",
        suggestion="Failed to connect to the Kubernetes API. Check network "
        "connectivity and cluster availability.",
    ),
]


def enhance_error(error_message: str) -> EnhancedError:
    """Enhance an error message with recovery guidance.

    Args:
        error_message: The original error message.

    Returns:
        An EnhancedError with a category code and suggestion.
    """
    for pattern in ERROR_PATTERNS:
        if re.search(pattern.pattern, error_message):
            return EnhancedError(
                error=error_message,
                error_code=pattern.error_code,
                suggestion=pattern.suggestion,
            )

    return EnhancedError(
        error=error_message,
        error_code="UNKNOWN_ERROR",
        suggestion="An unexpected error occurred. Check the server logs "
        "for details and try again.",
    )


def wrap_error_response(error: str | Exception) -> dict[str, Any]:
    """Wrap an error into a standardized response payload."""
    return enhance_error(str(error)).to_dict()


class SecretListerError(Exception):
    """Base exception for Secret Lister operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(SecretListerError):
    """Configuration error."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, details)


class CredentialError(SecretListerError):
    """Local credentials are missing, unreadable or malformed."""

    def __init__(self, message: str, source: str | None = None) -> None:
        details = {"source": source} if source else {}
        super().__init__(message, details)


class ClientConstructionError(SecretListerError):
    """Credentials were resolved but no usable client could be built."""


class ListOperationError(SecretListerError):
    """A list call against the Kubernetes API failed.

    ``kind`` is one of ``forbidden``, ``not_found``, ``timeout``,
    ``transport`` or ``api``.
    """

    def __init__(
        self,
        message: str,
        kind: str = "api",
        status: int | None = None,
        namespace: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"kind": kind}
        if status is not None:
            details["status"] = status
        if namespace:
            details["namespace"] = namespace
        super().__init__(message, details)
        self.kind = kind
        self.status = status
        self.namespace = namespace


# ListOperationError.kind -> error code. "forbidden" and "api" are resolved
# in enhance_list_error.
KIND_ERROR_CODES: dict[str, str] = {
    "not_found": "NAMESPACE_NOT_FOUND",
    "timeout": "TIMEOUT",
    "transport": "CONNECTION_FAILED",
}


def _suggestion_for(error_code: str) -> str:
    for pattern in ERROR_PATTERNS:
        if pattern.error_code == error_code:
            return pattern.suggestion
    return enhance_error("").suggestion


def enhance_list_error(error: ListOperationError) -> EnhancedError:
    """Enhance a failed list call using its kind.

    The kind and status decide the error code. Message matching is only
    used for ``api`` failures, whose kind says nothing about the cause.

    Args:
        error: The failed list call.

    Returns:
        An EnhancedError with a category code and suggestion.
    """
    if error.kind == "forbidden":
        error_code = "AUTH_FAILED" if error.status == 401 else "LIST_FORBIDDEN"
    elif error.kind in KIND_ERROR_CODES:
        error_code = KIND_ERROR_CODES[error.kind]
    else:
        return enhance_error(error.message)

    return EnhancedError(
        error=error.message,
        error_code=error_code,
        suggestion=_suggestion_for(error_code),
    )
