"""Utility functions and helpers for the Secret Lister service."""

from secret_lister.utils.errors import (
    ClientConstructionError,
    ConfigurationError,
    CredentialError,
    EnhancedError,
    ErrorPattern,
    ListOperationError,
    SecretListerError,
    enhance_error,
    enhance_list_error,
    wrap_error_response,
)

__all__ = [
    # Errors
    "SecretListerError",
    "ConfigurationError",
    "CredentialError",
    "ClientConstructionError",
    "ListOperationError",
    # Error enhancement
    "EnhancedError",
    "ErrorPattern",
    "enhance_error",
    "enhance_list_error",
    "wrap_error_response",
]
