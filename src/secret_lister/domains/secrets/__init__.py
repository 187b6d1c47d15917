"""Secrets domain - listing the Secret names visible to the service."""

from secret_lister.domains.secrets.client import SecretClient
from secret_lister.domains.secrets.models import (
    ErrorDetail,
    ListFailure,
    ListSecretsResponse,
    ListSecretsResult,
    SecretListing,
)

__all__ = [
    "ErrorDetail",
    "ListFailure",
    "ListSecretsResponse",
    "ListSecretsResult",
    "SecretClient",
    "SecretListing",
]
