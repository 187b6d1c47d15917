"""Kubernetes client infrastructure for the Secret Lister service."""

from secret_lister.clients.base import K8sClient
from secret_lister.clients.credentials import (
    CredentialProvider,
    InClusterCredentials,
    KubeconfigCredentials,
    TokenCredentials,
    resolve_credentials,
)

__all__ = [
    "CredentialProvider",
    "InClusterCredentials",
    "K8sClient",
    "KubeconfigCredentials",
    "TokenCredentials",
    "resolve_credentials",
]
