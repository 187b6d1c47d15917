"""Client for Secret listing operations."""

import logging

from secret_lister.clients.base import K8sClient
from secret_lister.domains.secrets.models import (
    ListFailure,
    ListSecretsResult,
    SecretListing,
)
from secret_lister.utils.errors import ListOperationError

logger = logging.getLogger(__name__)


class SecretClient:
    """Lists Secret names through a shared K8sClient."""

    def __init__(self, k8s: K8sClient) -> None:
        self._k8s = k8s

    def list_secret_names(self, namespace: str) -> list[str]:
        """Return the names of the Secrets in a namespace, in API order.

        Raises:
            ListOperationError: If the list call fails.
        """
        secrets = self._k8s.list_secrets(namespace)
        return [secret.metadata.name for secret in secrets]

    def list_secrets(self, namespace: str) -> ListSecretsResult:
        """List Secret names, folding failures into a ListFailure."""
        try:
            names = self.list_secret_names(namespace)
        except ListOperationError as e:
            logger.warning(
                f"Listing secrets in namespace '{namespace}' failed ({e.kind}): {e.message}"
            )
            return ListFailure(namespace=namespace, error=e)

        logger.debug(f"Listed {len(names)} secrets in namespace '{namespace}'")
        return SecretListing(namespace=namespace, names=names)
