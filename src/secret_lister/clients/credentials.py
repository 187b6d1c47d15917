"""Credential providers for the Kubernetes API.

A provider produces a ready ``kubernetes.client.Configuration`` on demand.
The service resolves one provider at startup; which one depends on the
configured auth mode and on what exists on the local filesystem.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException
from kubernetes.config.incluster_config import (
    SERVICE_CERT_FILENAME,
    SERVICE_TOKEN_FILENAME,
    InClusterConfigLoader,
)

from secret_lister.config import AuthMode, SecretListerConfig
from secret_lister.utils.errors import CredentialError

logger = logging.getLogger(__name__)


def _keep_token_on_failure(
    refresh_hook: Callable[[client.Configuration], None], token_path: Path
) -> Callable[[client.Configuration], None]:
    """Wrap the library token refresh so a failed re-read keeps the current token.

    The platform rewrites the projected token file non-atomically; an empty
    or missing file mid-rotation would otherwise fail the API call itself.
    """

    def refresh_api_key(configuration: client.Configuration) -> None:
        try:
            refresh_hook(configuration)
        except (ConfigException, OSError) as e:
            logger.warning(f"Could not refresh token from {token_path}, keeping current token: {e}")
        finally:
            # The library hook reinstalls itself on every call.
            configuration.refresh_api_key_hook = refresh_api_key

    return refresh_api_key


@runtime_checkable
class CredentialProvider(Protocol):
    """Produces current, valid client configuration on demand."""

    @property
    def source(self) -> str:
        """Human readable description of where credentials come from."""
        ...

    def load(self) -> client.Configuration:
        """Build a client configuration.

        Raises:
            CredentialError: If the credentials are missing or malformed.
        """
        ...


class KubeconfigCredentials:
    """Credentials read from a kubeconfig file."""

    def __init__(self, path: Path, context: str | None = None) -> None:
        self.path = path
        self.context = context

    @property
    def source(self) -> str:
        if self.context:
            return f"kubeconfig {self.path} (context {self.context})"
        return f"kubeconfig {self.path}"

    def load(self) -> client.Configuration:
        configuration = client.Configuration()
        try:
            config.load_kube_config(
                config_file=str(self.path),
                context=self.context,
                client_configuration=configuration,
                persist_config=False,
            )
        except ConfigException as e:
            raise CredentialError(f"Invalid kubeconfig: {e}", source=str(self.path)) from e
        except OSError as e:
            raise CredentialError(
                f"Cannot read kubeconfig: {e}", source=str(self.path)
            ) from e
        except Exception as e:
            # Malformed YAML surfaces as yaml.YAMLError, TypeError or AttributeError
            raise CredentialError(
                f"Malformed kubeconfig: {e}", source=str(self.path)
            ) from e
        return configuration


class InClusterCredentials:
    """Credentials from the service account mounted into the pod."""

    def __init__(
        self,
        token_path: Path | str = SERVICE_TOKEN_FILENAME,
        cert_path: Path | str = SERVICE_CERT_FILENAME,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.token_path = Path(token_path)
        self.cert_path = Path(cert_path)
        self._environ = environ if environ is not None else os.environ

    @property
    def source(self) -> str:
        return f"in-cluster service account ({self.token_path})"

    def load(self) -> client.Configuration:
        configuration = client.Configuration()
        loader = InClusterConfigLoader(
            token_filename=str(self.token_path),
            cert_filename=str(self.cert_path),
            try_refresh_token=True,
            environ=self._environ,
        )
        try:
            loader.load_and_set(configuration)
        except ConfigException as e:
            raise CredentialError(
                f"In-cluster configuration unavailable: {e}", source="in-cluster"
            ) from e

        configuration.refresh_api_key_hook = _keep_token_on_failure(
            configuration.refresh_api_key_hook, self.token_path
        )
        return configuration


class TokenCredentials:
    """An explicit API server URL and bearer token."""

    def __init__(self, api_server: str, token: str, verify_ssl: bool = True) -> None:
        self.api_server = api_server
        self._token = token
        self.verify_ssl = verify_ssl

    @property
    def source(self) -> str:
        return f"bearer token for {self.api_server}"

    def load(self) -> client.Configuration:
        if not self.api_server or not self._token:
            raise CredentialError("api_server and api_token must both be set", source="token")

        configuration = client.Configuration()
        configuration.host = self.api_server
        configuration.api_key = {"authorization": self._token}
        configuration.api_key_prefix = {"authorization": "Bearer"}
        configuration.verify_ssl = self.verify_ssl
        return configuration


def resolve_credentials(settings: SecretListerConfig) -> CredentialProvider:
    """Pick the credential provider for the given configuration.

    In auto mode a kubeconfig file at the effective path wins; if there is
    no file there, the in-cluster service account is used.

    Raises:
        CredentialError: If the kubeconfig path cannot be inspected, or a
            kubeconfig is required but missing.
    """
    if settings.auth_mode == AuthMode.TOKEN:
        return TokenCredentials(
            api_server=settings.api_server or "",
            token=settings.api_token or "",
            verify_ssl=settings.verify_ssl,
        )

    if settings.auth_mode == AuthMode.IN_CLUSTER:
        return InClusterCredentials()

    path = settings.effective_kubeconfig_path
    try:
        path.stat()
    except FileNotFoundError:
        if settings.auth_mode == AuthMode.KUBECONFIG:
            raise CredentialError("Kubeconfig file not found", source=str(path)) from None
        logger.debug(f"No kubeconfig at {path}, falling back to in-cluster credentials")
        return InClusterCredentials()
    except OSError as e:
        raise CredentialError(f"Cannot access kubeconfig: {e}", source=str(path)) from e

    return KubeconfigCredentials(path, context=settings.kubeconfig_context)
