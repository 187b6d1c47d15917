"""Kubernetes client wrapper for the Secret Lister service."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import urlparse

import urllib3
from kubernetes import client
from kubernetes.client.rest import ApiException

from secret_lister.clients.credentials import CredentialProvider
from secret_lister.utils.errors import ClientConstructionError, ListOperationError

logger = logging.getLogger(__name__)


def _api_error_message(exc: ApiException) -> str:
    """Pull the human readable message out of a Kubernetes Status body."""
    if exc.body:
        try:
            body = json.loads(exc.body)
        except (TypeError, ValueError):
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return f"{exc.status} {exc.reason}".strip()


def _is_timeout(exc: BaseException | None) -> bool:
    if isinstance(exc, urllib3.exceptions.MaxRetryError):
        return _is_timeout(exc.reason)
    # urllib3 2.x derives NewConnectionError (refused, DNS) from ConnectTimeoutError.
    if isinstance(exc, urllib3.exceptions.NewConnectionError):
        return False
    return isinstance(exc, urllib3.exceptions.TimeoutError)


class K8sClient:
    """Read-only handle on the Kubernetes API.

    Built once at startup from a credential provider. After ``connect()``
    succeeds the handle is never mutated, so request handlers may share it
    across threads.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        request_timeout: float | None = None,
    ) -> None:
        self._credentials = credentials
        self._request_timeout = request_timeout
        self._api_client: client.ApiClient | None = None
        self._core_v1: client.CoreV1Api | None = None

    @property
    def is_connected(self) -> bool:
        return self._core_v1 is not None

    @property
    def credentials_source(self) -> str:
        return self._credentials.source

    @property
    def host(self) -> str | None:
        if self._api_client is None:
            return None
        return self._api_client.configuration.host

    @property
    def core_v1(self) -> client.CoreV1Api:
        if self._core_v1 is None:
            raise ClientConstructionError("Kubernetes client is not connected")
        return self._core_v1

    def connect(self, verify: bool = True) -> None:
        """Load credentials and build the API client.

        Args:
            verify: Call the API server version endpoint before returning.

        Raises:
            CredentialError: If the credentials cannot be loaded.
            ClientConstructionError: If the configuration is unusable or the
                API server cannot be reached.
        """
        configuration = self._credentials.load()
        self._validate_configuration(configuration)
        # One outbound call per request; urllib3 would otherwise retry 3 times.
        configuration.retries = False

        api_client = client.ApiClient(configuration)
        if verify:
            self._check_version(api_client)

        self._api_client = api_client
        self._core_v1 = client.CoreV1Api(api_client)
        logger.info(f"Connected to Kubernetes API at {configuration.host}")

    def _validate_configuration(self, configuration: client.Configuration) -> None:
        parsed = urlparse(configuration.host or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ClientConstructionError(
                f"Invalid API server address: {configuration.host!r}",
                {"source": self._credentials.source},
            )

        # Bearer tokens sit under "BearerToken", or "authorization" in older clients.
        has_credentials = bool(
            configuration.api_key.get("BearerToken")
            or configuration.api_key.get("authorization")
            or configuration.cert_file
            or configuration.username
        )
        if not has_credentials:
            raise ClientConstructionError(
                "Configuration carries no token, client certificate or basic auth",
                {"source": self._credentials.source},
            )

    def _check_version(self, api_client: client.ApiClient) -> None:
        kwargs = self._call_kwargs()
        try:
            version = client.VersionApi(api_client).get_code(**kwargs)
        except ApiException as e:
            raise ClientConstructionError(
                f"API server rejected version check: {_api_error_message(e)}",
                {"status": e.status},
            ) from e
        except urllib3.exceptions.HTTPError as e:
            raise ClientConstructionError(f"API server unreachable: {e}") from e
        logger.debug(f"API server version {getattr(version, 'git_version', 'unknown')}")

    def _call_kwargs(self) -> dict[str, Any]:
        if self._request_timeout is None:
            return {}
        return {"_request_timeout": self._request_timeout}

    def list_secrets(self, namespace: str) -> list[Any]:
        """List the Secret objects in a namespace.

        Raises:
            ListOperationError: If the call is denied or does not complete.
        """
        try:
            response = self.core_v1.list_namespaced_secret(namespace, **self._call_kwargs())
        except ApiException as e:
            message = _api_error_message(e)
            if e.status in (401, 403):
                kind = "forbidden"
            elif e.status == 404:
                kind = "not_found"
            elif e.status == 504:
                kind = "timeout"
            else:
                kind = "api"
            raise ListOperationError(
                message, kind=kind, status=e.status, namespace=namespace
            ) from e
        except urllib3.exceptions.HTTPError as e:
            kind = "timeout" if _is_timeout(e) else "transport"
            raise ListOperationError(str(e), kind=kind, namespace=namespace) from e

        return list(response.items or [])

    def close(self) -> None:
        if self._api_client is not None:
            self._api_client.close()
