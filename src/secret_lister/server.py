"""Server context and FastMCP construction for the Secret Lister service."""

import logging

from mcp.server.fastmcp import FastMCP

from secret_lister import __version__
from secret_lister.clients.base import K8sClient
from secret_lister.clients.credentials import resolve_credentials
from secret_lister.config import SecretListerConfig
from secret_lister.domains.secrets import tools as secret_tools
from secret_lister.utils.errors import ClientConstructionError

logger = logging.getLogger(__name__)

SERVER_NAME = "secret-lister"


class SecretListerServer:
    """Holds the configuration and the shared Kubernetes client.

    Handlers receive this object explicitly; the client is set once by
    ``connect()`` and only read afterwards.
    """

    def __init__(self, config: SecretListerConfig, k8s: K8sClient | None = None) -> None:
        self._config = config
        self._k8s = k8s

    @property
    def config(self) -> SecretListerConfig:
        return self._config

    @property
    def k8s(self) -> K8sClient:
        if self._k8s is None:
            raise ClientConstructionError("Server has no Kubernetes client; call connect() first")
        return self._k8s

    def connect(self) -> K8sClient:
        """Resolve credentials and build the shared Kubernetes client.

        Raises:
            CredentialError: If no usable credential is available.
            ClientConstructionError: If the client cannot be built, or the
                server is already connected.
        """
        if self._k8s is not None:
            raise ClientConstructionError("Kubernetes client is already initialised")

        provider = resolve_credentials(self._config)
        logger.info(f"Using credentials from {provider.source}")

        k8s = K8sClient(provider, request_timeout=self._config.request_timeout_seconds)
        k8s.connect(verify=self._config.verify_connection)
        self._k8s = k8s
        return k8s

    def create_mcp(self) -> FastMCP:
        """Build the FastMCP server with the listing route and tool."""
        mcp = FastMCP(
            SERVER_NAME,
            instructions=(
                f"Secret Lister v{__version__}. Lists the names of the Secrets in "
                f"namespace '{self._config.namespace}' visible to this service."
            ),
            host=self._config.host,
            port=self._config.port,
            log_level=self._config.log_level.value,
        )
        secret_tools.register_routes(mcp, self)
        secret_tools.register_tools(mcp, self)
        return mcp


def create_server(config: SecretListerConfig, k8s: K8sClient | None = None) -> FastMCP:
    """Create the MCP server, connecting to Kubernetes unless a client is given."""
    server = SecretListerServer(config, k8s)
    if k8s is None:
        server.connect()
    logger.info(f"Listing secrets in namespace '{config.namespace}'")
    return server.create_mcp()
