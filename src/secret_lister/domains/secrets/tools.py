"""HTTP route and MCP tool for listing Secrets."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from secret_lister.domains.secrets.client import SecretClient
from secret_lister.domains.secrets.models import (
    ListFailure,
    ListSecretsResponse,
    ListSecretsResult,
)

if TYPE_CHECKING:
    from secret_lister.server import SecretListerServer

LIST_SECRETS_PATH = "/listSecrets"

# ListOperationError.kind -> HTTP status
FAILURE_STATUS: dict[str, int] = {
    "forbidden": 403,
    "not_found": 404,
    "timeout": 504,
    "transport": 502,
    "api": 502,
}


def status_for(result: ListSecretsResult, masked: bool = False) -> int:
    """HTTP status code for a listing result."""
    if isinstance(result, ListFailure) and not masked:
        return FAILURE_STATUS.get(result.error.kind, 502)
    return 200


def build_list_secrets_endpoint(
    server: "SecretListerServer",
) -> Callable[[Request], Awaitable[Response]]:
    """Create the ``GET /listSecrets`` endpoint bound to a server context."""

    async def list_secrets_endpoint(request: Request) -> Response:
        client = SecretClient(server.k8s)
        # The Kubernetes client blocks; keep it off the event loop.
        result = await asyncio.to_thread(client.list_secrets, server.config.namespace)

        masked = server.config.mask_list_errors
        response = ListSecretsResponse.from_result(result, masked=masked)
        return JSONResponse(response.to_payload(), status_code=status_for(result, masked))

    return list_secrets_endpoint


def register_routes(mcp: FastMCP, server: "SecretListerServer") -> None:
    """Register the HTTP routes with the MCP server."""
    mcp.custom_route(LIST_SECRETS_PATH, methods=["GET"], name="list_secrets")(
        build_list_secrets_endpoint(server)
    )


def register_tools(mcp: FastMCP, server: "SecretListerServer") -> None:
    """Register Secret listing tools with the MCP server."""

    @mcp.tool()
    async def list_secrets() -> dict[str, Any]:
        """List the Secrets visible to this service in its namespace.

        Only Secret names are returned, never their contents. If the
        service account is not allowed to list Secrets, SecretsList is null
        and an error with a suggestion is included.

        Returns:
            A dictionary with the namespace and a SecretsList of names.
        """
        client = SecretClient(server.k8s)
        result = await asyncio.to_thread(client.list_secrets, server.config.namespace)
        response = ListSecretsResponse.from_result(result)
        return {"namespace": server.config.namespace, **response.to_payload()}
