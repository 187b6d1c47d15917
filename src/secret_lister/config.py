"""Configuration for the Secret Lister service.

Settings are read from the environment (prefix ``SECRET_LISTER_``) and an
optional ``.env`` file, and may be overridden by command line flags.
"""

import os
from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthMode(str, Enum):
    """How the service obtains credentials for the Kubernetes API."""

    AUTO = "auto"
    KUBECONFIG = "kubeconfig"
    IN_CLUSTER = "in_cluster"
    TOKEN = "token"


class TransportMode(str, Enum):
    """HTTP transport used by the hosting MCP server."""

    STREAMABLE_HTTP = "streamable-http"
    SSE = "sse"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class SecretListerConfig(BaseSettings):
    """Secret Lister configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SECRET_LISTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Authentication
    auth_mode: AuthMode = Field(
        default=AuthMode.AUTO,
        description="auto: kubeconfig if the file exists, in-cluster otherwise",
    )
    kubeconfig_path: str | None = Field(
        default=None,
        description="Path to kubeconfig file (default: $KUBECONFIG or ~/.kube/config)",
    )
    kubeconfig_context: str | None = Field(
        default=None,
        description="Kubeconfig context to use",
    )
    api_server: str | None = Field(
        default=None,
        description="API server URL for token auth",
    )
    api_token: str | None = Field(
        default=None,
        description="Bearer token for token auth",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verify the API server certificate in token auth mode",
    )

    # Listing
    namespace: str = Field(
        default="default",
        description="Namespace whose Secrets are listed",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout for each list call (unset: no timeout)",
    )
    mask_list_errors: bool = Field(
        default=False,
        description="Answer failed list calls with 200 and a null SecretsList",
    )

    # Startup
    verify_connection: bool = Field(
        default=True,
        description="Check the API server version before accepting requests",
    )

    # Server
    transport: TransportMode = Field(default=TransportMode.STREAMABLE_HTTP)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8400, ge=1, le=65535)

    log_level: LogLevel = Field(default=LogLevel.INFO)

    @property
    def effective_kubeconfig_path(self) -> Path:
        """Kubeconfig path, honouring $KUBECONFIG when none is configured."""
        if self.kubeconfig_path:
            return Path(self.kubeconfig_path).expanduser()
        env_path = os.environ.get("KUBECONFIG")
        if env_path:
            # KUBECONFIG may hold a list of files; the first one wins here.
            return Path(env_path.split(os.pathsep)[0]).expanduser()
        return Path.home() / ".kube" / "config"

    def validate_auth_config(self) -> list[str]:
        """Check the authentication settings.

        Returns:
            A list of warnings for settings that will be ignored.

        Raises:
            ValueError: If the settings cannot produce a credential.
        """
        warnings: list[str] = []

        if self.auth_mode == AuthMode.TOKEN:
            if not self.api_server:
                raise ValueError("api_server is required when auth_mode is 'token'")
            if not self.api_token:
                raise ValueError("api_token is required when auth_mode is 'token'")
        elif self.api_token or self.api_server:
            warnings.append(
                f"api_server/api_token are ignored when auth_mode is '{self.auth_mode.value}'"
            )

        if self.auth_mode == AuthMode.IN_CLUSTER and (
            self.kubeconfig_path or self.kubeconfig_context
        ):
            warnings.append("kubeconfig settings are ignored when auth_mode is 'in_cluster'")

        if not self.verify_ssl and self.auth_mode != AuthMode.TOKEN:
            warnings.append("verify_ssl only applies when auth_mode is 'token'")

        return warnings
