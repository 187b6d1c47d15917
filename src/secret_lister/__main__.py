"""Entry point for the Secret Lister service."""

import argparse
import logging
import sys
from typing import Any

from secret_lister import __version__
from secret_lister.config import (
    AuthMode,
    LogLevel,
    SecretListerConfig,
    TransportMode,
)
from secret_lister.utils.errors import ClientConstructionError, CredentialError


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the server."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="secret-lister",
        description="List the Kubernetes Secret names visible to this workload",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Transport options
    parser.add_argument(
        "--transport",
        choices=["streamable-http", "sse"],
        default=None,
        help="Transport mode (default: streamable-http)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind HTTP server to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind HTTP server to (default: 8400)",
    )

    # Auth options
    parser.add_argument(
        "--auth-mode",
        choices=["auto", "kubeconfig", "in_cluster", "token"],
        default=None,
        help="Authentication mode (default: auto)",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Path to kubeconfig file",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubeconfig context to use",
    )

    # Listing options
    parser.add_argument(
        "--namespace",
        default=None,
        help="Namespace whose Secrets are listed (default: default)",
    )
    parser.add_argument(
        "--request-timeout",
        type=float,
        default=None,
        help="Timeout in seconds for each list call",
    )
    parser.add_argument(
        "--mask-list-errors",
        action="store_true",
        help="Answer failed list calls with 200 and a null SecretsList",
    )
    parser.add_argument(
        "--skip-connection-check",
        action="store_true",
        help="Do not check the API server version before serving",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SecretListerConfig:
    """Build config from args, falling back to environment/defaults."""
    config_kwargs: dict[str, Any] = {}

    if args.transport:
        config_kwargs["transport"] = TransportMode(args.transport)

    if args.host:
        config_kwargs["host"] = args.host

    if args.port:
        config_kwargs["port"] = args.port

    if args.auth_mode:
        config_kwargs["auth_mode"] = AuthMode(args.auth_mode)

    if args.kubeconfig:
        config_kwargs["kubeconfig_path"] = args.kubeconfig

    if args.context:
        config_kwargs["kubeconfig_context"] = args.context

    if args.namespace:
        config_kwargs["namespace"] = args.namespace

    if args.request_timeout:
        config_kwargs["request_timeout_seconds"] = args.request_timeout

    if args.mask_list_errors:
        config_kwargs["mask_list_errors"] = True

    if args.skip_connection_check:
        config_kwargs["verify_connection"] = False

    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    return SecretListerConfig(**config_kwargs)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = build_config(args)

    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting Secret Lister v{__version__}")

    try:
        warnings = config.validate_auth_config()
        for warning in warnings:
            logger.warning(warning)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    from secret_lister.server import create_server

    # Refuse to listen without a working client.
    try:
        mcp = create_server(config)
    except CredentialError as e:
        logger.error(f"Credential error: {e}")
        return 1
    except ClientConstructionError as e:
        logger.error(f"Could not build Kubernetes client: {e}")
        return 1

    logger.info(
        f"Running with {config.transport.value} transport on {config.host}:{config.port}"
    )
    mcp.run(transport=config.transport.value)

    return 0


if __name__ == "__main__":
    sys.exit(main())
