"""Tests for the command line entry point."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from secret_lister.__main__ import build_config, main, parse_args
from secret_lister.config import AuthMode, TransportMode
from secret_lister.utils.errors import ClientConstructionError


class TestBuildConfig:
    """Test CLI flags overriding settings."""

    def test_defaults(self) -> None:
        """Test no flags keeps the defaults."""
        config = build_config(parse_args([]))

        assert config.port == 8400
        assert config.transport == TransportMode.STREAMABLE_HTTP
        assert config.auth_mode == AuthMode.AUTO

    def test_flags(self) -> None:
        """Test every flag lands in the config."""
        args = parse_args(
            [
                "--transport", "sse",
                "--port", "9000",
                "--auth-mode", "in_cluster",
                "--namespace", "payments",
                "--request-timeout", "4",
                "--mask-list-errors",
                "--skip-connection-check",
                "--log-level", "DEBUG",
            ]
        )

        config = build_config(args)

        assert config.transport == TransportMode.SSE
        assert config.port == 9000
        assert config.auth_mode == AuthMode.IN_CLUSTER
        assert config.namespace == "payments"
        assert config.request_timeout_seconds == 4.0
        assert config.mask_list_errors is True
        assert config.verify_connection is False


class TestMain:
    """Test startup behaviour."""

    def test_no_credentials_fails_fast(self, tmp_path, caplog: pytest.LogCaptureFixture) -> None:
        """Test the listener never starts without a usable credential."""
        with patch("mcp.server.fastmcp.FastMCP.run") as run, caplog.at_level(logging.ERROR):
            exit_code = main(["--kubeconfig", str(tmp_path / "missing")])

        assert exit_code == 1
        run.assert_not_called()
        assert "Credential error" in caplog.text

    def test_client_construction_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test an unbuildable client stops startup."""
        with patch(
            "secret_lister.server.create_server",
            side_effect=ClientConstructionError("API server unreachable"),
        ), caplog.at_level(logging.ERROR):
            exit_code = main([])

        assert exit_code == 1
        assert "API server unreachable" in caplog.text

    def test_invalid_auth_config(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test token mode without a server is a configuration error."""
        with caplog.at_level(logging.ERROR):
            exit_code = main(["--auth-mode", "token"])

        assert exit_code == 1
        assert "api_server is required" in caplog.text

    def test_runs_server(self) -> None:
        """Test a successful startup runs the configured transport."""
        mcp = MagicMock()
        with patch("secret_lister.server.create_server", return_value=mcp) as create:
            exit_code = main(["--transport", "sse"])

        assert exit_code == 0
        create.assert_called_once()
        mcp.run.assert_called_once_with(transport="sse")
