"""Tests for SecretClient."""

import logging
from unittest.mock import MagicMock

import pytest

from secret_lister.domains.secrets.client import SecretClient
from secret_lister.domains.secrets.models import ListFailure, SecretListing
from secret_lister.utils.errors import ListOperationError


class TestSecretClient:
    """Test listing Secret names."""

    def test_names_in_api_order(self, mock_k8s_client: MagicMock, sample_secrets) -> None:
        """Test N objects give N names in the order the API returned them."""
        mock_k8s_client.list_secrets.return_value = sample_secrets

        names = SecretClient(mock_k8s_client).list_secret_names("default")

        assert names == ["db-user-pass", "db-user-pass2", "db-user-pass3"]
        mock_k8s_client.list_secrets.assert_called_once_with("default")

    def test_order_is_not_sorted(self, mock_k8s_client: MagicMock, secret_factory) -> None:
        """Test names are not re-ordered."""
        mock_k8s_client.list_secrets.return_value = [
            secret_factory("zeta"),
            secret_factory("alpha"),
            secret_factory("mid"),
        ]

        names = SecretClient(mock_k8s_client).list_secret_names("default")

        assert names == ["zeta", "alpha", "mid"]

    def test_only_names_are_returned(self, mock_k8s_client: MagicMock, sample_secrets) -> None:
        """Test secret data never ends up in the result."""
        mock_k8s_client.list_secrets.return_value = sample_secrets

        result = SecretClient(mock_k8s_client).list_secrets("default")

        assert isinstance(result, SecretListing)
        assert all(isinstance(name, str) for name in result.names)
        assert "c3VwZXJzZWNyZXQ=" not in repr(result)

    def test_empty_namespace(self, mock_k8s_client: MagicMock) -> None:
        """Test an empty namespace is a successful, empty listing."""
        mock_k8s_client.list_secrets.return_value = []

        result = SecretClient(mock_k8s_client).list_secrets("default")

        assert result == SecretListing(namespace="default", names=[])
        assert result.ok is True

    def test_repeated_calls_are_stable(self, mock_k8s_client: MagicMock, sample_secrets) -> None:
        """Test repeated calls without changes return the same names."""
        mock_k8s_client.list_secrets.return_value = sample_secrets
        client = SecretClient(mock_k8s_client)

        first = client.list_secrets("default")
        second = client.list_secrets("default")

        assert first == second

    def test_failure_is_folded_and_logged(
        self, mock_k8s_client: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a failed call becomes a ListFailure and is logged."""
        error = ListOperationError(
            "secrets is forbidden", kind="forbidden", status=403, namespace="default"
        )
        mock_k8s_client.list_secrets.side_effect = error

        with caplog.at_level(logging.WARNING, logger="secret_lister.domains.secrets.client"):
            result = SecretClient(mock_k8s_client).list_secrets("default")

        assert isinstance(result, ListFailure)
        assert result.ok is False
        assert result.error is error
        assert "secrets is forbidden" in caplog.text
        assert "forbidden" in caplog.text

    def test_list_secret_names_raises(self, mock_k8s_client: MagicMock) -> None:
        """Test the raw variant propagates the error."""
        mock_k8s_client.list_secrets.side_effect = ListOperationError("boom", kind="transport")

        with pytest.raises(ListOperationError):
            SecretClient(mock_k8s_client).list_secret_names("default")
