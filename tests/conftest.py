"""Pytest configuration and fixtures for Secret Lister tests."""

from unittest.mock import MagicMock

import pytest

from secret_lister.config import AuthMode, SecretListerConfig

SAMPLE_KUBECONFIG = """\
apiVersion: v1
kind: Config
clusters:
- name: test-cluster
  cluster:
    server: https://api.test.example.com:6443
    insecure-skip-tls-verify: true
users:
- name: tester
  user:
    token: abc123
contexts:
- name: test-context
  context:
    cluster: test-cluster
    user: tester
    namespace: default
current-context: test-context
"""


def make_secret(name: str, namespace: str = "default") -> MagicMock:
    """Create a mock Secret object carrying data that must never leak."""
    secret = MagicMock()
    secret.metadata.name = name
    secret.metadata.namespace = namespace
    secret.metadata.uid = f"{name}-uid"
    secret.type = "Opaque"
    secret.data = {"password": "c3VwZXJzZWNyZXQ="}
    return secret


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of the tests."""
    for var in (
        "KUBECONFIG",
        "SECRET_LISTER_NAMESPACE",
        "SECRET_LISTER_AUTH_MODE",
        "SECRET_LISTER_PORT",
        "SECRET_LISTER_LOG_LEVEL",
        "SECRET_LISTER_MASK_LIST_ERRORS",
        "KUBERNETES_SERVICE_HOST",
        "KUBERNETES_SERVICE_PORT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def mock_config() -> SecretListerConfig:
    """Create a test configuration."""
    return SecretListerConfig(
        auth_mode=AuthMode.KUBECONFIG,
        namespace="default",
        verify_connection=False,
    )


@pytest.fixture
def mock_k8s_client() -> MagicMock:
    """Create a mocked K8sClient."""
    client = MagicMock()
    client.is_connected = True
    return client


@pytest.fixture
def secret_factory():
    """Factory for mock Secret objects."""
    return make_secret


@pytest.fixture
def sample_secrets() -> list[MagicMock]:
    """Secrets as returned by the API, in API order."""
    return [
        make_secret("db-user-pass"),
        make_secret("db-user-pass2"),
        make_secret("db-user-pass3"),
    ]


@pytest.fixture
def kubeconfig_file(tmp_path):
    """Write a minimal kubeconfig and return its path."""
    path = tmp_path / "kubeconfig"
    path.write_text(SAMPLE_KUBECONFIG)
    return path


@pytest.fixture
def service_account_dir(tmp_path):
    """Create a fake projected service account volume."""
    sa_dir = tmp_path / "serviceaccount"
    sa_dir.mkdir()
    (sa_dir / "token").write_text("token-one")
    (sa_dir / "ca.crt").write_text("-----BEGIN CERTIFICATE-----\n")
    return sa_dir


@pytest.fixture
def in_cluster_environ() -> dict[str, str]:
    """Environment variables the platform injects into every pod."""
    return {
        "KUBERNETES_SERVICE_HOST": "10.96.0.1",
        "KUBERNETES_SERVICE_PORT": "443",
    }
