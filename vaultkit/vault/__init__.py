"""Vault client, auth methods and access metrics."""

from .auth import AppRoleAuth, AuthMethod, KubernetesAuth, TokenAuth, select_auth_method
from .client import VaultClient, parse_secret_spec
from .errors import (
    AuthError,
    BatchLoadError,
    ConfigError,
    SecretFetchError,
    SecretNotFoundError,
    VaultError,
)
from .metrics import VaultMetrics, get_metrics, reset_metrics, vault_metrics

__all__ = [
    "AppRoleAuth",
    "AuthError",
    "AuthMethod",
    "BatchLoadError",
    "ConfigError",
    "KubernetesAuth",
    "SecretFetchError",
    "SecretNotFoundError",
    "TokenAuth",
    "VaultClient",
    "VaultError",
    "VaultMetrics",
    "get_metrics",
    "parse_secret_spec",
    "reset_metrics",
    "select_auth_method",
    "vault_metrics",
]
