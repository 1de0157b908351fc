"""Async HashiCorp Vault secret loading with masked logging and access metrics."""

from .vault import (
    AuthError,
    BatchLoadError,
    ConfigError,
    SecretFetchError,
    SecretNotFoundError,
    VaultClient,
    VaultError,
    VaultMetrics,
    get_metrics,
    reset_metrics,
    vault_metrics,
)

__version__ = "1.0.0"

__all__ = [
    "AuthError",
    "BatchLoadError",
    "ConfigError",
    "SecretFetchError",
    "SecretNotFoundError",
    "VaultClient",
    "VaultError",
    "VaultMetrics",
    "get_metrics",
    "reset_metrics",
    "vault_metrics",
]
