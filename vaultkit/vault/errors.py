"""Exceptions raised by the Vault client."""


class VaultError(Exception):
    """Base class for Vault client errors."""


class ConfigError(VaultError):
    """Client is missing required configuration (address or auth method)."""


class AuthError(VaultError):
    """Login failed, returned no token, or the service account JWT was unreadable."""


class SecretFetchError(VaultError):
    """Vault answered a secret read with a non-2xx status."""

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class SecretNotFoundError(VaultError):
    """Response contained neither a KV v2 nor a KV v1 entry for the key."""

    def __init__(self, path: str, key: str):
        super().__init__(f'Secret key "{key}" not found in Vault response for {path}')
        self.path = path
        self.key = key


class BatchLoadError(VaultError):
    """One or more entries of a batch load failed."""

    def __init__(self, errors: list[str]):
        super().__init__("One or more secrets failed to load")
        self.errors = list(errors)

    def __str__(self) -> str:
        details = "; ".join(self.errors)
        return f"{self.args[0]}: {details}" if details else self.args[0]
