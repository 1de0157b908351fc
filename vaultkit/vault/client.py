"""HashiCorp Vault client for loading application secrets."""

import os
from collections.abc import Mapping, MutableMapping
from typing import Any
from urllib.parse import urljoin

import aiohttp
import structlog
from aiohttp import ClientTimeout

from ..config.settings import VaultSettings, settings
from ..utils.masking import mask_string
from .auth import AuthMethod, TokenAuth, select_auth_method
from .errors import BatchLoadError, ConfigError, SecretFetchError, SecretNotFoundError
from .metrics import VaultMetrics, vault_metrics

logger = structlog.get_logger("vault.client")

DEFAULT_SECRET_KEY = "value"


def parse_secret_spec(spec: str) -> tuple[str, str]:
    """Split "path" or "path:key" on the last colon."""
    if ":" not in spec:
        return spec, DEFAULT_SECRET_KEY
    path, _, key = spec.rpartition(":")
    return path, key


def extract_secret_value(payload: Any, key: str, path: str) -> Any:
    """Read a key from a KV v2 (data.data) or KV v1 (data) response."""
    data = payload.get("data") if isinstance(payload, dict) else None
    if isinstance(data, dict):
        nested = data.get("data")
        if isinstance(nested, dict) and key in nested:
            return nested[key]
        if key in data:
            return data[key]
    raise SecretNotFoundError(path, key)


class VaultClient:
    """Vault client with token, AppRole and Kubernetes auth."""

    def __init__(
        self,
        addr: str | None = None,
        token: str | None = None,
        role_id: str | None = None,
        secret_id: str | None = None,
        k8s_role: str | None = None,
        k8s_token_path: str | None = None,
        log_masked: bool | None = None,
        track_metrics: bool | None = None,
        request_timeout: float | None = None,
        metrics: VaultMetrics | None = None,
        config: VaultSettings | None = None,
    ):
        """Initialize client; explicit arguments override settings."""
        defaults = (config or settings).get_client_config()

        self.addr = addr or defaults["addr"]
        if not self.addr:
            raise ConfigError("VAULT_ADDR must be set")

        self._auth: AuthMethod | None = select_auth_method(
            token=token or defaults["token"],
            role_id=role_id or defaults["role_id"],
            secret_id=secret_id or defaults["secret_id"],
            k8s_role=k8s_role or defaults["k8s_role"],
            k8s_token_path=k8s_token_path or defaults["k8s_token_path"],
        )
        self._token: str | None = self._auth.token if isinstance(self._auth, TokenAuth) else None

        self.log_masked = defaults["log_masked"] if log_masked is None else log_masked
        self.track_metrics = defaults["track_metrics"] if track_metrics is None else track_metrics
        self.metrics = metrics if metrics is not None else vault_metrics

        timeout = request_timeout if request_timeout is not None else defaults["request_timeout"]
        self._timeout = ClientTimeout(total=timeout)

    @classmethod
    def from_settings(cls, config: VaultSettings | None = None, **overrides: Any) -> "VaultClient":
        """Create a client from settings only."""
        return cls(config=config or settings, **overrides)

    @property
    def auth_method(self) -> str | None:
        """Name of the selected auth method, if any."""
        return self._auth.name if self._auth else None

    def _session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(timeout=self._timeout)

    def _url(self, path: str) -> str:
        return urljoin(self.addr, path)

    async def get_token(self) -> str:
        """Return the Vault token, logging in on first use."""

        if self._token:
            if self.track_metrics:
                self.metrics.record_auth("token")
            return self._token

        if self._auth is None:
            raise ConfigError("No valid auth method configured")

        if self.track_metrics:
            self.metrics.record_auth(self._auth.name)

        async with self._session() as session:
            self._token = await self._auth.authenticate(session, self.addr)

        return self._token

    async def get_secret(self, path: str, key: str = DEFAULT_SECRET_KEY) -> Any:
        """Fetch one key of the secret stored at path."""

        token = await self.get_token()
        url = self._url(path)

        if self.track_metrics:
            self.metrics.record_access(path)

        headers = {
            "X-Vault-Token": token,
            "Accept": "application/json"
        }

        async with self._session() as session:
            async with session.get(url, headers=headers) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    error = f"Vault error {response.status}: {body}"
                    if self.track_metrics:
                        self.metrics.record_error(path, error)
                    logger.warning("Secret fetch failed", path=path, status=response.status)
                    raise SecretFetchError(error, status=response.status, body=body)

                payload = await response.json(content_type=None)

        value = extract_secret_value(payload, key, path)

        if self.log_masked and value:
            logger.info("Loaded secret", path=path, key=key, value=mask_string(str(value)))

        return value

    async def load_secrets(self, mapping: Mapping[str, str]) -> dict[str, Any]:
        """Load several secrets, failing the whole batch if any entry fails.

        Each mapping value is "path" (key "value") or "path:key". Entries are
        fetched one at a time in mapping order; entries resolving to None are
        left out of the result.
        """
        results: dict[str, Any] = {}
        errors: list[str] = []

        for name, spec in mapping.items():
            try:
                path, key = parse_secret_spec(spec)
                value = await self.get_secret(path, key)
                if value is not None:
                    results[name] = value
            except Exception as e:
                errors.append(f"Failed to load {name} from {spec}: {e}")

        if errors:
            logger.warning("Secret batch load failed", failed=len(errors), total=len(mapping))
            raise BatchLoadError(errors)

        return results

    async def load_into_environ(
        self,
        mapping: Mapping[str, str],
        environ: MutableMapping[str, str] | None = None,
        overwrite: bool = True,
    ) -> list[str]:
        """Load secrets and export them as environment variables."""
        environ = os.environ if environ is None else environ
        values = await self.load_secrets(mapping)

        exported = []
        for name, value in values.items():
            if not overwrite and name in environ:
                continue
            environ[name] = str(value)
            exported.append(name)

        logger.info("Exported secrets to environment", count=len(exported))
        return exported

    def get_metrics(self) -> dict[str, Any]:
        """Snapshot of this client's metrics collector."""
        return self.metrics.snapshot()

    def reset_metrics(self) -> None:
        """Reset this client's metrics collector (shared with other clients using it)."""
        self.metrics.reset()
