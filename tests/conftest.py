"""Global test configuration and fixtures."""

import os
from dataclasses import dataclass, field
from typing import Any, AsyncGenerator

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from vaultkit.config.settings import VaultSettings
from vaultkit.vault.auth import APPROLE_LOGIN_PATH, K8S_LOGIN_PATH
from vaultkit.vault.client import VaultClient
from vaultkit.vault.metrics import VaultMetrics


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: dict[str, str]
    body: Any = None


@dataclass
class FakeVault:
    """In-process stand-in for the Vault HTTP API."""

    addr: str = ""
    secrets: dict[str, tuple[int, Any]] = field(default_factory=dict)
    logins: dict[str, tuple[int, Any]] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)

    def add_secret(self, path: str, payload: Any, status: int = 200) -> None:
        self.secrets[path] = (status, payload)

    def calls_to(self, path: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.path == path]

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self.handle)
        return app

    async def handle(self, request: web.Request) -> web.Response:
        body = await request.json() if request.can_read_body else None
        self.requests.append(RecordedRequest(request.method, request.path, dict(request.headers), body))

        if request.method == "POST" and request.path == APPROLE_LOGIN_PATH:
            status, payload = self.logins.get("approle", (404, {"errors": ["approle not enabled"]}))
        elif request.method == "POST" and request.path == K8S_LOGIN_PATH:
            status, payload = self.logins.get("kubernetes", (404, {"errors": ["kubernetes not enabled"]}))
        elif request.method == "GET" and request.path in self.secrets:
            status, payload = self.secrets[request.path]
        else:
            status, payload = 404, {"errors": []}

        if isinstance(payload, str):
            return web.Response(status=status, text=payload)
        return web.json_response(payload, status=status)


@pytest.fixture(autouse=True)
def clean_vault_env(monkeypatch):
    """Keep VAULT_* variables from the host out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("VAULT_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def vault_settings() -> VaultSettings:
    """Settings read from nothing but defaults."""
    return VaultSettings(_env_file=None)


@pytest.fixture
def metrics() -> VaultMetrics:
    """Fresh metrics collector, isolated from the process-wide one."""
    return VaultMetrics()


@pytest.fixture
async def fake_vault() -> AsyncGenerator[FakeVault, None]:
    """Fake Vault server listening on a random local port."""
    vault = FakeVault()
    server = TestServer(vault.build_app())
    await server.start_server()
    vault.addr = f"http://{server.host}:{server.port}"
    yield vault
    await server.close()


@pytest.fixture
def k8s_token_file(tmp_path):
    """Service account token file containing 'jwt-abc'."""
    token_file = tmp_path / "token"
    token_file.write_text("jwt-abc", encoding="utf-8")
    return token_file


@pytest.fixture
def make_client(vault_settings, metrics):
    """Factory building clients against clean settings and a private collector."""

    def _make(**kwargs: Any) -> VaultClient:
        kwargs.setdefault("config", vault_settings)
        kwargs.setdefault("metrics", metrics)
        return VaultClient(**kwargs)

    return _make
