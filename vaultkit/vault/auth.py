"""Vault auth methods: static token, AppRole and Kubernetes."""

import asyncio
from pathlib import Path
from typing import Any
from urllib.parse import urljoin

import aiohttp
import structlog

from ..config.settings import DEFAULT_K8S_TOKEN_PATH
from ..utils.masking import sanitize_url_for_log
from .errors import AuthError

logger = structlog.get_logger("vault.auth")

APPROLE_LOGIN_PATH = "/v1/auth/approle/login"
K8S_LOGIN_PATH = "/v1/auth/kubernetes/login"


async def _login(session: aiohttp.ClientSession, url: str, payload: dict[str, Any], label: str) -> str:
    """POST a login payload and return auth.client_token."""
    headers = {"Content-Type": "application/json"}

    async with session.post(url, headers=headers, json=payload) as response:
        if not 200 <= response.status < 300:
            body = await response.text()
            raise AuthError(f"Vault {label} login failed {response.status}: {body}")
        try:
            data = await response.json(content_type=None)
        except ValueError as e:
            raise AuthError("No client_token in Vault login response") from e

    auth = data.get("auth") if isinstance(data, dict) else None
    token = auth.get("client_token") if isinstance(auth, dict) else None
    if not token:
        raise AuthError("No client_token in Vault login response")

    logger.info("Vault login succeeded", method=label, url=sanitize_url_for_log(url))
    return token


class AuthMethod:
    """One way of obtaining a Vault token."""

    name: str = ""

    async def authenticate(self, session: aiohttp.ClientSession, address: str) -> str:
        raise NotImplementedError


class TokenAuth(AuthMethod):
    """Static token auth.

    The client seeds its token cache from this variant when it is built, so
    get_token() returns the token without calling authenticate().
    """

    name = "token"

    def __init__(self, token: str):
        self.token = token

    async def authenticate(self, session: aiohttp.ClientSession, address: str) -> str:
        return self.token


class AppRoleAuth(AuthMethod):
    name = "approle"

    def __init__(self, role_id: str, secret_id: str):
        self.role_id = role_id
        self.secret_id = secret_id

    async def authenticate(self, session: aiohttp.ClientSession, address: str) -> str:
        url = urljoin(address, APPROLE_LOGIN_PATH)
        payload = {"role_id": self.role_id, "secret_id": self.secret_id}
        return await _login(session, url, payload, "AppRole")


class KubernetesAuth(AuthMethod):
    name = "kubernetes"

    def __init__(self, role: str, token_path: str = DEFAULT_K8S_TOKEN_PATH):
        self.role = role
        self.token_path = token_path

    async def read_jwt(self) -> str:
        """Read the service account JWT from disk."""
        jwt = await asyncio.to_thread(Path(self.token_path).read_text, encoding="utf-8")
        return jwt.strip()

    async def authenticate(self, session: aiohttp.ClientSession, address: str) -> str:
        try:
            jwt = await self.read_jwt()
            url = urljoin(address, K8S_LOGIN_PATH)
            return await _login(session, url, {"role": self.role, "jwt": jwt}, "Kubernetes")
        except (OSError, AuthError, aiohttp.ClientError) as e:
            raise AuthError(f"Kubernetes auth failed: {e}") from e


def select_auth_method(
    token: str | None = None,
    role_id: str | None = None,
    secret_id: str | None = None,
    k8s_role: str | None = None,
    k8s_token_path: str | None = None,
) -> AuthMethod | None:
    """Pick the single auth method to use.

    Precedence: static token, then AppRole (both ids required), then Kubernetes.
    """
    if token:
        return TokenAuth(token)
    if role_id and secret_id:
        return AppRoleAuth(role_id, secret_id)
    if k8s_role:
        return KubernetesAuth(k8s_role, k8s_token_path or DEFAULT_K8S_TOKEN_PATH)
    return None
