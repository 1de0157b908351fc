"""Secret access metrics for Vault clients."""

from datetime import datetime, timezone
from typing import Any

AUTH_METHODS = ("token", "approle", "kubernetes")
RECENT_ERROR_LIMIT = 10


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class VaultMetrics:
    """Collects access counts, auth method usage and fetch errors.

    One collector can be shared by any number of clients. The error log keeps
    every entry; snapshots only report the most recent ones.
    """

    def __init__(self) -> None:
        self.access_count: dict[str, int] = {}
        self.last_access: dict[str, str] = {}
        self.auth_methods: dict[str, int] = dict.fromkeys(AUTH_METHODS, 0)
        self.errors: list[dict[str, str]] = []

    def record_auth(self, method: str) -> None:
        """Count one selection of an auth method."""
        self.auth_methods[method] = self.auth_methods.get(method, 0) + 1

    def record_access(self, path: str) -> None:
        """Count one fetch attempt for the raw path."""
        self.access_count[path] = self.access_count.get(path, 0) + 1
        self.last_access[path] = _now()

    def record_error(self, path: str, error: str) -> None:
        """Append a fetch failure to the error log."""
        self.errors.append({
            "timestamp": _now(),
            "path": path,
            "error": error,
        })

    @property
    def total_requests(self) -> int:
        return sum(self.access_count.values())

    def snapshot(self) -> dict[str, Any]:
        """Return a copy of the current metrics."""
        return {
            "accessPatterns": dict(self.access_count),
            "lastAccess": dict(self.last_access),
            "authMethodUsage": dict(self.auth_methods),
            "recentErrors": [dict(entry) for entry in self.errors[-RECENT_ERROR_LIMIT:]],
            "totalRequests": self.total_requests,
        }

    def reset(self) -> None:
        """Clear all counts, timestamps and errors."""
        self.access_count.clear()
        self.last_access.clear()
        self.auth_methods = dict.fromkeys(AUTH_METHODS, 0)
        self.errors = []


# Process-wide collector used by clients that are not given one
vault_metrics = VaultMetrics()


def get_metrics() -> dict[str, Any]:
    """Snapshot of the process-wide collector."""
    return vault_metrics.snapshot()


def reset_metrics() -> None:
    """Reset the process-wide collector."""
    vault_metrics.reset()
