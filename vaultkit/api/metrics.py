"""Vault secret access metrics endpoints."""

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..vault.metrics import VaultMetrics, vault_metrics

router = APIRouter()
logger = structlog.get_logger("vault.api")


class ErrorEntry(BaseModel):
    """A recorded secret fetch failure."""
    timestamp: str
    path: str
    error: str


class AuthMethodUsage(BaseModel):
    """Auth method selection counts."""
    token: int = 0
    approle: int = 0
    kubernetes: int = 0


class VaultMetricsSummary(BaseModel):
    """Vault metrics snapshot model."""
    model_config = ConfigDict(populate_by_name=True)

    access_patterns: dict[str, int] = Field(alias="accessPatterns")
    last_access: dict[str, str] = Field(alias="lastAccess")
    auth_method_usage: AuthMethodUsage = Field(alias="authMethodUsage")
    recent_errors: list[ErrorEntry] = Field(alias="recentErrors")
    total_requests: int = Field(alias="totalRequests")


def get_vault_metrics() -> VaultMetrics:
    """Metrics collector dependency (override to serve another collector)."""
    return vault_metrics


@router.get("/vault/metrics", response_model=VaultMetricsSummary, tags=["Vault"])
async def read_vault_metrics(
    metrics: VaultMetrics = Depends(get_vault_metrics)
) -> VaultMetricsSummary:
    """Get secret access metrics."""

    summary = VaultMetricsSummary(**metrics.snapshot())
    logger.info("Vault metrics retrieved", total_requests=summary.total_requests)
    return summary


@router.post("/vault/metrics/reset", tags=["Vault"])
async def reset_vault_metrics(
    metrics: VaultMetrics = Depends(get_vault_metrics)
) -> dict[str, str]:
    """Reset secret access metrics."""

    metrics.reset()
    logger.info("Vault metrics reset")
    return {"status": "reset"}
