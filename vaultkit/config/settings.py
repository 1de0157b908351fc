"""Vault client configuration using Pydantic Settings."""


from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_K8S_TOKEN_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/token"


class VaultSettings(BaseSettings):
    """Vault settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="VAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Store
    addr: str | None = Field(default=None, description="Base URL of the Vault server")
    request_timeout: float | None = Field(
        default=None, description="Total seconds allowed per request (unset means no timeout)"
    )

    # Static token auth
    token: str | None = Field(default=None, description="Static Vault token")

    # AppRole auth
    role_id: str | None = Field(default=None, description="AppRole role ID")
    secret_id: str | None = Field(default=None, description="AppRole secret ID")

    # Kubernetes auth
    k8s_role: str | None = Field(default=None, description="Kubernetes auth role name")
    k8s_token_path: str = Field(
        default=DEFAULT_K8S_TOKEN_PATH, description="Path to the service account JWT"
    )

    # Feature Flags
    log_masked: bool = Field(default=False, description="Log loaded secrets with masked values")
    track_metrics: bool = Field(default=False, description="Record secret access metrics")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    structured_logging: bool = Field(default=True, description="Enable JSON log output")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level setting."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: float | None) -> float | None:
        """Validate request timeout setting."""
        if v is not None and v <= 0:
            raise ValueError("Request timeout must be greater than 0")
        return v

    def get_client_config(self) -> dict:
        """Get VaultClient keyword arguments."""
        return {
            "addr": self.addr,
            "token": self.token,
            "role_id": self.role_id,
            "secret_id": self.secret_id,
            "k8s_role": self.k8s_role,
            "k8s_token_path": self.k8s_token_path,
            "log_masked": self.log_masked,
            "track_metrics": self.track_metrics,
            "request_timeout": self.request_timeout,
        }


# Global settings instance
settings = VaultSettings()
