"""Configuration for vaultkit."""

from .settings import VaultSettings, settings

__all__ = ["VaultSettings", "settings"]
