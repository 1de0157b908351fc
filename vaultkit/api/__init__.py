"""HTTP routes exposing Vault client state."""

from .metrics import router

__all__ = ["router"]
