"""RBAC domain entities."""

from .pending_handle import PendingHandle

__all__ = ["PendingHandle"]
