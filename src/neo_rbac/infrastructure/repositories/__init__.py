"""Permission store repositories."""

from .memory_permission_store import MemoryPermissionStore

__all__ = ["MemoryPermissionStore"]
