"""RBAC protocol contracts."""

from .remote_authority import RemoteAuthority
from .permission_store import PermissionStore

__all__ = ["RemoteAuthority", "PermissionStore"]
