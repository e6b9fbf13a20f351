"""RBAC application layer."""

from .services import InFlightTracker, CheckBatcher, PermissionResolver

__all__ = ["InFlightTracker", "CheckBatcher", "PermissionResolver"]
