"""RBAC application services."""

from .inflight_tracker import InFlightTracker
from .check_batcher import CheckBatcher
from .permission_resolver import PermissionResolver

__all__ = ["InFlightTracker", "CheckBatcher", "PermissionResolver"]
