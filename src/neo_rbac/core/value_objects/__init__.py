"""RBAC value objects."""

from .permission_state import PermissionState
from .auth_item import AuthItem, AuthItems, normalize_auth_items, validate_auth_item

__all__ = [
    "PermissionState",
    "AuthItem",
    "AuthItems",
    "normalize_auth_items",
    "validate_auth_item",
]
