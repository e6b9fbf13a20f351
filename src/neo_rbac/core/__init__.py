"""RBAC core domain: value objects, entities, protocols and exceptions."""

from .value_objects import PermissionState, AuthItem, AuthItems, normalize_auth_items
from .entities import PendingHandle
from .protocols import RemoteAuthority, PermissionStore
from .exceptions import NeoRbacError, ConfigurationError, TransportFailure, InvalidAuthItem

__all__ = [
    "PermissionState",
    "AuthItem",
    "AuthItems",
    "normalize_auth_items",
    "PendingHandle",
    "RemoteAuthority",
    "PermissionStore",
    "NeoRbacError",
    "ConfigurationError",
    "TransportFailure",
    "InvalidAuthItem",
]
