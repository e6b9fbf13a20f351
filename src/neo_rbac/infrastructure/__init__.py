"""RBAC infrastructure: storage, transports, factories and scheduling."""

from .repositories import MemoryPermissionStore
from .adapters import HttpAuthorityAdapter, CallableAuthorityAdapter
from .factories import create_authority
from .scheduling import TickScheduler, TickWatcher

__all__ = [
    "MemoryPermissionStore",
    "HttpAuthorityAdapter",
    "CallableAuthorityAdapter",
    "create_authority",
    "TickScheduler",
    "TickWatcher",
]
