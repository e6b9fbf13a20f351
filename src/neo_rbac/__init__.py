"""Neo-RBAC - lazy, batched, deduplicated permission checks for the NeoMultiTenant platform.

Caches a tri-state decision per AuthItem, coalesces checks raised within
one tick into a single remote call and never asks twice for an item that
is already in flight.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import RbacSettings, LoggingConfig, get_logger

from .core.exceptions import (
    NeoRbacError,
    ConfigurationError,
    TransportFailure,
    InvalidAuthItem,
)

from .core import (
    PermissionState,
    AuthItem,
    PendingHandle,
    RemoteAuthority,
    PermissionStore,
)

from .application import InFlightTracker, CheckBatcher, PermissionResolver

from .infrastructure import (
    MemoryPermissionStore,
    HttpAuthorityAdapter,
    CallableAuthorityAdapter,
    create_authority,
    TickScheduler,
)

from .bindings import AllowBinding
from .module import RbacModule

__all__ = [
    "__version__",
    "RbacSettings",
    "LoggingConfig",
    "get_logger",
    "NeoRbacError",
    "ConfigurationError",
    "TransportFailure",
    "InvalidAuthItem",
    "PermissionState",
    "AuthItem",
    "PendingHandle",
    "RemoteAuthority",
    "PermissionStore",
    "InFlightTracker",
    "CheckBatcher",
    "PermissionResolver",
    "MemoryPermissionStore",
    "HttpAuthorityAdapter",
    "CallableAuthorityAdapter",
    "create_authority",
    "TickScheduler",
    "AllowBinding",
    "RbacModule",
]
