"""RBAC exceptions.

One exception per file following maximum separation architecture.
"""

from .base import NeoRbacError
from .configuration_error import ConfigurationError
from .transport_failure import TransportFailure
from .invalid_auth_item import InvalidAuthItem

__all__ = [
    "NeoRbacError",
    "ConfigurationError",
    "TransportFailure",
    "InvalidAuthItem",
]
