"""Remote authority adapters."""

from .http_authority_adapter import HttpAuthorityAdapter
from .callable_authority_adapter import CallableAuthorityAdapter, ServerRequest

__all__ = ["HttpAuthorityAdapter", "CallableAuthorityAdapter", "ServerRequest"]
