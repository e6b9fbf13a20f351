"""FastAPI integration for neo-rbac."""

from .dependencies import RequireAuthItems, require_auth_items, get_resolver

__all__ = ["RequireAuthItems", "require_auth_items", "get_resolver"]
