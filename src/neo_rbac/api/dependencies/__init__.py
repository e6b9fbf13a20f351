"""FastAPI dependencies."""

from .require_auth_items import RequireAuthItems, require_auth_items, get_resolver, DEFAULT_STATE_NAME

__all__ = ["RequireAuthItems", "require_auth_items", "get_resolver", "DEFAULT_STATE_NAME"]
