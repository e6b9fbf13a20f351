"""Invalid AuthItem exception."""

from .base import NeoRbacError


class InvalidAuthItem(NeoRbacError, ValueError):
    """AuthItem is not a non-empty string."""

    @classmethod
    def empty(cls) -> "InvalidAuthItem":
        return cls("AuthItem cannot be empty", error_code="RBAC_AUTH_ITEM_EMPTY")

    @classmethod
    def wrong_type(cls, value: object) -> "InvalidAuthItem":
        return cls(
            f"AuthItem must be a string, got {type(value).__name__}",
            error_code="RBAC_AUTH_ITEM_TYPE",
            details={"type": type(value).__name__},
        )
