"""Configuration error.

ONLY setup errors - raised when the resolver cannot be built because no
remote authority is configured. Not retryable.
"""

from .base import NeoRbacError


class ConfigurationError(NeoRbacError):
    """RBAC is not configured properly."""

    @classmethod
    def authority_missing(cls) -> "ConfigurationError":
        """Create exception for missing remote authority configuration."""
        return cls(
            "RBAC is not configured properly. Configure a URL or a server request callable.",
            error_code="RBAC_AUTHORITY_MISSING",
        )
