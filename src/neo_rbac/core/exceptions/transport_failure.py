"""Transport failure exception.

ONLY remote call failures - raised when the remote authority call fails,
is cancelled or answers with something that is not a decision map.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, List, Optional, Sequence

from .base import NeoRbacError


class TransportFailure(NeoRbacError):
    """Remote authority call did not produce a decision map.

    The affected items stay UNKNOWN and are requested again on the next
    enqueue or check.
    """

    def __init__(
        self,
        message: str,
        items: Optional[Sequence[str]] = None,
        cause: Optional[BaseException] = None,
        error_code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.items: List[str] = list(items or [])
        self.cause = cause
        details = dict(details or {})
        details.setdefault("items", self.items)
        if cause is not None:
            details.setdefault("cause", f"{type(cause).__name__}: {cause}")
        super().__init__(message, error_code=error_code or "RBAC_TRANSPORT_FAILURE", details=details)

    @classmethod
    def from_error(cls, items: Sequence[str], error: BaseException) -> "TransportFailure":
        """Wrap an exception raised by the remote authority."""
        if isinstance(error, TransportFailure):
            return cls(
                error.message,
                items=items,
                cause=error.cause or error,
                error_code=error.error_code,
                details={k: v for k, v in error.details.items() if k not in ("items", "cause")},
            )
        return cls(
            f"Remote permission check failed for {len(items)} item(s): {error}",
            items=items,
            cause=error,
        )

    @classmethod
    def cancelled(cls, items: Sequence[str]) -> "TransportFailure":
        """Create exception for a remote call that was cancelled."""
        return cls(
            f"Remote permission check cancelled for {len(items)} item(s)",
            items=items,
            error_code="RBAC_TRANSPORT_CANCELLED",
        )

    @classmethod
    def bad_status(cls, items: Sequence[str], status: int, url: str) -> "TransportFailure":
        """Create exception for a non-success HTTP status."""
        return cls(
            f"Remote permission check returned HTTP {status}",
            items=items,
            error_code="RBAC_TRANSPORT_BAD_STATUS",
            details={"status": status, "url": url},
        )

    @classmethod
    def malformed_response(
        cls,
        items: Sequence[str],
        payload: Any,
        cause: Optional[BaseException] = None
    ) -> "TransportFailure":
        """Create exception for a response that is not a map of decisions."""
        return cls(
            "Remote permission check returned a malformed response, expected an object of decisions",
            items=items,
            cause=cause,
            error_code="RBAC_TRANSPORT_MALFORMED",
            details={"payload_type": type(payload).__name__},
        )
