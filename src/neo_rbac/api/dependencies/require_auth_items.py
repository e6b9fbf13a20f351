"""FastAPI route guard for AuthItems.

Resolves the published resolver from ``request.app.state`` and checks the
required AuthItems immediately through ``check_access``.
"""

import logging
from typing import List

from fastapi import HTTPException, Request, status

from ...application.services.permission_resolver import PermissionResolver
from ...core.exceptions.transport_failure import TransportFailure
from ...core.value_objects.auth_item import validate_auth_item

logger = logging.getLogger(__name__)

DEFAULT_STATE_NAME = "rbac"


def get_resolver(request: Request, state_name: str = DEFAULT_STATE_NAME) -> PermissionResolver:
    """Look up the resolver published on the application state.

    Raises:
        HTTPException: 500 if no resolver was published under ``state_name``
    """
    resolver = getattr(request.app.state, state_name, None)
    if resolver is None:
        logger.error(f"No permission resolver published on app.state.{state_name}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Permission checking is not configured",
        )
    return resolver


class RequireAuthItems:
    """Dependency that lets a request through only if its AuthItems are granted.

    Features:
    - ALL (default) or ANY semantics via ``any_of``
    - 403 when denied, 503 when the authority cannot be reached
    - decisions cached by the resolver, so repeated guards are cheap
    """

    def __init__(self, *items: str, any_of: bool = False, state_name: str = DEFAULT_STATE_NAME):
        """Initialize route guard.

        Args:
            *items: Required AuthItems
            any_of: If True, one granted item is enough; otherwise all are required
            state_name: Attribute of ``app.state`` holding the resolver
        """
        if not items:
            raise ValueError("At least one AuthItem is required")
        self.items: List[str] = [validate_auth_item(item) for item in items]
        self.any_of = any_of
        self.state_name = state_name

    async def __call__(self, request: Request) -> List[str]:
        """Check the items and return the granted ones.

        Raises:
            HTTPException: 403 if access is denied, 503 on transport failure
        """
        resolver = get_resolver(request, self.state_name)

        try:
            decisions = await resolver.check_access(self.items)
        except TransportFailure as e:
            logger.warning(f"Permission check unavailable for {self.items}: {e.message}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Permission service unavailable",
            )

        granted = [item for item in self.items if decisions.get(item, False)]
        allowed = bool(granted) if self.any_of else len(granted) == len(self.items)

        if not allowed:
            logger.warning(f"Access denied: required={self.items}, any_of={self.any_of}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {', '.join(self.items)}",
            )

        return granted


def require_auth_items(
    *items: str,
    any_of: bool = False,
    state_name: str = DEFAULT_STATE_NAME
) -> RequireAuthItems:
    """Create a configured RequireAuthItems dependency."""
    return RequireAuthItems(*items, any_of=any_of, state_name=state_name)
