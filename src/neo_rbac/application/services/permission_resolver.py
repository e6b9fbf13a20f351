"""Permission resolver orchestration service.

ONLY the public RBAC facade - composes the permission store, the in-flight
tracker and the check batcher into the API used by bindings, route guards
and application code.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

from ...core.exceptions.transport_failure import TransportFailure
from ...core.protocols.permission_store import PermissionStore
from ...core.value_objects.auth_item import AuthItems, validate_auth_item
from ...core.value_objects.permission_state import PermissionState
from .check_batcher import CheckBatcher
from .inflight_tracker import InFlightTracker

logger = logging.getLogger(__name__)


class PermissionResolver:
    """Lazy, batched, deduplicated access to permission decisions.

    Two ways to ask:
    - ``check_access``: resolve now and return the answer
    - ``enqueue`` + ``get_permission``: queue the item for the next tick
      and watch the synchronous state until it changes

    The resolver is the only writer of its store and its PendingSet.
    """

    def __init__(
        self,
        batcher: CheckBatcher,
        store: PermissionStore,
        tracker: InFlightTracker
    ):
        """Initialize permission resolver.

        Args:
            batcher: Batch resolver sharing ``store`` and ``tracker``
            store: Permission cache
            tracker: PendingSet of in-flight checks
        """
        self._batcher = batcher
        self._store = store
        self._tracker = tracker
        self._queue: List[str] = []

    # Asynchronous reads

    async def check_access(self, items: AuthItems) -> Union[bool, Dict[str, bool]]:
        """Resolve items immediately, bypassing the queue.

        Args:
            items: One AuthItem or an iterable of AuthItems

        Returns:
            Decision for a single item, or a decision map for many

        Raises:
            TransportFailure: If the remote call for any requested item failed
        """
        return await self._batcher.resolve(items)

    def enqueue(self, item: str) -> None:
        """Queue an item to be checked on the next flush."""
        self._queue.append(validate_auth_item(item))

    @property
    def queue_length(self) -> int:
        return len(self._queue)

    async def flush(self) -> Optional[Dict[str, bool]]:
        """Drain the queue into a single batch resolution.

        The queue is swapped out before awaiting, so a flush started while
        this one is in flight only sees items enqueued afterwards.

        Returns:
            Decision map for the drained items, or None if the queue was
            empty or the remote call failed
        """
        if not self._queue:
            return None

        items, self._queue = self._queue, []
        try:
            return await self._batcher.resolve(items)
        except TransportFailure as e:
            logger.warning(f"Queued permission check failed, {len(e.items)} item(s) stay unknown: {e.message}")
            return None

    # Synchronous reads

    def get_permission(self, item: str) -> PermissionState:
        """Current known state, never blocks."""
        return self._store.get(item)

    def is_allowed(self, item: str) -> bool:
        """True only for GRANTED; UNKNOWN and DENIED both mean no."""
        return self._store.get(item).is_granted

    def is_pending(self, item: str) -> bool:
        return self._tracker.is_pending(item)

    @property
    def version(self) -> int:
        return self._store.version

    # Local overrides

    def grant(self, item: str) -> None:
        """Grant locally, no remote call. An in-flight check may overwrite it."""
        self._store.grant(validate_auth_item(item))

    def revoke(self, item: str) -> None:
        """Revoke locally, no remote call. An in-flight check may overwrite it."""
        self._store.revoke(validate_auth_item(item))

    def reset(self, items: Optional[Union[str, Iterable[str]]] = None) -> None:
        """Forget cached decisions and in-flight checks for items (or everything).

        Both are cleared in the same synchronous step so the next check for
        a reset item always reaches the authority.
        """
        if items is not None and not isinstance(items, str):
            items = list(items)

        removed = self._store.reset(items)
        dropped = self._tracker.discard(items)
        logger.debug(f"Reset {removed} cached and {dropped} in-flight permission(s)")

    def get_stats(self) -> Dict[str, int]:
        return {
            **self._batcher.get_stats(),
            "queued": len(self._queue),
            "pending": len(self._tracker),
            "cached": len(self._store.snapshot()),
        }
