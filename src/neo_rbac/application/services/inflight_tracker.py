"""In-flight tracker service.

ONLY duplicate suppression - tracks which AuthItems have an outstanding
remote resolution and the shared handle every caller for that item awaits.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ...core.entities.pending_handle import PendingHandle

logger = logging.getLogger(__name__)


class InFlightTracker:
    """PendingSet of AuthItem -> PendingHandle.

    An item has at most one entry at a time; that is what keeps two
    callers from issuing two remote calls for it. Registration and lookup
    are synchronous so check-then-register cannot interleave with another
    coroutine.
    """

    def __init__(self):
        self._pending: Dict[str, PendingHandle] = {}

    def is_pending(self, item: str) -> bool:
        return item in self._pending

    def begin_or_join(self, item: str) -> Tuple[PendingHandle, bool]:
        """Register a new handle for the item, or return the one in flight.

        Returns:
            Tuple of (handle, is_new). ``is_new`` tells the caller it now owns
            the handle and must include the item in its outgoing request.
        """
        handle = self._pending.get(item)
        if handle is not None:
            return handle, False

        handle = PendingHandle(item)
        self._pending[item] = handle
        return handle, True

    def owns(self, item: str, handle: PendingHandle) -> bool:
        """Whether ``handle`` is still the registered entry for ``item``."""
        return self._pending.get(item) is handle

    def settle(
        self,
        handles: Mapping[str, PendingHandle],
        results: Optional[Mapping[str, bool]] = None,
        error: Optional[BaseException] = None
    ) -> None:
        """Finish a batch: drop its entries and settle its handles.

        Entries that were discarded by a reset, or replaced by a newer
        request since, are left untouched; the handles themselves are
        settled regardless so nobody waits forever.

        Args:
            handles: Items and the handles the finishing batch created
            results: Decisions per item when the batch succeeded
            error: Failure to reject the handles with when the batch failed
        """
        results = results or {}
        for item, handle in handles.items():
            if self._pending.get(item) is handle:
                del self._pending[item]

            if error is not None:
                handle.reject(error)
            else:
                handle.resolve(results.get(item))

    def discard(self, items: Optional[Union[str, Iterable[str]]] = None) -> int:
        """Forget pending entries without settling them.

        The batch that created a discarded handle still settles it when its
        call completes, but will no longer merge the result.

        Returns:
            Number of entries dropped
        """
        if items is None:
            dropped = len(self._pending)
            self._pending.clear()
        else:
            if isinstance(items, str):
                items = [items]
            dropped = 0
            for item in items:
                if self._pending.pop(item, None) is not None:
                    dropped += 1

        if dropped:
            logger.debug(f"Discarded {dropped} in-flight permission check(s)")
        return dropped

    def pending_items(self) -> List[str]:
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)
