"""Check batcher service.

ONLY batch resolution - turns a request for one or many AuthItems into at
most one remote call covering the distinct items that are neither cached
nor already in flight, then merges the answer and wakes every waiter.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Union

from ...core.entities.pending_handle import PendingHandle
from ...core.exceptions.transport_failure import TransportFailure
from ...core.protocols.permission_store import PermissionStore
from ...core.protocols.remote_authority import RemoteAuthority
from ...core.value_objects.auth_item import AuthItems, normalize_auth_items
from .inflight_tracker import InFlightTracker

logger = logging.getLogger(__name__)


class CheckBatcher:
    """Deduplicating batch resolver.

    For every requested item:
    - already known in the store: answered from the store
    - already in flight: joins the existing handle, no new request
    - otherwise: claimed through the tracker and sent in this batch

    The remote call is the only suspension point before waiting, so claiming
    items and dispatching them cannot interleave with another caller.
    """

    def __init__(
        self,
        authority: RemoteAuthority,
        store: PermissionStore,
        tracker: InFlightTracker
    ):
        """Initialize check batcher.

        Args:
            authority: Remote authority that resolves AuthItems
            store: Permission cache to read from and merge into
            tracker: PendingSet shared with the resolver facade
        """
        self._authority = authority
        self._store = store
        self._tracker = tracker
        self._stats = {
            "resolve_calls": 0,
            "remote_calls": 0,
            "items_requested": 0,
            "items_joined": 0,
            "items_cached": 0,
            "failures": 0,
        }

    async def resolve(self, items: AuthItems) -> Union[bool, Dict[str, bool]]:
        """Resolve one or many AuthItems.

        Args:
            items: One AuthItem or an iterable of AuthItems

        Returns:
            For a single item, its decision (only GRANTED is True).
            For many items, a map of every distinct requested item whose
            decision is known; items the authority left unanswered are omitted.

        Raises:
            TransportFailure: If a remote call this request depends on failed
            InvalidAuthItem: If an item is not a non-empty string
        """
        requested, single = normalize_auth_items(items)
        self._stats["resolve_calls"] += 1

        resolved: Dict[str, bool] = {}
        waiting: Dict[str, PendingHandle] = {}
        claimed: Dict[str, PendingHandle] = {}

        for item in requested:
            if item in resolved or item in waiting:
                continue

            state = self._store.get(item)
            if state.is_known:
                resolved[item] = state.to_bool()
                self._stats["items_cached"] += 1
                continue

            handle, is_new = self._tracker.begin_or_join(item)
            waiting[item] = handle
            if is_new:
                claimed[item] = handle
            else:
                self._stats["items_joined"] += 1

        if claimed:
            await self._dispatch(claimed)
        elif waiting:
            logger.debug(f"Joined {len(waiting)} in-flight permission check(s)")

        for handle in waiting.values():
            await handle.wait()

        # final states come from the store, so a reset during the call wins
        for item in waiting:
            state = self._store.get(item)
            if state.is_known:
                resolved[item] = state.to_bool()

        if single:
            return resolved.get(requested[0], False)

        return {item: resolved[item] for item in dict.fromkeys(requested) if item in resolved}

    async def _dispatch(self, claimed: Dict[str, PendingHandle]) -> None:
        """Send claimed items in one remote call and settle their handles.

        Ordinary failures are recorded on the handles rather than raised
        here; every waiter, including this caller, gets them from the handle.
        Cancellation rejects the handles and propagates.
        """
        payload = list(claimed)
        self._stats["remote_calls"] += 1
        self._stats["items_requested"] += len(payload)
        logger.debug(f"Requesting permissions for {len(payload)} item(s): {payload}")

        try:
            response = await self._authority.resolve_items(payload)
        except asyncio.CancelledError:
            self._stats["failures"] += 1
            self._tracker.settle(claimed, error=TransportFailure.cancelled(payload))
            raise
        except Exception as e:
            self._fail(claimed, TransportFailure.from_error(payload, e))
            return

        if not isinstance(response, Mapping):
            self._fail(claimed, TransportFailure.malformed_response(payload, response))
            return

        try:
            self._merge(claimed, response)
        except Exception as e:
            self._fail(claimed, TransportFailure.from_error(payload, e))

    def _merge(self, claimed: Dict[str, PendingHandle], response: Mapping[str, Any]) -> None:
        try:
            results = {item: bool(response[item]) for item in claimed if item in response}
        except Exception as e:
            self._fail(claimed, TransportFailure.malformed_response(list(claimed), response, cause=e))
            return

        # items reset while the call was in flight settle their handles but are not cached
        current = {
            item: value
            for item, value in results.items()
            if self._tracker.owns(item, claimed[item])
        }
        self._store.set_many(current)

        missing = [item for item in claimed if item not in response]
        if missing:
            logger.warning(f"Remote authority did not answer for {missing}, leaving them unresolved")
        if len(current) < len(results):
            logger.debug(f"Skipped caching {len(results) - len(current)} reset item(s)")

        self._tracker.settle(claimed, results=results)

    def _fail(self, claimed: Dict[str, PendingHandle], failure: TransportFailure) -> None:
        self._stats["failures"] += 1
        logger.warning(f"Permission check failed for {failure.items}: {failure.message}")
        self._tracker.settle(claimed, error=failure)

    def get_stats(self) -> Dict[str, int]:
        return dict(self._stats)
