"""Tick scheduler.

ONLY scheduling - the digest loop that drains the resolver queue once per
tick and lets watchers (bindings) re-read their permission state.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from typing import List, Optional, Protocol, Set, runtime_checkable

from ...application.services.permission_resolver import PermissionResolver

logger = logging.getLogger(__name__)


@runtime_checkable
class TickWatcher(Protocol):
    """Anything that re-reads state once per tick."""

    def check(self) -> None:
        ...


class TickScheduler:
    """Drives ``PermissionResolver.flush`` from a periodic or manual tick.

    Each tick:
    1. if the queue is nonempty, starts one background flush that drains it
    2. runs every watcher once

    Flushes run as tasks so a slow authority never blocks the tick; their
    results are picked up by watchers on a later tick.
    """

    def __init__(self, resolver: PermissionResolver, interval_seconds: float = 0.05):
        """Initialize tick scheduler.

        Args:
            resolver: Resolver whose queue is drained
            interval_seconds: Delay between ticks when running the loop
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self._resolver = resolver
        self._interval = interval_seconds
        self._watchers: List[TickWatcher] = []
        self._flushes: Set[asyncio.Task] = set()
        self._loop_task: Optional[asyncio.Task] = None
        self._ticks = 0

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def ticks(self) -> int:
        return self._ticks

    def add_watcher(self, watcher: TickWatcher) -> None:
        if watcher not in self._watchers:
            self._watchers.append(watcher)

    def remove_watcher(self, watcher: TickWatcher) -> None:
        if watcher in self._watchers:
            self._watchers.remove(watcher)

    async def tick(self) -> None:
        """Run one scheduling pass."""
        self._ticks += 1

        if self._resolver.queue_length:
            task = asyncio.create_task(self._resolver.flush())
            self._flushes.add(task)
            task.add_done_callback(self._flush_done)

        for watcher in list(self._watchers):
            try:
                watcher.check()
            except Exception:
                logger.exception(f"Tick watcher {watcher!r} failed")

    async def drain(self) -> None:
        """Wait until every flush started so far has finished."""
        while self._flushes:
            await asyncio.gather(*list(self._flushes), return_exceptions=True)

    def start(self) -> None:
        """Start ticking every ``interval_seconds`` on the running loop."""
        if self.is_running:
            return
        self._loop_task = asyncio.create_task(self._run())
        logger.debug(f"Tick scheduler started with interval {self._interval}s")

    async def stop(self) -> None:
        """Stop the loop and wait for outstanding flushes."""
        if self._loop_task is not None:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None
        await self.drain()
        logger.debug("Tick scheduler stopped")

    async def _run(self) -> None:
        while True:
            await self.tick()
            await asyncio.sleep(self._interval)

    def _flush_done(self, task: asyncio.Task) -> None:
        self._flushes.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Permission queue flush failed: {error!r}")
