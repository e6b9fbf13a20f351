"""Pending handle entity.

ONLY in-flight result sharing - a fire-once broadcast of one item's remote
decision to every caller that attached to it.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class PendingHandle:
    """Single-resolution result shared by all callers waiting on one AuthItem.

    The handle settles exactly once, either with the item's decision
    (``True``/``False``, or ``None`` when the authority left the item out
    of its answer) or with an error. Waiters block on an ``asyncio.Event``
    so a cancelled waiter never cancels the handle for the others.
    """

    __slots__ = ("item", "_event", "_value", "_error", "_callbacks")

    def __init__(self, item: str):
        self.item = item
        self._event = asyncio.Event()
        self._value: Optional[bool] = None
        self._error: Optional[BaseException] = None
        self._callbacks: List[Callable[["PendingHandle"], None]] = []

    @property
    def done(self) -> bool:
        return self._event.is_set()

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def value(self) -> Optional[bool]:
        """Settled decision; raises the settlement error if the handle rejected."""
        if not self.done:
            raise RuntimeError(f"Pending handle for '{self.item}' is not settled yet")
        if self._error is not None:
            raise self._error
        return self._value

    def resolve(self, value: Optional[bool]) -> bool:
        """Settle with a decision. Returns False if already settled."""
        if self.done:
            return False
        self._value = None if value is None else bool(value)
        self._finish()
        return True

    def reject(self, error: BaseException) -> bool:
        """Settle with an error. Returns False if already settled."""
        if self.done:
            return False
        self._error = error
        self._finish()
        return True

    async def wait(self) -> Optional[bool]:
        """Wait for settlement and return the decision (or raise the error)."""
        await self._event.wait()
        return self.value

    def add_done_callback(self, callback: Callable[["PendingHandle"], None]) -> None:
        """Register a synchronous continuation; runs immediately if settled."""
        if self.done:
            self._run_callback(callback)
        else:
            self._callbacks.append(callback)

    def _finish(self) -> None:
        self._event.set()
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            self._run_callback(callback)

    def _run_callback(self, callback: Callable[["PendingHandle"], None]) -> None:
        try:
            callback(self)
        except Exception:
            # one broken continuation must not stop the others
            logger.exception(f"Pending handle callback failed for '{self.item}'")

    def __repr__(self) -> str:
        if not self.done:
            state = "pending"
        elif self._error is not None:
            state = f"rejected({type(self._error).__name__})"
        else:
            state = f"resolved({self._value})"
        return f"PendingHandle(item={self.item!r}, {state})"
