"""Tests for the shared pending handle."""

import asyncio

import pytest

from neo_rbac.core.entities import PendingHandle
from neo_rbac.core.exceptions import TransportFailure

from ..conftest import run_pending


class TestPendingHandle:
    """Fire-once broadcast semantics."""

    @pytest.mark.asyncio
    async def test_many_waiters_receive_same_value(self):
        handle = PendingHandle("view")
        waiters = [asyncio.create_task(handle.wait()) for _ in range(3)]
        await run_pending()
        assert not any(task.done() for task in waiters)

        handle.resolve(True)

        assert await asyncio.gather(*waiters) == [True, True, True]

    @pytest.mark.asyncio
    async def test_settles_only_once(self):
        handle = PendingHandle("view")

        assert handle.resolve(False) is True
        assert handle.resolve(True) is False
        assert handle.reject(RuntimeError("late")) is False
        assert await handle.wait() is False

    @pytest.mark.asyncio
    async def test_reject_raises_for_every_waiter(self):
        handle = PendingHandle("delete")
        waiters = [asyncio.create_task(handle.wait()) for _ in range(2)]
        await run_pending()

        handle.reject(TransportFailure("boom", items=["delete"]))

        results = await asyncio.gather(*waiters, return_exceptions=True)
        assert all(isinstance(result, TransportFailure) for result in results)

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_others(self):
        handle = PendingHandle("view")
        first = asyncio.create_task(handle.wait())
        second = asyncio.create_task(handle.wait())
        await run_pending()

        first.cancel()
        await run_pending()
        handle.resolve(True)

        assert first.cancelled()
        assert await second is True

    def test_resolve_without_value_means_unresolved(self):
        handle = PendingHandle("view")
        handle.resolve(None)
        assert handle.done
        assert handle.value is None

    def test_value_before_settlement_raises(self):
        with pytest.raises(RuntimeError):
            PendingHandle("view").value

    def test_done_callbacks_fire_once(self):
        handle = PendingHandle("view")
        seen = []
        handle.add_done_callback(lambda h: seen.append(("early", h.value)))

        handle.resolve(True)
        handle.resolve(False)
        handle.add_done_callback(lambda h: seen.append(("late", h.value)))

        assert seen == [("early", True), ("late", True)]

    def test_failing_callback_does_not_block_others(self):
        handle = PendingHandle("view")
        seen = []

        def broken(_):
            raise RuntimeError("broken continuation")

        handle.add_done_callback(broken)
        handle.add_done_callback(lambda h: seen.append(h.item))
        handle.resolve(True)

        assert seen == ["view"]

    def test_repr_shows_state(self):
        handle = PendingHandle("view")
        assert "pending" in repr(handle)
        handle.reject(TransportFailure("boom"))
        assert "rejected(TransportFailure)" in repr(handle)
