"""Tests for the in-flight tracker."""

import pytest

from neo_rbac.core.exceptions import TransportFailure


class TestInFlightTracker:
    """PendingSet registration and settlement."""

    def test_begin_then_join(self, tracker):
        handle, is_new = tracker.begin_or_join("view")
        joined, joined_is_new = tracker.begin_or_join("view")

        assert is_new is True
        assert joined_is_new is False
        assert joined is handle
        assert tracker.is_pending("view")
        assert len(tracker) == 1

    @pytest.mark.asyncio
    async def test_settle_resolves_and_removes(self, tracker):
        view, _ = tracker.begin_or_join("view")
        edit, _ = tracker.begin_or_join("edit")

        tracker.settle({"view": view, "edit": edit}, results={"view": True})

        assert not tracker.is_pending("view")
        assert not tracker.is_pending("edit")
        assert await view.wait() is True
        assert await edit.wait() is None

    @pytest.mark.asyncio
    async def test_settle_with_error_rejects(self, tracker):
        handle, _ = tracker.begin_or_join("delete")
        failure = TransportFailure("down", items=["delete"])

        tracker.settle({"delete": handle}, error=failure)

        assert not tracker.is_pending("delete")
        with pytest.raises(TransportFailure):
            await handle.wait()

    def test_discard_then_new_request_is_not_removed_by_stale_settle(self, tracker):
        stale, _ = tracker.begin_or_join("view")
        assert tracker.discard("view") == 1

        fresh, is_new = tracker.begin_or_join("view")
        assert is_new is True
        assert not tracker.owns("view", stale)

        tracker.settle({"view": stale}, results={"view": True})

        assert stale.done
        assert tracker.owns("view", fresh)
        assert not fresh.done

    def test_discard_many_and_all(self, tracker):
        for item in ("a", "b", "c"):
            tracker.begin_or_join(item)

        assert tracker.discard(["a", "missing"]) == 1
        assert sorted(tracker.pending_items()) == ["b", "c"]
        assert tracker.discard() == 2
        assert len(tracker) == 0

    def test_discard_does_not_settle(self, tracker):
        handle, _ = tracker.begin_or_join("a")
        tracker.discard()
        assert not handle.done
