"""Pytest configuration and fixtures for neo-rbac tests."""

import asyncio
from typing import Dict, List, Optional, Set

import pytest

from neo_rbac.application.services import CheckBatcher, InFlightTracker, PermissionResolver
from neo_rbac.infrastructure.repositories import MemoryPermissionStore


class FakeAuthority:
    """Scriptable remote authority recording every call it receives."""

    def __init__(self, decisions: Optional[Dict[str, bool]] = None):
        self.decisions: Dict[str, bool] = dict(decisions or {})
        self.calls: List[List[str]] = []
        self.error: Optional[BaseException] = None
        self.omit: Set[str] = set()
        self.extra: Dict[str, bool] = {}
        self._gate: Optional[asyncio.Event] = None

    def hold(self) -> asyncio.Event:
        """Block every call until the returned event is set."""
        self._gate = asyncio.Event()
        return self._gate

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()
            self._gate = None

    async def resolve_items(self, items: List[str]) -> Dict[str, bool]:
        self.calls.append(list(items))
        gate = self._gate
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        result = {item: self.decisions.get(item, False) for item in items if item not in self.omit}
        result.update(self.extra)
        return result


async def run_pending(rounds: int = 5) -> None:
    """Let scheduled tasks advance to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def authority():
    """Fake authority granting 'view' and denying everything else by default."""
    return FakeAuthority({"view": True, "edit": False})


@pytest.fixture
def store():
    return MemoryPermissionStore()


@pytest.fixture
def tracker():
    return InFlightTracker()


@pytest.fixture
def batcher(authority, store, tracker):
    return CheckBatcher(authority, store, tracker)


@pytest.fixture
def resolver(batcher, store, tracker):
    return PermissionResolver(batcher, store, tracker)
