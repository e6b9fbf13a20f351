"""Memory permission store.

ONLY in-memory implementation - tri-state permission cache with local
overrides. No I/O, every operation is synchronous.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional, Union

from ...core.value_objects.permission_state import PermissionState

logger = logging.getLogger(__name__)


class MemoryPermissionStore:
    """In-memory AuthItem -> PermissionState map.

    Keys appear on first write (remote merge, grant or revoke). A missing key
    and UNKNOWN are equivalent for reads. Mutations are plain dict updates
    with no awaits, so a merged batch becomes visible all at once.
    """

    def __init__(self):
        self._permissions: Dict[str, PermissionState] = {}
        self._version = 0
        self._stats = {
            "reads": 0,
            "merges": 0,
            "grants": 0,
            "revokes": 0,
            "resets": 0,
        }

    @property
    def version(self) -> int:
        return self._version

    def get(self, item: str) -> PermissionState:
        """Current state of an item, UNKNOWN if never written."""
        self._stats["reads"] += 1
        return self._permissions.get(item, PermissionState.UNKNOWN)

    def set_many(self, entries: Mapping[str, bool]) -> None:
        """Merge remote decisions, overwriting any prior state including overrides."""
        if not entries:
            return

        self._permissions.update(
            {item: PermissionState.from_bool(value) for item, value in entries.items()}
        )
        self._version += 1
        self._stats["merges"] += 1
        logger.debug(f"Merged {len(entries)} permission decision(s)")

    def grant(self, item: str) -> None:
        """Force GRANTED locally without asking the authority."""
        self._permissions[item] = PermissionState.GRANTED
        self._version += 1
        self._stats["grants"] += 1

    def revoke(self, item: str) -> None:
        """Force DENIED locally without asking the authority."""
        self._permissions[item] = PermissionState.DENIED
        self._version += 1
        self._stats["revokes"] += 1

    def reset(self, items: Optional[Union[str, Iterable[str]]] = None) -> int:
        """Forget stored decisions.

        Args:
            items: One AuthItem, an iterable of AuthItems, or None for everything

        Returns:
            Number of entries removed
        """
        if items is None:
            removed = len(self._permissions)
            self._permissions.clear()
        else:
            if isinstance(items, str):
                items = [items]
            removed = 0
            for item in items:
                if self._permissions.pop(item, None) is not None:
                    removed += 1

        self._version += 1
        self._stats["resets"] += 1
        return removed

    def snapshot(self) -> Dict[str, PermissionState]:
        """Copy of all stored entries."""
        return dict(self._permissions)

    def get_stats(self) -> Dict[str, int]:
        return {**self._stats, "total_items": len(self._permissions), "version": self._version}

    def __len__(self) -> int:
        return len(self._permissions)

    def __contains__(self, item: object) -> bool:
        return item in self._permissions
