"""Permission store protocol contract."""

from typing import Dict, Iterable, Mapping, Optional, Protocol, Union, runtime_checkable

from ..value_objects.permission_state import PermissionState


@runtime_checkable
class PermissionStore(Protocol):
    """Protocol for the tri-state permission cache.

    Storage only, no I/O. Reads never fail and a missing key reads UNKNOWN.
    """

    @property
    def version(self) -> int:
        """Counter bumped on every mutation."""
        ...

    def get(self, item: str) -> PermissionState:
        ...

    def set_many(self, entries: Mapping[str, bool]) -> None:
        """Merge remote decisions as one update."""
        ...

    def grant(self, item: str) -> None:
        ...

    def revoke(self, item: str) -> None:
        ...

    def reset(self, items: Optional[Union[str, Iterable[str]]] = None) -> int:
        """Forget the given items (or everything). Returns how many were removed."""
        ...

    def snapshot(self) -> Dict[str, PermissionState]:
        ...
