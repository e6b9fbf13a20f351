"""Permission state value object.

ONLY permission state - tri-state decision cached per AuthItem.

Following maximum separation architecture - one file = one purpose.
"""

from enum import Enum
from typing import Any


class PermissionState(str, Enum):
    """Cached permission decision for an AuthItem.

    UNKNOWN means the item was never resolved (or was reset). It is a real
    value so watchers can tell "never checked" apart from "checked and denied".
    """

    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"

    @classmethod
    def from_bool(cls, value: Any) -> "PermissionState":
        """Map a remote decision to a state (truthy -> GRANTED)."""
        return cls.GRANTED if value else cls.DENIED

    @property
    def is_known(self) -> bool:
        return self is not PermissionState.UNKNOWN

    @property
    def is_granted(self) -> bool:
        return self is PermissionState.GRANTED

    def to_bool(self) -> bool:
        """GRANTED maps to True, anything else to False."""
        return self is PermissionState.GRANTED
