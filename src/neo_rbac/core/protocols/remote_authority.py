"""Remote authority protocol contract."""

from typing import List, Mapping, Protocol, runtime_checkable


@runtime_checkable
class RemoteAuthority(Protocol):
    """Protocol for the service that decides permissions.

    Defines ONLY the contract for resolving AuthItems to boolean grants.
    Implementations handle the transport (HTTP, in-process callable, etc.).
    """

    async def resolve_items(self, items: List[str]) -> Mapping[str, bool]:
        """Resolve a batch of AuthItems.

        Args:
            items: Non-empty list of distinct AuthItems

        Returns:
            Mapping of AuthItem to decision. Should cover every requested
            item; surplus keys are ignored and missing items stay unresolved.
        """
        ...
