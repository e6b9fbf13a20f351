"""Callable authority adapter.

ONLY callable wrapping - adapts a plain ``async def (items) -> mapping``
function to the RemoteAuthority protocol.
"""

import inspect
from typing import Any, Awaitable, Callable, List, Mapping

ServerRequest = Callable[[List[str]], Awaitable[Mapping[str, Any]]]


class CallableAuthorityAdapter:
    """Remote authority backed by a user supplied coroutine function."""

    def __init__(self, server_request: ServerRequest):
        if not callable(server_request):
            raise TypeError("server_request must be callable")
        self._server_request = server_request

    async def resolve_items(self, items: List[str]) -> Mapping[str, Any]:
        result = self._server_request(list(items))
        if inspect.isawaitable(result):
            result = await result
        return result
