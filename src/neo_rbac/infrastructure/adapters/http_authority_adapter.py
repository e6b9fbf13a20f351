"""HTTP authority adapter.

ONLY HTTP transport - POSTs the list of AuthItems as JSON to the configured
endpoint and reads back a JSON object of AuthItem -> decision.

Single responsibility: ONLY the remote call. Caching, deduplication and
batching live in the application services.
"""

import logging
from typing import Dict, List, Mapping, Optional

import aiohttp

from ...core.exceptions.transport_failure import TransportFailure

logger = logging.getLogger(__name__)


class HttpAuthorityAdapter:
    """Remote authority reached over HTTP.

    Request body is a JSON array of AuthItems; the response must be a JSON
    object mapping each AuthItem to a boolean. The client session is created
    on first use and closed with ``close()`` or ``async with``.
    """

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 30.0,
        headers: Optional[Mapping[str, str]] = None,
        user_agent: str = "NeoMultiTenant-RBAC/0.1",
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize HTTP authority adapter.

        Args:
            url: Endpoint resolving AuthItems
            timeout_seconds: Total timeout for one request
            headers: Extra headers sent with every request (e.g. credentials)
            user_agent: User agent string for HTTP requests
            session: Optional externally managed session; it is not closed here
        """
        self._url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._headers: Dict[str, str] = {"User-Agent": user_agent, **dict(headers or {})}
        self._session = session
        self._owns_session = session is None

    @property
    def url(self) -> str:
        return self._url

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout, headers=self._headers)
            self._owns_session = True
        return self._session

    async def resolve_items(self, items: List[str]) -> Dict[str, bool]:
        """POST the items and return the decision map.

        Raises:
            TransportFailure: On non-2xx status or a body that is not an object
            aiohttp.ClientError: On connection errors (wrapped by the batcher)
            asyncio.TimeoutError: When the request exceeds the timeout
        """
        session = await self._get_session()
        logger.debug(f"POST {self._url} with {len(items)} item(s)")

        async with session.post(
            self._url,
            json=list(items),
            headers=None if self._owns_session else self._headers,
            timeout=self._timeout,
        ) as response:
            if response.status >= 400:
                raise TransportFailure.bad_status(items, response.status, self._url)

            payload = await response.json(content_type=None)

        if not isinstance(payload, dict):
            raise TransportFailure.malformed_response(items, payload)

        return {str(key): bool(value) for key, value in payload.items()}

    async def close(self) -> None:
        """Close the session if this adapter created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "HttpAuthorityAdapter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
