"""Authority factory.

Handles ONLY remote authority instantiation from settings. An explicit
server request callable wins over the configured URL; with neither, the
resolver cannot work and setup fails immediately.
"""

import logging
from typing import Optional

from ...config.settings import RbacSettings
from ...core.exceptions.configuration_error import ConfigurationError
from ...core.protocols.remote_authority import RemoteAuthority
from ..adapters.callable_authority_adapter import CallableAuthorityAdapter, ServerRequest
from ..adapters.http_authority_adapter import HttpAuthorityAdapter

logger = logging.getLogger(__name__)


def create_authority(
    settings: RbacSettings,
    server_request: Optional[ServerRequest] = None
) -> RemoteAuthority:
    """Create the remote authority for a resolver.

    Args:
        settings: RBAC settings
        server_request: Optional coroutine function resolving AuthItems

    Returns:
        Configured RemoteAuthority

    Raises:
        ConfigurationError: If neither a callable nor a URL is configured
    """
    if server_request is not None:
        logger.debug("Using custom server request for permission checks")
        return CallableAuthorityAdapter(server_request)

    if settings.url:
        logger.debug(f"Using HTTP authority at {settings.url}")
        return HttpAuthorityAdapter(
            url=settings.url,
            timeout_seconds=settings.request_timeout_seconds,
            headers=settings.headers,
            user_agent=settings.user_agent,
        )

    raise ConfigurationError.authority_missing()
