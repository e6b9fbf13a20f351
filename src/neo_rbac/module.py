"""RBAC module wiring.

Builds the resolver stack from settings and publishes it under a name into
an explicitly passed registry.

Usage:
    from neo_rbac import RbacModule, RbacSettings

    module = RbacModule(RbacSettings(url="https://auth.example.com/rbac", scope_name="rbac"))
    module.register(app.state)  # or any dict used as a service registry
    module.scheduler.start()

    allowed = await module.resolver.check_access("post.edit")
"""

import logging
from typing import Any, MutableMapping, Optional, Union

from .application.services.check_batcher import CheckBatcher
from .application.services.inflight_tracker import InFlightTracker
from .application.services.permission_resolver import PermissionResolver
from .config.settings import RbacSettings
from .core.protocols.remote_authority import RemoteAuthority
from .infrastructure.adapters.callable_authority_adapter import ServerRequest
from .infrastructure.factories.authority_factory import create_authority
from .infrastructure.repositories.memory_permission_store import MemoryPermissionStore
from .infrastructure.scheduling.tick_scheduler import TickScheduler

logger = logging.getLogger(__name__)


class RbacModule:
    """RBAC module with explicit dependency wiring.

    Provides:
    - Permission store and in-flight tracker
    - Check batcher bound to the configured remote authority
    - Permission resolver facade
    - Tick scheduler draining the resolver queue
    """

    def __init__(
        self,
        settings: Optional[RbacSettings] = None,
        authority: Optional[RemoteAuthority] = None,
        server_request: Optional[ServerRequest] = None
    ):
        """Initialize RBAC module.

        Args:
            settings: RBAC settings, loaded from the environment if omitted
            authority: Ready-made remote authority (takes precedence)
            server_request: Coroutine function used instead of the HTTP adapter

        Raises:
            ConfigurationError: If no authority can be built
        """
        self.settings = settings or RbacSettings()
        self._owns_authority = authority is None
        if authority is None:
            authority = create_authority(self.settings, server_request)
        self.authority = authority

        self.store = MemoryPermissionStore()
        self.tracker = InFlightTracker()
        self.batcher = CheckBatcher(self.authority, self.store, self.tracker)
        self.resolver = PermissionResolver(self.batcher, self.store, self.tracker)
        self.scheduler = TickScheduler(self.resolver, self.settings.tick_interval_seconds)

    def get_name(self) -> str:
        return "rbac"

    def register(self, registry: Union[MutableMapping[str, Any], Any]) -> bool:
        """Publish the resolver under ``settings.scope_name``.

        Args:
            registry: A mutable mapping (service registry) or an attribute
                namespace such as FastAPI's ``app.state``

        Returns:
            True if published, False when no scope name is configured
        """
        name = self.settings.scope_name
        if not name:
            return False

        if isinstance(registry, MutableMapping):
            registry[name] = self.resolver
        else:
            setattr(registry, name, self.resolver)
        logger.debug(f"Published permission resolver as '{name}'")
        return True

    async def shutdown(self) -> None:
        """Stop the scheduler and close the authority transport if this module built it."""
        await self.scheduler.stop()
        if not self._owns_authority:
            return
        close = getattr(self.authority, "close", None)
        if close is not None:
            await close()
