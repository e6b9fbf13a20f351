"""Allow binding.

Shows dependent content while an AuthItem is granted and hides it otherwise.
UNKNOWN and DENIED both mean hidden.
"""

import logging
from typing import Callable, Optional

from ..application.services.permission_resolver import PermissionResolver
from ..core.value_objects.auth_item import validate_auth_item
from ..core.value_objects.permission_state import PermissionState
from ..infrastructure.scheduling.tick_scheduler import TickScheduler

logger = logging.getLogger(__name__)


class AllowBinding:
    """Binds one piece of content to one AuthItem.

    ``mount()`` queues the item for checking and registers with the
    scheduler; on every tick ``check()`` compares the current state with the
    last one seen and calls ``on_show``/``on_hide`` when visibility flips.
    """

    def __init__(
        self,
        resolver: PermissionResolver,
        item: str,
        on_show: Callable[[], None],
        on_hide: Callable[[], None],
        scheduler: Optional[TickScheduler] = None
    ):
        self._resolver = resolver
        self._item = validate_auth_item(item)
        self._on_show = on_show
        self._on_hide = on_hide
        self._scheduler = scheduler
        self._last_state = PermissionState.UNKNOWN
        self._visible = False
        self._mounted = False

    @property
    def item(self) -> str:
        return self._item

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def last_state(self) -> PermissionState:
        return self._last_state

    def mount(self) -> None:
        if self._mounted:
            return
        self._mounted = True
        if self._scheduler is not None:
            self._scheduler.add_watcher(self)
        self._resolver.enqueue(self._item)
        # already cached decisions show without waiting for the next tick
        self.check()

    def check(self) -> None:
        """Re-read the permission and update visibility if it changed."""
        if not self._mounted:
            return

        state = self._resolver.get_permission(self._item)
        if state is self._last_state:
            return
        self._last_state = state

        if state.is_granted and not self._visible:
            self._visible = True
            logger.debug(f"Showing content for '{self._item}'")
            self._on_show()
        elif not state.is_granted and self._visible:
            self._visible = False
            logger.debug(f"Hiding content for '{self._item}' ({state.value})")
            self._on_hide()

    def unmount(self) -> None:
        if not self._mounted:
            return
        if self._visible:
            self._visible = False
            self._on_hide()
        if self._scheduler is not None:
            self._scheduler.remove_watcher(self)
        self._mounted = False

    def __repr__(self) -> str:
        return f"AllowBinding(item={self._item!r}, visible={self._visible})"
