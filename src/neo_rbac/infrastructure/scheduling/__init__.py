"""Queue flush scheduling."""

from .tick_scheduler import TickScheduler, TickWatcher

__all__ = ["TickScheduler", "TickWatcher"]
