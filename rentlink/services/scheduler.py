"""Cancellable timers keyed by the identity of the entity that owns them."""

import asyncio
from typing import Callable, Optional
from rentlink.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


class TaskScheduler:
    """Schedule deferred callbacks on the running event loop.

    At most one timer exists per key: scheduling an existing key replaces the
    previous timer. A fired or cancelled timer is forgotten, so cancelling it
    again is a no-op.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self.timers: dict[str, asyncio.TimerHandle] = {}

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        """Run callback once after delay_ms milliseconds."""
        if key in self.timers:
            self.timers[key].cancel()
            logger.debug("Timer replaced", timer_key=key)

        loop = self._loop or asyncio.get_running_loop()
        self.timers[key] = loop.call_later(delay_ms / 1000, self._fire, key, callback)
        logger.debug("Timer scheduled", timer_key=key, delay_ms=delay_ms)

    def cancel(self, key: str) -> bool:
        """Cancel a pending timer. Returns False when nothing was pending."""
        handle = self.timers.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        logger.debug("Timer cancelled", timer_key=key)
        return True

    def cancel_all(self) -> None:
        """Cancel every pending timer (teardown)."""
        pending = len(self.timers)
        for handle in self.timers.values():
            handle.cancel()
        self.timers.clear()
        if pending:
            logger.info("All timers cancelled", timers_cancelled=pending)

    def is_scheduled(self, key: str) -> bool:
        return key in self.timers

    def _fire(self, key: str, callback: Callable[[], None]) -> None:
        self.timers.pop(key, None)
        try:
            callback()
        except Exception as e:
            logger.error(
                "Timer callback failed",
                timer_key=key,
                error=str(e),
                exc_info=True
            )
