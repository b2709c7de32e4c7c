"""Test helper functions."""

from typing import Callable


class ManualScheduler:
    """Drop-in replacement for TaskScheduler driven by a manual clock.

    Time only moves when advance() is called, so timer boundaries can be
    asserted to the millisecond.
    """

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now = start_ms
        self.timers: dict[str, tuple[int, int, Callable[[], None]]] = {}
        self._seq = 0

    def clock(self) -> int:
        return self.now

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        self._seq += 1
        self.timers[key] = (self.now + delay_ms, self._seq, callback)

    def cancel(self, key: str) -> bool:
        return self.timers.pop(key, None) is not None

    def cancel_all(self) -> None:
        self.timers.clear()

    def is_scheduled(self, key: str) -> bool:
        return key in self.timers

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing due timers in due order."""
        target = self.now + ms
        while True:
            due = [(when, seq, key) for key, (when, seq, _) in self.timers.items() if when <= target]
            if not due:
                break
            when, _, key = min(due)
            _, _, callback = self.timers.pop(key)
            self.now = when
            callback()
        self.now = target


def drive_to_home(store) -> None:
    """Run a fresh store through splash, onboarding and sign-in."""
    store.start()
    store.scheduler.advance(store.config.splash_delay_ms)
    store.get_started()
    store.sign_in()


def toast_messages(store) -> list[str]:
    return [t.message for t in store.toasts.active]
