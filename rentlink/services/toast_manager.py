"""Toast notification queue with automatic expiry."""

from typing import Callable, Optional
from rentlink.models.toast import Toast, ToastType
from rentlink.utils.ids import MonotonicIdGenerator, now_ms
from rentlink.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

DEFAULT_TOAST_DURATION_MS = 3000


class ToastManager:
    """Process-wide queue of short-lived notifications.

    Every pushed toast is removed after duration_ms unless dismissed first.
    Since the duration is fixed, toasts expire in the order they were pushed.
    """

    def __init__(
        self,
        scheduler,
        duration_ms: int = DEFAULT_TOAST_DURATION_MS,
        clock: Callable[[], int] = now_ms,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.scheduler = scheduler
        self.duration_ms = duration_ms
        self.clock = clock
        self.on_change = on_change
        self.toasts: list[Toast] = []
        self._ids = MonotonicIdGenerator(clock)

    @property
    def active(self) -> tuple[Toast, ...]:
        """Toasts currently on screen, oldest first."""
        return tuple(self.toasts)

    def push(self, message: str, type: ToastType = ToastType.INFO) -> int:
        """Show a toast and schedule its removal. Returns the toast ID."""
        toast = Toast(
            id=self._ids.next_id(),
            message=message,
            type=ToastType(type),
            created_at=self.clock(),
        )
        self.toasts.append(toast)
        self.scheduler.schedule(
            self._timer_key(toast.id),
            self.duration_ms,
            lambda: self._expire(toast.id),
        )

        logger.info(
            "Toast pushed",
            toast_id=toast.id,
            toast_type=toast.type.value,
            toast_message=toast.message,
            toasts_active=len(self.toasts)
        )
        self._changed()
        return toast.id

    def dismiss(self, toast_id: int) -> bool:
        """Remove a toast before it expires. Unknown IDs are ignored."""
        self.scheduler.cancel(self._timer_key(toast_id))
        removed = self._remove(toast_id)
        if removed:
            logger.debug("Toast dismissed", toast_id=toast_id)
        return removed

    def clear(self) -> None:
        """Drop every toast and cancel its pending expiry."""
        for toast in self.toasts:
            self.scheduler.cancel(self._timer_key(toast.id))
        had_toasts = bool(self.toasts)
        self.toasts.clear()
        if had_toasts:
            self._changed()

    def _expire(self, toast_id: int) -> None:
        if self._remove(toast_id):
            logger.debug("Toast expired", toast_id=toast_id)

    def _remove(self, toast_id: int) -> bool:
        for idx, toast in enumerate(self.toasts):
            if toast.id == toast_id:
                del self.toasts[idx]
                self._changed()
                return True
        return False

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    @staticmethod
    def _timer_key(toast_id: int) -> str:
        return f"toast:{toast_id}"
