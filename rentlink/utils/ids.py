"""Identifier generation for in-memory records."""

import time
import uuid
from typing import Callable


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class MonotonicIdGenerator:
    """Time-derived integer IDs that never repeat within the generator's lifetime.

    Two calls inside the same millisecond (or under a frozen clock) get
    consecutive values instead of colliding.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        self._clock = clock
        self._last = 0

    def next_id(self) -> int:
        candidate = self._clock()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate


def generate_message_id() -> str:
    """Generate a chat message ID."""
    return f"m{uuid.uuid4().hex[:12]}"


def generate_chat_id() -> str:
    """Generate a chat session ID."""
    return f"c{uuid.uuid4().hex[:12]}"


def generate_draft_id() -> str:
    """Generate a listing draft ID."""
    return f"draft_{uuid.uuid4().hex[:12]}"
