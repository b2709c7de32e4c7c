"""Structured logging: per-intent trace IDs, bound fields, timing, and user text previews."""

import inspect
import logging
import re
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Any, Callable, Dict, Optional

from rentlink.utils import logging_config
from rentlink.utils.logging_config import get_logger


# Every intent gets a trace ID; tasks spawned by it inherit the value
_trace_id_var: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)

_REDACTIONS = [
    (re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE), "[REDACTED_EMAIL]"),
    (re.compile(r"\b\+?\d[\d\s().-]{7,}\b"), "[REDACTED_PHONE]"),
    (re.compile(r"sk-[A-Za-z0-9_-]{16,}"), "[REDACTED_API_KEY]"),
    (re.compile(r"(?i)\b(api[_-]?key|token|password)([\s:=]+)\S{8,}"), r"\1\2[REDACTED]"),
]


def new_trace_id() -> str:
    return f"intent_{uuid.uuid4().hex[:12]}"


def current_trace_id() -> Optional[str]:
    return _trace_id_var.get()


@contextmanager
def trace_scope(trace_id: Optional[str] = None):
    """Bind a trace ID for the duration of the block.

    Without an explicit ID an enclosing scope's ID is reused, so an intent
    that calls another intent logs under one trace.
    """
    trace_id = trace_id or current_trace_id() or new_trace_id()
    token = _trace_id_var.set(trace_id)
    try:
        yield trace_id
    finally:
        _trace_id_var.reset(token)


def redact(text: str) -> str:
    """Replace emails, phone numbers and credentials with placeholders."""
    if not text:
        return text
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


def preview(text: str, max_length: int = 100) -> Optional[str]:
    """Loggable form of user-entered text, or None when text logging is off."""
    if not text or not logging_config.settings.log_user_text:
        return None
    if len(text) > max_length:
        text = text[:max_length] + "..."
    if logging_config.settings.redact_user_text:
        text = redact(text)
    return text


class StructuredLogger:
    """Wraps a stdlib logger; keyword arguments are emitted as record fields."""

    def __init__(self, logger: logging.Logger, **bound: Any):
        self.logger = logger
        self.bound = bound

    def bind(self, **fields: Any) -> "StructuredLogger":
        """Logger that adds fields to every record."""
        return StructuredLogger(self.logger, **{**self.bound, **fields})

    def _fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        extra = dict(self.bound)
        trace_id = current_trace_id()
        if trace_id:
            extra["trace_id"] = trace_id
        extra.update(fields)
        return extra

    def debug(self, message: str, **fields: Any) -> None:
        self.logger.debug(message, extra=self._fields(fields))

    def info(self, message: str, **fields: Any) -> None:
        self.logger.info(message, extra=self._fields(fields))

    def warning(self, message: str, **fields: Any) -> None:
        self.logger.warning(message, extra=self._fields(fields))

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self.logger.error(message, extra=self._fields(fields), exc_info=exc_info)


def get_structured_logger(name: str) -> StructuredLogger:
    return StructuredLogger(get_logger(name))


@contextmanager
def log_timing(operation: str, logger: Optional[StructuredLogger] = None, **context: Any):
    """Log how long the block took; warn past the slow threshold."""
    logger = logger or get_structured_logger(__name__)
    started = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.debug("Operation finished", operation=operation, duration_ms=duration_ms, **context)

        threshold_ms = logging_config.settings.slow_intent_ms
        if duration_ms > threshold_ms:
            logger.warning(
                "Slow operation",
                operation=operation,
                duration_ms=duration_ms,
                threshold_ms=threshold_ms,
                **context
            )


def traced(intent: Optional[str] = None, logger: Optional[StructuredLogger] = None):
    """Run an intent handler inside a trace scope and time it."""
    def decorator(func: Callable) -> Callable:
        name = intent or func.__name__
        log = logger or get_structured_logger(func.__module__)

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                with trace_scope(), log_timing(name, logger=log, intent=name):
                    return await func(*args, **kwargs)
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            with trace_scope(), log_timing(name, logger=log, intent=name):
                return func(*args, **kwargs)
        return wrapper

    return decorator
