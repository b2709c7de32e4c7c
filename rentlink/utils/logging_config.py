"""Logging settings read from the environment and root handler installation."""

import os
import logging
import sys
from typing import Optional
from pydantic import BaseModel, Field
from pythonjsonlogger import jsonlogger

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "anthropic", "openai", "langchain")


class LogSettings(BaseModel):
    """How the core writes its logs."""
    level: str = Field(default="INFO", description="Root log level name")
    format: str = Field(default="json", description="json or text")
    log_user_text: bool = Field(default=True, description="Include previews of chat/search text")
    redact_user_text: bool = Field(default=True, description="Redact emails, phones and keys in previews")
    slow_intent_ms: int = Field(default=1000, description="Warn when a timed operation exceeds this")

    @classmethod
    def from_env(cls) -> "LogSettings":
        return cls(
            level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            format=os.environ.get("LOG_FORMAT", "json").lower(),
            log_user_text=os.environ.get("LOG_MESSAGE_CONTENT", "true").lower() == "true",
            redact_user_text=os.environ.get("LOG_MASK_SENSITIVE", "true").lower() == "true",
            slow_intent_ms=int(os.environ.get("LOG_SLOW_OPERATION_THRESHOLD_MS", "1000")),
        )


settings = LogSettings.from_env()


def _formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "logged_at", "levelname": "level", "name": "logger"}
        )
    return logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")


def configure_logging(log_settings: Optional[LogSettings] = None) -> None:
    """Install a single stdout handler on the root logger."""
    log_settings = log_settings or settings
    level = logging.getLevelName(log_settings.level)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_formatter(log_settings.format))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
