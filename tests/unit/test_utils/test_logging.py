"""Tests for structured logging utilities."""

import logging
import pytest
from unittest.mock import Mock, patch
from pythonjsonlogger import jsonlogger
from rentlink.utils import logging_config
from rentlink.utils.logging import (
    StructuredLogger,
    current_trace_id,
    log_timing,
    new_trace_id,
    preview,
    redact,
    trace_scope,
    traced,
)
from rentlink.utils.logging_config import LogSettings, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestTraceScope:
    """Test suite for per-intent trace IDs."""

    def test_new_trace_id(self):
        trace_id = new_trace_id()

        assert trace_id.startswith("intent_")
        assert trace_id != new_trace_id()

    def test_scope_sets_and_restores(self):
        assert current_trace_id() is None

        with trace_scope("intent_abc") as trace_id:
            assert trace_id == "intent_abc"
            assert current_trace_id() == "intent_abc"

        assert current_trace_id() is None

    def test_nested_scope_reuses_outer_id(self):
        with trace_scope() as outer:
            with trace_scope() as inner:
                assert inner == outer
            assert current_trace_id() == outer

    def test_traced_sync_function(self):
        seen = []

        @traced("lookup")
        def lookup(value):
            seen.append(current_trace_id())
            return value * 2

        assert lookup(21) == 42
        assert seen[0].startswith("intent_")
        assert current_trace_id() is None
        assert lookup.__name__ == "lookup"

    @pytest.mark.asyncio
    async def test_traced_async_function(self):
        @traced()
        async def fetch():
            return current_trace_id()

        trace_id = await fetch()

        assert trace_id.startswith("intent_")
        assert current_trace_id() is None

    def test_traced_propagates_errors(self):
        @traced()
        def explode():
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            explode()
        assert current_trace_id() is None


@pytest.mark.unit
class TestUserText:
    """Test suite for redaction and previews."""

    def test_redacts_email(self):
        assert redact("mail me at jane@example.com") == "mail me at [REDACTED_EMAIL]"

    def test_redacts_phone(self):
        assert "[REDACTED_PHONE]" in redact("call +1 555 123 4567 today")

    def test_redacts_api_key(self):
        assert "sk-ant" not in redact("my key is sk-ant-REDACTED")

    def test_redacts_labelled_token(self):
        assert redact("token: abcdefgh12345") == "token: [REDACTED]"

    def test_plain_text_untouched(self):
        assert redact("Is the loft still available?") == "Is the loft still available?"

    def test_preview_truncates(self):
        assert preview("a" * 50, max_length=10) == "a" * 10 + "..."

    def test_preview_disabled(self):
        with patch.object(logging_config.settings, "log_user_text", False):
            assert preview("hello") is None

    def test_preview_without_redaction(self):
        with patch.object(logging_config.settings, "redact_user_text", False):
            assert preview("jane@example.com") == "jane@example.com"

    def test_preview_empty(self):
        assert preview("") is None


@pytest.mark.unit
class TestStructuredLogger:
    """Test suite for StructuredLogger."""

    def test_fields_become_extra(self):
        base = Mock(spec=logging.Logger)
        logger = StructuredLogger(base)

        with trace_scope("intent_xyz"):
            logger.info("Toast pushed", toast_id=7)

        extra = base.info.call_args.kwargs["extra"]
        assert extra == {"trace_id": "intent_xyz", "toast_id": 7}

    def test_bound_fields(self):
        base = Mock(spec=logging.Logger)
        logger = StructuredLogger(base).bind(component="composer")

        logger.warning("Refused", draft_id="d1")

        extra = base.warning.call_args.kwargs["extra"]
        assert extra == {"component": "composer", "draft_id": "d1"}

    def test_error_passes_exc_info(self):
        base = Mock(spec=logging.Logger)

        StructuredLogger(base).error("Failed", exc_info=True, error="boom")

        assert base.error.call_args.kwargs["exc_info"] is True

    def test_log_timing_reports_duration(self):
        base = Mock(spec=logging.Logger)
        logger = StructuredLogger(base)

        with log_timing("publish", logger=logger, draft_id="d1"):
            pass

        extra = base.debug.call_args.kwargs["extra"]
        assert extra["operation"] == "publish"
        assert extra["draft_id"] == "d1"
        assert extra["duration_ms"] >= 0
        base.warning.assert_not_called()

    def test_log_timing_warns_on_slow_operation(self):
        base = Mock(spec=logging.Logger)
        logger = StructuredLogger(base)

        with patch.object(logging_config.settings, "slow_intent_ms", -1):
            with log_timing("publish", logger=logger):
                pass

        base.warning.assert_called_once()


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for root logger setup."""

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "TEXT")
        monkeypatch.setenv("LOG_MESSAGE_CONTENT", "false")
        monkeypatch.setenv("LOG_SLOW_OPERATION_THRESHOLD_MS", "250")

        settings = LogSettings.from_env()

        assert settings.level == "DEBUG"
        assert settings.format == "text"
        assert settings.log_user_text is False
        assert settings.slow_intent_ms == 250

    def test_json_handler_installed(self, restore_root_logger):
        configure_logging(LogSettings(level="WARNING", format="json"))

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, jsonlogger.JsonFormatter)
        assert restore_root_logger.level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        configure_logging(LogSettings(level="LOUD", format="text"))

        assert restore_root_logger.level == logging.INFO
