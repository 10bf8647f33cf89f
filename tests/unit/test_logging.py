"""Unit tests for logging setup."""

import pytest
import structlog

from iblm.config import LoggingSettings
from iblm.logging import bind_session, get_logger, unbind_session


class TestLoggingSettings:
    def test_defaults(self) -> None:
        settings = LoggingSettings()
        assert settings.level == "INFO"
        assert settings.json_output is False

    def test_read_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IBLM_LOG_LEVEL", "debug")
        monkeypatch.setenv("IBLM_LOG_JSON_OUTPUT", "true")
        settings = LoggingSettings()
        assert settings.level == "debug"
        assert settings.json_output is True


class TestSessionBinding:
    def test_bind_and_unbind(self) -> None:
        bind_session("abc123")
        try:
            assert structlog.contextvars.get_contextvars()["session_id"] == "abc123"
        finally:
            unbind_session()
        assert "session_id" not in structlog.contextvars.get_contextvars()

    def test_get_logger_logs_with_context(self) -> None:
        with structlog.testing.capture_logs() as logs:
            get_logger(__name__).info("interaction_ended", duration_ms=1200)
        assert logs[0]["event"] == "interaction_ended"
        assert logs[0]["duration_ms"] == 1200
