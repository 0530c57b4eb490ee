"""Tests for commitmend.logging_config module."""

import logging

from commitmend.logging_config import configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_default_level(self, monkeypatch):
        """Test WARNING is the default level."""
        monkeypatch.delenv("COMMITMEND_LOG_LEVEL", raising=False)
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_explicit_level(self):
        """Test an explicit level wins."""
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_level_from_environment(self, monkeypatch):
        """Test COMMITMEND_LOG_LEVEL is honoured."""
        monkeypatch.setenv("COMMITMEND_LOG_LEVEL", "INFO")
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_invalid_level_falls_back(self, capsys):
        """Test an unknown level warns and uses WARNING."""
        configure_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING
        assert "Invalid log level 'LOUD'" in capsys.readouterr().err

    def test_single_handler(self):
        """Test repeated calls do not stack handlers."""
        configure_logging("INFO")
        configure_logging("INFO")
        assert len(logging.getLogger().handlers) == 1

    def test_sdk_loggers_quieted(self):
        """Test HTTP client loggers stay at WARNING."""
        configure_logging("DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
