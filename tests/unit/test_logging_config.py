"""Tests for registry_keychain/utils/logging_config.py."""

import json

import pytest

from registry_keychain.utils.logging_config import configure_logging, get_logger, redact_sensitive_data


class TestConfigureLogging:
    """Test structlog configuration."""

    def test_json_logs_go_to_stderr(self, capsys):
        configure_logging("INFO", json_logs=True)

        get_logger("test").info("login_succeeded", domain="ghcr.io")

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip())
        assert event["event"] == "login_succeeded"
        assert event["domain"] == "ghcr.io"
        assert event["level"] == "info"

    def test_level_filters_events(self, capsys):
        configure_logging("WARNING", json_logs=True)

        get_logger("test").info("hidden")

        assert capsys.readouterr().err == ""

    def test_level_is_case_insensitive(self, capsys):
        configure_logging("debug", json_logs=True)

        get_logger("test").debug("shown")

        assert "shown" in capsys.readouterr().err

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging("VERBOSE")

    def test_password_is_redacted(self, capsys):
        configure_logging("INFO", json_logs=True)

        get_logger("test").info("oops", password="s3cr3t")

        err = capsys.readouterr().err
        assert "s3cr3t" not in err
        assert "***REDACTED***" in err


class TestRedaction:
    """Test the redaction processor."""

    def test_redacts_sensitive_keys_only(self):
        event = {"event": "x", "Password": "pw", "token": "t", "domain": "ghcr.io"}

        result = redact_sensitive_data(None, "info", event)

        assert result == {"event": "x", "Password": "***REDACTED***", "token": "***REDACTED***", "domain": "ghcr.io"}
