"""Tests for contact_relay.core.config and logging setup."""

import logging

import pytest

from contact_relay.core.config import Settings
from contact_relay.core.logging_config import configure_logging, get_log_level


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for name in ("TO_EMAIL", "SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASS", "API_PREFIX"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.to_email is None
        assert settings.smtp_host is None
        assert settings.smtp_port == "587"
        assert settings.api_prefix == "/api"
        assert settings.contact_rate_limit == "5/minute"

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("TO_EMAIL", "owner@example.dev")
        monkeypatch.setenv("SMTP_HOST", "smtp.example.dev")
        monkeypatch.setenv("SMTP_PORT", "465")
        monkeypatch.setenv("SMTP_USER", "relay@example.dev")
        monkeypatch.setenv("SMTP_PASS", "secret")
        settings = Settings(_env_file=None)
        assert settings.to_email == "owner@example.dev"
        assert settings.smtp_host == "smtp.example.dev"
        assert settings.smtp_port == "465"
        assert settings.smtp_user == "relay@example.dev"
        assert settings.smtp_pass == "secret"

    def test_blank_values_are_missing(self, monkeypatch) -> None:
        monkeypatch.setenv("TO_EMAIL", "   ")
        assert Settings(_env_file=None).to_email is None

    def test_cors_origins_split(self) -> None:
        settings = Settings(_env_file=None, cors_origins="https://a.dev, https://b.dev,")
        assert settings.cors_origins == ["https://a.dev", "https://b.dev"]

    def test_is_production(self) -> None:
        assert Settings(_env_file=None, environment="production").is_production is True
        assert Settings(_env_file=None, environment="development").is_production is False


class TestLogLevel:
    def test_explicit_level_wins(self) -> None:
        assert get_log_level("production", "debug") == "DEBUG"

    @pytest.mark.parametrize(
        "environment, expected",
        [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("other", "INFO")],
    )
    def test_environment_defaults(self, monkeypatch, environment: str, expected: str) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_log_level(environment, "") == expected

    def test_invalid_level_falls_back(self, monkeypatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_log_level("production", "LOUD") == "INFO"

    def test_configure_logging_sets_root_level(self, monkeypatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("test", "ERROR")
            assert root.level == logging.ERROR
        finally:
            root.setLevel(previous)
