"""Shared test fixtures for the contact relay."""

import os

os.environ.setdefault("ENVIRONMENT", "test")

from typing import List

import pytest
from fastapi.testclient import TestClient

from contact_relay.api.dependencies import get_transport_factory
from contact_relay.core.config import Settings, get_settings
from contact_relay.core.exceptions import MailDispatchError, MailTransportConfigError
from contact_relay.core.rate_limit import limiter
from contact_relay.main import app


class FakeTransport:
    """Stands in for SMTPMailTransport; records every message it is asked to send."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sender_mailbox = "relay@example.dev"
        self.sent: List = []

    async def send(self, message) -> None:
        if self.fail:
            raise MailDispatchError("SMTP delivery failed", details={"error_type": "SMTPAuthenticationError"})
        self.sent.append(message)


def make_settings(**overrides) -> Settings:
    values = {
        "to_email": "owner@example.dev",
        "smtp_host": "smtp.example.dev",
        "smtp_port": "587",
        "smtp_user": "relay@example.dev",
        "smtp_pass": "app-password",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def transport_factory(transport):
    return lambda _settings: transport


@pytest.fixture
def broken_transport_factory():
    def _factory(_settings):
        raise MailTransportConfigError("SMTP_HOST is not set")

    return _factory


@pytest.fixture
def override_app(settings, transport_factory):
    """Point the app at test settings and the fake transport."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_transport_factory] = lambda: transport_factory
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_app):
    with TestClient(override_app) as test_client:
        yield test_client
