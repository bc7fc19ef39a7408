"""Tests for RelayHandler, called directly (no HTTP layer)."""

import pytest

from contact_relay.services.contact import RelayHandler

from conftest import FakeTransport, make_settings

VALID = {"name": "Jane", "email": "jane@x.com", "message": "Hello"}


def handler_for(transport: FakeTransport, **settings_overrides) -> RelayHandler:
    return RelayHandler(make_settings(**settings_overrides), transport_factory=lambda _settings: transport)


@pytest.mark.asyncio
async def test_sends_with_default_subject(transport) -> None:
    result = await handler_for(transport).handle("POST", VALID)

    assert result.status_code == 200
    assert result.to_body() == {"message": "Email sent successfully"}
    assert len(transport.sent) == 1
    message = transport.sent[0]
    assert message["Subject"] == "Contact form: New contact message"
    assert message["To"] == "owner@example.dev"
    assert message["Reply-To"] == "jane@x.com"
    assert "relay@example.dev" in message["From"]


@pytest.mark.asyncio
async def test_custom_subject(transport) -> None:
    await handler_for(transport).handle("POST", {**VALID, "subject": "Job offer"})
    assert transport.sent[0]["Subject"] == "Contact form: Job offer"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "get"])
async def test_rejects_other_methods(transport, method: str) -> None:
    result = await handler_for(transport).handle(method, VALID)

    assert result.status_code == 405
    assert result.to_body() == {"error": "Method not allowed"}
    assert transport.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"name": "", "email": "jane@x.com", "message": "Hello"},
        {"name": "Jane", "email": "   ", "message": "Hello"},
        {"name": "Jane", "email": "jane@x.com", "message": "\n"},
        {"name": "Jane", "email": "jane@x.com"},
        {},
        None,
        ["Jane", "jane@x.com", "Hello"],
        "name=Jane",
        {"name": 1, "email": "jane@x.com", "message": "Hello"},
    ],
)
async def test_never_dispatches_without_required_fields(transport, body) -> None:
    result = await handler_for(transport).handle("POST", body)

    assert result.status_code == 400
    assert result.to_body() == {"error": "Missing required fields"}
    assert transport.sent == []


@pytest.mark.asyncio
async def test_missing_destination(transport) -> None:
    built = []

    def factory(settings):
        built.append(settings)
        return transport

    handler = RelayHandler(make_settings(to_email=None), transport_factory=factory)
    result = await handler.handle("POST", VALID)

    assert result.status_code == 500
    assert result.to_body() == {"error": "Email destination not configured"}
    # Checked before any transport is built.
    assert built == []
    assert transport.sent == []


@pytest.mark.asyncio
async def test_blank_destination_counts_as_missing(transport) -> None:
    result = await handler_for(transport, to_email="  ").handle("POST", VALID)
    assert result.to_body() == {"error": "Email destination not configured"}


@pytest.mark.asyncio
async def test_transport_construction_failure(broken_transport_factory) -> None:
    handler = RelayHandler(make_settings(), transport_factory=broken_transport_factory)
    result = await handler.handle("POST", VALID)

    assert result.status_code == 500
    assert result.to_body() == {"error": "Mail transporter configuration error"}


@pytest.mark.asyncio
async def test_real_factory_with_missing_host_is_config_error() -> None:
    result = await RelayHandler(make_settings(smtp_host=None)).handle("POST", VALID)
    assert result.status_code == 500
    assert result.to_body() == {"error": "Mail transporter configuration error"}


@pytest.mark.asyncio
async def test_dispatch_failure_is_generic() -> None:
    result = await handler_for(FakeTransport(fail=True)).handle("POST", VALID)

    assert result.status_code == 500
    assert result.to_body() == {"error": "Failed to send email"}
    assert "SMTP" not in result.error


@pytest.mark.asyncio
async def test_identical_calls_send_twice(transport) -> None:
    handler = handler_for(transport)

    first = await handler.handle("POST", VALID)
    second = await handler.handle("POST", VALID)

    assert first.status_code == second.status_code == 200
    assert len(transport.sent) == 2
    assert transport.sent[0] is not transport.sent[1]


@pytest.mark.asyncio
async def test_script_tags_are_escaped(transport) -> None:
    body = {**VALID, "name": "<b>Jane</b>", "message": "Hi\n<script>alert('x')</script>"}
    await handler_for(transport).handle("POST", body)

    message = transport.sent[0]
    html = message.get_body(preferencelist=("html",)).get_content()
    text = message.get_body(preferencelist=("plain",)).get_content()

    assert "<script>" not in html
    assert "Hi<br>&lt;script&gt;alert(&#039;x&#039;)&lt;/script&gt;" in html
    assert "&lt;b&gt;Jane&lt;/b&gt;" in html
    assert "<script>" not in text
    assert "Hi\n&lt;script&gt;alert(&#039;x&#039;)&lt;/script&gt;" in text
