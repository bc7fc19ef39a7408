"""
Relay Handler: validates, sanitizes and relays a contact submission as one
email through the configured SMTP transport.
"""

from typing import Any, Callable

import structlog

from contact_relay.core.config import Settings
from contact_relay.core.exceptions import DestinationNotConfiguredError
from contact_relay.domain.schemas import DEFAULT_SUBJECT, RelayPayload, RelayResult
from contact_relay.infrastructure.email_service import (
    ContactEmail,
    SMTPMailTransport,
    build_mail_transport,
    compose_contact_email,
)
from contact_relay.utils.contact_validation import validate_contact_fields
from contact_relay.utils.sanitize import escape_html

logger = structlog.get_logger(__name__)

ALLOWED_METHOD = "POST"

SENT_MESSAGE = "Email sent successfully"
METHOD_NOT_ALLOWED_ERROR = "Method not allowed"
MISSING_FIELDS_ERROR = "Missing required fields"
DESTINATION_NOT_CONFIGURED_ERROR = "Email destination not configured"
TRANSPORT_CONFIG_ERROR = "Mail transporter configuration error"
SEND_FAILED_ERROR = "Failed to send email"

TransportFactory = Callable[[Settings], SMTPMailTransport]


class RelayHandler:
    """
    Stateless per-call relay. Every successful call sends exactly one email;
    identical calls are not deduplicated and nothing is retried here.
    """

    def __init__(self, settings: Settings, transport_factory: TransportFactory = build_mail_transport):
        self.settings = settings
        self.transport_factory = transport_factory

    def _destination(self) -> str:
        if not self.settings.to_email:
            raise DestinationNotConfiguredError()
        return self.settings.to_email

    async def handle(self, method: str, body: Any) -> RelayResult:
        if method.upper() != ALLOWED_METHOD:
            logger.info("contact_method_not_allowed", method=method)
            return RelayResult.failure(405, METHOD_NOT_ALLOWED_ERROR)

        payload = RelayPayload.from_body(body)

        is_valid, missing = validate_contact_fields(payload.model_dump())
        if not is_valid:
            logger.info("contact_validation_failed", missing_fields=missing)
            return RelayResult.failure(400, MISSING_FIELDS_ERROR)

        contact = ContactEmail(
            name=escape_html(payload.name),
            email=escape_html(payload.email),
            subject=escape_html(payload.subject or DEFAULT_SUBJECT),
            message=escape_html(payload.message),
        )

        try:
            to_email = self._destination()
        except DestinationNotConfiguredError as e:
            logger.error("contact_destination_missing", error=e.message)
            return RelayResult.failure(500, DESTINATION_NOT_CONFIGURED_ERROR)

        try:
            transport = self.transport_factory(self.settings)
        except Exception as e:
            logger.error(
                "contact_transport_config_error",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return RelayResult.failure(500, TRANSPORT_CONFIG_ERROR)

        try:
            message = compose_contact_email(contact, sender_mailbox=transport.sender_mailbox, to_email=to_email)
            await transport.send(message)
        except Exception as e:
            logger.error(
                "contact_send_failed",
                error=str(e),
                error_type=type(e).__name__,
                to_email=to_email,
                exc_info=True,
            )
            return RelayResult.failure(500, SEND_FAILED_ERROR)

        logger.info(
            "contact_email_sent",
            to_email=to_email,
            reply_to=payload.email,
            subject=contact.subject,
        )
        return RelayResult.success(SENT_MESSAGE)
