from fastapi import Depends

from contact_relay.core.config import Settings, get_settings
from contact_relay.infrastructure.email_service import build_mail_transport
from contact_relay.services.contact import RelayHandler
from contact_relay.services.contact.relay_handler import TransportFactory


def get_transport_factory() -> TransportFactory:
    """Dependency for the SMTP transport factory (overridden in tests)."""
    return build_mail_transport


def get_relay_handler(
    settings: Settings = Depends(get_settings),
    transport_factory: TransportFactory = Depends(get_transport_factory),
) -> RelayHandler:
    """
    Dependency building a fresh relay handler per request; no state is
    shared between invocations.
    """
    return RelayHandler(settings=settings, transport_factory=transport_factory)
