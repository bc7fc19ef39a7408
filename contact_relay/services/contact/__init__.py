from contact_relay.services.contact.relay_handler import RelayHandler

__all__ = ["RelayHandler"]
