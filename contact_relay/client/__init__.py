"""Client-side contact form controller and its cooldown timer."""

from contact_relay.client.controller import SubmissionController
from contact_relay.client.cooldown import CooldownTimer

__all__ = ["SubmissionController", "CooldownTimer"]
