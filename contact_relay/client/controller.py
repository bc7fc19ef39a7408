"""
Submission Controller for the contact form.

Sits between user input and the relay endpoint: holds the form fields,
runs the blank-field and honeypot checks before any request, escapes the
payload, posts it, and maps the reply onto a SubmissionStatus. After a
successful send the form is locked for a cooldown period.
"""

from typing import Any, Dict, Optional

import httpx
import structlog

from contact_relay.client.cooldown import DEFAULT_COOLDOWN_SECONDS, CooldownTimer
from contact_relay.core.exceptions import UnknownFieldError
from contact_relay.domain.schemas import (
    DEFAULT_SUBJECT,
    RelayPayload,
    SubmissionForm,
    SubmissionOutcome,
    SubmissionStatus,
)
from contact_relay.state_machines import SubmissionFlowMachine
from contact_relay.utils.contact_validation import is_honeypot_triggered, validate_contact_fields
from contact_relay.utils.sanitize import sanitize_fields

logger = structlog.get_logger(__name__)

DEFAULT_ENDPOINT = "/api/contact"

INCOMPLETE_FORM_MESSAGE = "Please complete name, email and message."
UNABLE_TO_SEND_MESSAGE = "Unable to send message."
DEFAULT_SUCCESS_MESSAGE = "Message sent — thank you!"
DEFAULT_FAILURE_MESSAGE = "Failed to send message. Try again later."
NETWORK_ERROR_MESSAGE = "Network error. Please try again later."


class SubmissionController:
    """
    Client-side contact form controller.

    Only one submission is ever in flight: submit() is ignored while a
    request is pending or while the post-success cooldown is running.
    Failures never start the cooldown, so a corrected form can be resent
    straight away. Nothing is retried automatically.

    Usage:
        async with httpx.AsyncClient(base_url="https://example.dev") as http:
            async with SubmissionController(http) as controller:
                controller.update_field("name", "Jane")
                ...
                status = await controller.submit()
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: str = DEFAULT_ENDPOINT,
        cooldown_seconds: int = DEFAULT_COOLDOWN_SECONDS,
        cooldown: Optional[CooldownTimer] = None,
    ):
        self.client = client
        self.endpoint = endpoint
        self.cooldown_seconds = cooldown_seconds
        self.cooldown = cooldown or CooldownTimer()
        self.form = SubmissionForm()
        self.status = SubmissionStatus()
        self.flow = SubmissionFlowMachine(flow_id=endpoint)

    @property
    def is_pending(self) -> bool:
        return self.flow.in_flight

    @property
    def submit_disabled(self) -> bool:
        """Whether the submit button should be disabled."""
        return self.is_pending or self.cooldown.active

    def update_field(self, name: str, value: str) -> None:
        if name not in SubmissionForm.model_fields:
            raise UnknownFieldError(name)
        setattr(self.form, name, value)

    def _set_status(self, outcome: SubmissionOutcome, message: str = "") -> None:
        self.status = SubmissionStatus(outcome=outcome, message=message)

    def _fail(self, message: str) -> SubmissionStatus:
        self.flow.reject()
        self._set_status(SubmissionOutcome.FAILURE, message)
        return self.status

    def _build_payload(self) -> RelayPayload:
        fields = sanitize_fields(
            {
                "name": self.form.name,
                "email": self.form.email,
                "subject": self.form.subject or DEFAULT_SUBJECT,
                "message": self.form.message,
            },
            trim=True,
        )
        return RelayPayload(**fields)

    async def submit(self) -> SubmissionStatus:
        """
        Validate and send the form.

        Returns:
            The status after this call (unchanged when the call was ignored)
        """
        if self.cooldown.active:
            logger.info("contact_submit_ignored", reason="cooldown", remaining=self.cooldown.remaining)
            return self.status
        if self.is_pending:
            logger.info("contact_submit_ignored", reason="in_flight")
            return self.status

        is_valid, missing = validate_contact_fields(self.form.model_dump())
        if not is_valid:
            logger.info("contact_submit_incomplete", missing_fields=missing)
            return self._fail(INCOMPLETE_FORM_MESSAGE)

        if is_honeypot_triggered(self.form.website):
            # Same shape as any other failure so a bot learns nothing.
            logger.info("contact_submit_honeypot")
            return self._fail(UNABLE_TO_SEND_MESSAGE)

        payload = self._build_payload()
        self.flow.begin()
        self._set_status(SubmissionOutcome.PENDING)

        try:
            response = await self.client.post(self.endpoint, json=payload.model_dump())
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("contact_submit_network_error", error=str(e), error_type=type(e).__name__)
            return self._fail(NETWORK_ERROR_MESSAGE)
        except Exception as e:
            # Pending must always be left, or the in-flight guard locks the form.
            logger.error("contact_submit_unexpected_error", error=str(e), exc_info=True)
            return self._fail(NETWORK_ERROR_MESSAGE)

        if not isinstance(data, dict):
            logger.warning("contact_submit_malformed_response", status_code=response.status_code)
            return self._fail(NETWORK_ERROR_MESSAGE)

        if response.is_success:
            return self._succeed(data)

        logger.info("contact_submit_rejected", status_code=response.status_code)
        return self._fail(self._text(data, "error") or DEFAULT_FAILURE_MESSAGE)

    def _succeed(self, data: Dict[str, Any]) -> SubmissionStatus:
        self.flow.resolve()
        self._set_status(SubmissionOutcome.SUCCESS, self._text(data, "message") or DEFAULT_SUCCESS_MESSAGE)
        self.form.clear()
        self.cooldown.start(self.cooldown_seconds)
        logger.info("contact_submit_sent", cooldown_seconds=self.cooldown_seconds)
        return self.status

    @staticmethod
    def _text(data: Dict[str, Any], key: str) -> str:
        value = data.get(key)
        return value if isinstance(value, str) else ""

    def close(self) -> None:
        """Teardown: release the cooldown task."""
        self.cooldown.release()

    async def __aenter__(self) -> "SubmissionController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()
