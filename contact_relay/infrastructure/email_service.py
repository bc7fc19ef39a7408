"""
Email service for relaying contact form submissions over SMTP.
"""
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

import structlog
from starlette.concurrency import run_in_threadpool

from contact_relay.core.config import Settings
from contact_relay.core.exceptions import MailDispatchError, MailTransportConfigError
from contact_relay.utils.sanitize import newlines_to_breaks, strip_header_breaks

logger = structlog.get_logger()

IMPLICIT_TLS_PORT = 465
SUBJECT_PREFIX = "Contact form: "


@dataclass(frozen=True)
class ContactEmail:
    """Already-escaped submission values ready to be placed in an email."""

    name: str
    email: str
    subject: str
    message: str


class SMTPMailTransport:
    """
    One SMTP delivery target.

    Port 465 connects with implicit TLS; any other port connects in plain
    text and upgrades with STARTTLS when the server offers it.
    """

    def __init__(
        self,
        host: Optional[str],
        port: str | int,
        username: Optional[str],
        password: Optional[str] = None,
        timeout: float = 20.0,
    ):
        if not host:
            raise MailTransportConfigError("SMTP_HOST is not set")
        if not username:
            raise MailTransportConfigError("SMTP_USER is not set")
        try:
            port_number = int(port)
        except (TypeError, ValueError):
            raise MailTransportConfigError(f"SMTP_PORT is not a number: {port!r}")
        if not 0 < port_number < 65536:
            raise MailTransportConfigError(f"SMTP_PORT out of range: {port_number}")

        self.host = host
        self.port = port_number
        self.username = username
        self.password = password
        self.timeout = timeout

    @property
    def implicit_tls(self) -> bool:
        return self.port == IMPLICIT_TLS_PORT

    @property
    def sender_mailbox(self) -> str:
        return self.username

    def _open(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.implicit_tls:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)

        smtp = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls(context=context)
                smtp.ehlo()
        except Exception:
            smtp.close()
            raise
        return smtp

    def _send_sync(self, message: EmailMessage) -> None:
        with self._open() as smtp:
            if self.password:
                smtp.login(self.username, self.password)
            smtp.send_message(message)

    async def send(self, message: EmailMessage) -> None:
        """
        Deliver one message. smtplib blocks, so it runs in the threadpool.

        Raises:
            MailDispatchError: on any SMTP, TLS or socket failure
        """
        try:
            await run_in_threadpool(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as e:
            raise MailDispatchError(
                "SMTP delivery failed",
                details={"host": self.host, "port": self.port, "error_type": type(e).__name__},
            ) from e


def build_mail_transport(settings: Settings) -> SMTPMailTransport:
    """Build the SMTP transport from SMTP_HOST/SMTP_PORT/SMTP_USER/SMTP_PASS."""
    return SMTPMailTransport(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_pass,
        timeout=settings.smtp_timeout,
    )


def render_html_body(contact: ContactEmail) -> str:
    return f"""
<div style="font-family:system-ui,Segoe UI,Roboto,Helvetica,Arial,sans-serif;color:#111;">
  <h2>New contact from {contact.name}</h2>
  <p><strong>From:</strong> {contact.name} &lt;{contact.email}&gt;</p>
  <p><strong>Subject:</strong> {contact.subject}</p>
  <hr />
  <div style="white-space:pre-wrap;">{newlines_to_breaks(contact.message)}</div>
  <hr />
  <p style="font-size:12px;color:#666">This message was sent from your website contact form.</p>
</div>
    """.strip()


def render_text_body(contact: ContactEmail) -> str:
    return f"{contact.message}\n\nFrom: {contact.name} <{contact.email}>"


def compose_contact_email(contact: ContactEmail, sender_mailbox: str, to_email: str) -> EmailMessage:
    """
    Build the notification email.

    The From mailbox is the SMTP account so SPF/DKIM/DMARC pass; the
    submitter's name is only the display name. Replies go to the submitter
    through Reply-To.
    """
    message = EmailMessage()
    message["From"] = formataddr((strip_header_breaks(contact.name), sender_mailbox))
    message["To"] = to_email
    message["Subject"] = strip_header_breaks(SUBJECT_PREFIX + contact.subject)
    message["Reply-To"] = strip_header_breaks(contact.email)
    message.set_content(render_text_body(contact))
    message.add_alternative(render_html_body(contact), subtype="html")
    return message
