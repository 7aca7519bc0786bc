"""
SMTP mailer for outbound HTML email.
"""

from email.message import EmailMessage

import aiosmtplib

from email_relay.config import SMTPConfig
from email_relay.core.logging import get_logger
from email_relay.core.models import MailRequest

log = get_logger(__name__)


class SMTPMailer:
    """Sends one message per call through the configured SMTP relay."""

    def __init__(self, config: SMTPConfig, logger=None):
        self.config = config
        self.log = logger or log

    def build_message(self, request: MailRequest) -> EmailMessage:
        """
        Build the MIME message.

        With a plain-text body the result is multipart/alternative
        (text first, html second); otherwise a single text/html part.
        """
        message = EmailMessage()
        if self.config.sender:
            message["From"] = self.config.sender
        message["To"] = request.to
        message["Subject"] = request.subject

        if request.text:
            message.set_content(request.text)
            message.add_alternative(request.html, subtype="html")
        else:
            message.set_content(request.html, subtype="html")
        return message

    async def send(self, request: MailRequest) -> None:
        """
        Send a message. Raises on any connection, auth or delivery failure.
        """
        message = self.build_message(request)
        implicit_tls = self.config.implicit_tls

        await aiosmtplib.send(
            message,
            hostname=self.config.host or "localhost",
            port=self.config.port,
            username=self.config.username,
            password=self.config.password,
            use_tls=implicit_tls,
            # None upgrades via STARTTLS when the server offers it
            start_tls=False if implicit_tls else None,
            timeout=self.config.timeout,
        )

        self.log.info(
            "email_sent",
            host=self.config.host,
            port=self.config.port,
            to=request.to,
            has_text=bool(request.text),
        )
