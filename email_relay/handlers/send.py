"""
Handler for sending HTML email through SMTP.
"""

from typing import Any

from email_relay.config import Settings, SMTPConfig
from email_relay.core.exceptions import RequestValidationError
from email_relay.core.models import HandlerResult, MailRequest
from email_relay.handlers.base import BaseHandler
from email_relay.handlers.registry import register_handler
from email_relay.services.mailer import SMTPMailer


@register_handler
class SendEmailHandler(BaseHandler):
    """
    Sends {to, subject, html, text?} through the configured relay.

    Any transport failure becomes a 500 with the error string as details.
    """

    name = "send"
    failure_message = "Failed to send email"

    def __init__(self, config: SMTPConfig, mailer: SMTPMailer | None = None, logger=None):
        super().__init__(logger)
        self.config = config
        self.mailer = mailer or SMTPMailer(config, logger=self.log)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SendEmailHandler":
        return cls(settings.smtp_config())

    async def handle(self, payload: dict[str, Any]) -> HandlerResult:
        request = MailRequest.from_dict(payload)

        missing = request.missing_fields()
        if missing:
            raise RequestValidationError(
                f"Missing required fields: {', '.join(missing)}. "
                "to, subject and html are required."
            )

        await self.mailer.send(request)
        return HandlerResult.json(200, {"message": "Email sent successfully"})
