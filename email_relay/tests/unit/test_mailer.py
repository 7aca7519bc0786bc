"""Unit tests for the SMTP mailer."""

import pytest
from unittest.mock import AsyncMock, patch

from email_relay.config import SMTPConfig
from email_relay.core.models import MailRequest
from email_relay.services.mailer import SMTPMailer


class TestBuildMessage:
    """Tests for MIME message construction."""

    def test_html_only(self, smtp_config):
        request = MailRequest(to="a@example.com", subject="Hi", html="<p>Hello</p>")
        message = SMTPMailer(smtp_config).build_message(request)

        assert message["From"] == "Bookings <bookings@example.com>"
        assert message["To"] == "a@example.com"
        assert message["Subject"] == "Hi"
        assert message.get_content_type() == "text/html"
        assert "<p>Hello</p>" in message.get_content()

    def test_text_alternative(self, smtp_config, mail_payload):
        message = SMTPMailer(smtp_config).build_message(MailRequest.from_dict(mail_payload))

        assert message.get_content_type() == "multipart/alternative"
        parts = [part.get_content_type() for part in message.iter_parts()]
        assert parts == ["text/plain", "text/html"]

    def test_from_falls_back_to_username(self):
        config = SMTPConfig(host="mail.example.com", username="relay@example.com")
        request = MailRequest(to="a@example.com", subject="Hi", html="<p>x</p>")
        assert SMTPMailer(config).build_message(request)["From"] == "relay@example.com"


class TestSend:
    """Tests for transport selection."""

    @pytest.mark.asyncio
    async def test_starttls_on_587(self, smtp_config, mail_payload, mock_logger):
        with patch("email_relay.services.mailer.aiosmtplib.send", new_callable=AsyncMock) as send:
            await SMTPMailer(smtp_config, logger=mock_logger).send(MailRequest.from_dict(mail_payload))

        kwargs = send.await_args.kwargs
        assert kwargs["hostname"] == "mail.example.com"
        assert kwargs["port"] == 587
        assert kwargs["username"] == "relay@example.com"
        assert kwargs["password"] == "secret"
        assert kwargs["use_tls"] is False
        assert kwargs["start_tls"] is None
        mock_logger.info.assert_called_once()
        assert mock_logger.info.call_args.args[0] == "email_sent"

    @pytest.mark.asyncio
    async def test_implicit_tls_on_465(self, mail_payload):
        config = SMTPConfig(host="mail.example.com", port=465, username="u", password="p")
        with patch("email_relay.services.mailer.aiosmtplib.send", new_callable=AsyncMock) as send:
            await SMTPMailer(config).send(MailRequest.from_dict(mail_payload))

        kwargs = send.await_args.kwargs
        assert kwargs["use_tls"] is True
        assert kwargs["start_tls"] is False

    @pytest.mark.asyncio
    async def test_errors_propagate(self, smtp_config, mail_payload):
        with patch(
            "email_relay.services.mailer.aiosmtplib.send",
            new_callable=AsyncMock,
            side_effect=ConnectionRefusedError("refused"),
        ):
            with pytest.raises(ConnectionRefusedError):
                await SMTPMailer(smtp_config).send(MailRequest.from_dict(mail_payload))
