import asyncio
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from urllib.parse import urlencode

import aiosmtplib

from boilerplate.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class SmtpMailService:
    """
    Deliver mail through the configured SMTP server.

    Both send methods report failure as False rather than raising.
    """

    def __init__(self, config: Settings | None = None):
        self.config = config or default_settings

    @property
    def is_configured(self) -> bool:
        return all([
            self.config.smtp_host,
            self.config.smtp_port,
            self.config.smtp_user,
            self.config.smtp_password,
            self.config.smtp_from_email,
        ])

    def build_message(
        self,
        subject: str,
        body: str,
        to: str,
        from_address: str | None = None,
        as_html: bool = True,
    ) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = from_address or self.config.smtp_from_email
        message["To"] = to
        message.attach(MIMEText(body, "html" if as_html else "plain"))
        return message

    def _send_kwargs(self) -> dict:
        send_kwargs = {
            "hostname": self.config.smtp_host,
            "port": self.config.smtp_port,
            "username": self.config.smtp_user,
            "password": self.config.smtp_password,
        }

        # Handle TLS based on smtp_use_tls configuration
        if self.config.smtp_use_tls:
            # Port 465 uses direct TLS, everything else STARTTLS
            if self.config.smtp_port == 465:
                send_kwargs["use_tls"] = True
            else:
                send_kwargs["start_tls"] = True
        return send_kwargs

    async def send_mail_async(
        self,
        subject: str,
        body: str,
        to: str,
        from_address: str | None = None,
        as_html: bool = True,
    ) -> bool:
        if not self.is_configured:
            logger.warning("SMTP not configured - cannot send mail to %s", to)
            return False

        message = self.build_message(subject, body, to, from_address, as_html)
        try:
            await aiosmtplib.send(message, **self._send_kwargs())
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Failed to send mail to %s: %s", to, e)
            return False
        return True

    def send_mail(
        self,
        subject: str,
        body: str,
        to: str,
        from_address: str | None = None,
        as_html: bool = True,
    ) -> bool:
        """Blocking variant of send_mail_async; not for use inside a running event loop."""
        return asyncio.run(self.send_mail_async(subject, body, to, from_address, as_html))


def build_reset_link(email: str, token: str, base_url: str) -> str:
    query = urlencode({"token": token, "email": email})
    return f"{base_url.rstrip('/')}/reset-password?{query}"


def password_reset_body(email: str, token: str, base_url: str, expire_minutes: int) -> str:
    reset_link = build_reset_link(email, token, base_url)
    return f"""
<html>
  <body>
    <h3>Password Reset</h3>
    <p>You requested a password reset for your account.</p>
    <p><a href="{reset_link}">{reset_link}</a></p>
    <p>This link will expire in {expire_minutes} minutes.</p>
    <p>If you did not request this, please ignore this email.</p>
  </body>
</html>
"""
