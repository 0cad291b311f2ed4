# app/utils/email.py
from __future__ import annotations

"""
Email utilities: configuration, message structure, and SMTP-based sending.

This module provides:
- EmailMessage: validated email message dataclass.
- EmailConfig: configuration built from application settings.
- build_email: convenience helper to construct EmailMessage.
- send_email: SMTP-based sending.
"""

import logging
import re
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Iterable, Mapping

from app.config.settings import Settings, settings as app_settings

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class EmailError(Exception):
    """Custom exception for email operations."""
    pass


def is_valid_email(email: str) -> bool:
    return bool(email) and bool(EMAIL_REGEX.match(email.strip()))


@dataclass
class EmailMessage:
    """Email message structure with validation."""
    subject: str
    to: list[str]
    body_text: str | None = None
    body_html: str | None = None
    from_email: str | None = None
    headers: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        """Validate email message after initialization."""
        if not self.subject.strip():
            raise EmailError("Subject cannot be empty")

        if not self.to:
            raise EmailError("At least one recipient is required")

        if not self.body_text and not self.body_html:
            raise EmailError("Either body_text or body_html must be provided")

        for email in self.to:
            if not is_valid_email(email):
                raise EmailError(f"Invalid recipient email: {email}")


@dataclass
class EmailConfig:
    """Email configuration."""
    smtp_host: str
    smtp_port: int
    username: str
    password: str
    use_tls: bool = True
    from_email: str | None = None
    from_name: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> EmailConfig:
        """Create email config from application settings."""
        settings = settings or app_settings
        return cls(
            smtp_host=settings.SMTP_HOST,
            smtp_port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_USE_TLS,
            from_email=settings.EMAIL_FROM_ADDRESS,
            from_name=settings.EMAIL_FROM_NAME,
        )

    @property
    def sender(self) -> str:
        address = self.from_email or self.username
        return f"{self.from_name} <{address}>" if self.from_name else address


def build_email(
    *,
    subject: str,
    to: Iterable[str],
    body_text: str | None = None,
    body_html: str | None = None,
    from_email: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> EmailMessage:
    """Helper to construct EmailMessage from typical arguments."""
    return EmailMessage(
        subject=subject,
        to=list(to),
        body_text=body_text,
        body_html=body_html,
        from_email=from_email,
        headers=headers,
    )


def send_email(message: EmailMessage, config: EmailConfig | None = None) -> None:
    """Send an email using SMTP."""
    if config is None:
        config = EmailConfig.from_settings()

    try:
        msg = MIMEMultipart('alternative')
        msg['Subject'] = message.subject
        msg['From'] = message.from_email or config.sender
        msg['To'] = ', '.join(message.to)

        if message.headers:
            for key, value in message.headers.items():
                msg[key] = value

        if message.body_text:
            msg.attach(MIMEText(message.body_text, 'plain'))

        if message.body_html:
            msg.attach(MIMEText(message.body_html, 'html'))

        with smtplib.SMTP(config.smtp_host, config.smtp_port) as server:
            if config.use_tls:
                server.starttls()

            if config.username and config.password:
                server.login(config.username, config.password)

            server.send_message(msg, to_addrs=message.to)

        logger.info(f"Email sent successfully to {len(message.to)} recipients")

    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email: {e}")
        raise EmailError(f"Failed to send email: {e}") from e
