"""
core/mailer.py -- Outbound email over SMTP.

send_email() returns True when the message was handed to the SMTP server and
False when mail is not configured or delivery failed. It does not raise for
delivery problems: the contact form stores the submission first, and a mail
outage must not turn a stored submission into a 500.

Transport selection:
  SMTP_SECURE=true  -> implicit TLS (SMTP_SSL, usually port 465)
  SMTP_SECURE=false -> plain connection upgraded with STARTTLS (usually 587)

Layer rule: core/ is the kernel. No imports from api/, auth/, or content/.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr

from core.config import get_settings

logger = logging.getLogger("portfolio.mailer")


def send_email(to: str, subject: str, html: str, text: str | None = None) -> bool:
    """Send a multipart (plain + HTML) email. Returns False if not sent."""
    settings = get_settings()
    if not settings.smtp_host:
        logger.warning("SMTP_HOST is not configured; skipping email to %s", to)
        return False

    try:
        msg = _build_message(to, subject, html, text)
    except ValueError:
        logger.exception("Could not build email to %s", to)
        return False

    context = ssl.create_default_context()
    try:
        if settings.smtp_secure:
            with smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, context=context) as server:
                _login(server)
                server.send_message(msg)
        else:
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
                server.ehlo()
                server.starttls(context=context)
                _login(server)
                server.send_message(msg)
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send email to %s", to)
        return False

    logger.info("Email sent to %s (%s)", to, subject)
    return True


def _header_safe(value: str) -> str:
    """Collapse CR/LF runs so user text can be used in a header."""
    return " ".join(value.split())


def _build_message(to: str, subject: str, html: str, text: str | None) -> EmailMessage:
    """Assemble the message. Raises ValueError for an unusable header value."""
    settings = get_settings()
    sender = settings.email_from_address or settings.smtp_user
    msg = EmailMessage()
    msg["Subject"] = _header_safe(subject)
    msg["From"] = formataddr((settings.email_from_name, sender))
    msg["To"] = to
    msg.set_content(text or html)
    msg.add_alternative(html, subtype="html")
    return msg


def _login(server: smtplib.SMTP) -> None:
    settings = get_settings()
    if settings.smtp_user and settings.smtp_password:
        server.login(settings.smtp_user, settings.smtp_password)
