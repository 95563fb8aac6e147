"""Unit tests for core/mailer.py -- SMTP delivery.

smtplib is patched throughout; no test opens a network connection.

Covers:
- unconfigured SMTP_HOST short-circuits to False
- STARTTLS path (default) and implicit TLS path (SMTP_SECURE=true)
- login only when both SMTP_USER and SMTP_PASSWORD are set
- delivery errors are logged and reported as False, never raised
- line breaks in the subject are flattened; unusable headers count as not sent
"""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from core.config import get_settings


@pytest.fixture
def smtp_settings(monkeypatch):
    """Configure SMTP through the environment and reset the settings cache around the test."""
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "587")
    monkeypatch.setenv("SMTP_USER", "mailer")
    monkeypatch.setenv("SMTP_PASSWORD", "pw")
    monkeypatch.setenv("EMAIL_FROM_ADDRESS", "site@example.com")
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


def _send(**kwargs) -> bool:
    from core.mailer import send_email

    return send_email("owner@example.com", "Hello", "<p>Hi</p>", "Hi", **kwargs)


class TestSendEmail:
    def test_unconfigured_host_skips(self, monkeypatch) -> None:
        monkeypatch.setenv("SMTP_HOST", "")
        get_settings.cache_clear()
        try:
            with patch("core.mailer.smtplib.SMTP") as smtp:
                assert _send() is False
                smtp.assert_not_called()
        finally:
            get_settings.cache_clear()

    def test_starttls_delivery(self, smtp_settings) -> None:
        with patch("core.mailer.smtplib.SMTP") as smtp:
            server = smtp.return_value.__enter__.return_value
            assert _send() is True

        smtp.assert_called_once_with("smtp.example.com", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "pw")
        message = server.send_message.call_args.args[0]
        assert message["To"] == "owner@example.com"
        assert message["Subject"] == "Hello"
        assert "site@example.com" in message["From"]

    def test_implicit_tls_delivery(self, smtp_settings) -> None:
        smtp_settings.setenv("SMTP_SECURE", "true")
        smtp_settings.setenv("SMTP_PORT", "465")
        get_settings.cache_clear()
        with patch("core.mailer.smtplib.SMTP_SSL") as smtp_ssl, patch("core.mailer.smtplib.SMTP") as smtp:
            assert _send() is True
        smtp_ssl.assert_called_once()
        assert smtp_ssl.call_args.args[:2] == ("smtp.example.com", 465)
        smtp.assert_not_called()

    def test_no_login_without_credentials(self, smtp_settings) -> None:
        smtp_settings.setenv("SMTP_PASSWORD", "")
        get_settings.cache_clear()
        with patch("core.mailer.smtplib.SMTP") as smtp:
            server = smtp.return_value.__enter__.return_value
            assert _send() is True
        server.login.assert_not_called()

    def test_delivery_failure_returns_false(self, smtp_settings) -> None:
        failing = MagicMock()
        failing.__enter__.return_value.send_message.side_effect = smtplib.SMTPRecipientsRefused({})
        with patch("core.mailer.smtplib.SMTP", return_value=failing):
            assert _send() is False

    def test_connection_error_returns_false(self, smtp_settings) -> None:
        with patch("core.mailer.smtplib.SMTP", side_effect=ConnectionRefusedError()):
            assert _send() is False

    def test_multiline_subject_is_flattened(self, smtp_settings) -> None:
        from core.mailer import send_email

        with patch("core.mailer.smtplib.SMTP") as smtp:
            server = smtp.return_value.__enter__.return_value
            assert send_email("owner@example.com", "Hi\nthere\r\nfriend", "<p>Hi</p>") is True
        assert server.send_message.call_args.args[0]["Subject"] == "Hi there friend"

    def test_unusable_header_returns_false(self, smtp_settings) -> None:
        from core.mailer import send_email

        with patch("core.mailer.smtplib.SMTP") as smtp:
            assert send_email("owner@example.com\nBcc: x@example.com", "Hello", "<p>Hi</p>") is False
        smtp.assert_not_called()
