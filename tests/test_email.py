"""Tests for transactional email rendering, delivery and logging."""

import json

import httpx

from app.config import Settings
from app.services.email import SENDGRID_URL, EmailService, redact_email
from app.storage import Storage


def configured_settings() -> Settings:
    settings = Settings()
    settings.SENDGRID_API_KEY = "SG.test"
    settings.APP_BASE_URL = "https://coach.example.com/"
    return settings


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestRendering:
    def test_verification_email_links_to_token(self, storage: Storage):
        service = EmailService(storage, settings=configured_settings())
        subject, html, text = service.render(
            "email_verification",
            {"first_name": "Alice", "verification_url": "https://coach.example.com/verify-email?token=abc"},
        )
        assert subject == "Verify your email address"
        assert "verify-email?token=abc" in html
        assert "verify-email?token=abc" in text

    def test_html_is_escaped(self, storage: Storage):
        service = EmailService(storage, settings=configured_settings())
        _, html, _ = service.render("welcome", {"first_name": "<script>"})
        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestDelivery:
    def test_sends_through_sendgrid_and_logs(self, storage: Storage):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(202, headers={"X-Message-Id": "sg-123"})

        service = EmailService(storage, settings=configured_settings(), client=mock_client(handler))
        result = service.send_password_reset("bob@example.com", "Bob", "tok123")

        assert result.success is True
        assert result.message_id == "sg-123"
        assert captured["url"] == SENDGRID_URL
        assert captured["auth"] == "Bearer SG.test"
        assert captured["body"]["personalizations"][0]["to"][0]["email"] == "bob@example.com"
        assert "https://coach.example.com/reset-password?token=tok123" in captured["body"]["content"][0]["value"]

        log = storage.get_email_logs_by_recipient("bob@example.com")[0]
        assert log.status == "sent"
        assert log.message_id == "sg-123"
        assert log.sent_at is not None

    def test_provider_error_is_logged_not_raised(self, storage: Storage):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"errors": [{"message": "bad key"}]})

        service = EmailService(storage, settings=configured_settings(), client=mock_client(handler))
        result = service.send_welcome("bob@example.com", "Bob")

        assert result.success is False
        log = storage.get_email_logs_by_recipient("bob@example.com")[0]
        assert log.status == "failed"
        assert log.error_message

    def test_unconfigured_provider_records_failure(self, storage: Storage):
        settings = configured_settings()
        settings.SENDGRID_API_KEY = ""
        service = EmailService(storage, settings=settings)

        result = service.send_welcome("bob@example.com", "Bob")

        assert result.success is False
        assert result.error == "Email service not configured"
        assert storage.get_email_logs_by_recipient("bob@example.com")[0].status == "failed"

    def test_unknown_template(self, storage: Storage):
        service = EmailService(storage, settings=configured_settings())
        result = service.send("bob@example.com", "newsletter", {})
        assert result.success is False
        assert storage.get_email_logs_by_recipient("bob@example.com")[0].template == "newsletter"


def test_redact_email():
    assert redact_email("alice@example.com") == "al***@example.com"
    assert redact_email("garbage") == "redacted"
