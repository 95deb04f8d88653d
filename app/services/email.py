"""Transactional email delivery through the SendGrid v3 HTTP API."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from sqlalchemy.exc import SQLAlchemyError

from app.clock import utcnow
from app.config import Settings, get_settings
from app.storage import Storage

logger = logging.getLogger("hipo_coach")

SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"
TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

SUBJECTS = {
    "welcome": "Welcome to HiPo AI Coach, {first_name}!",
    "email_verification": "Verify your email address",
    "password_reset": "Reset your HiPo AI Coach password",
    "contact_response": "We received your message: {original_subject}",
}

_templates = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


@dataclass
class EmailResult:
    """Outcome of a send attempt."""

    success: bool
    message_id: str | None = None
    error: str | None = None


def redact_email(email: str) -> str:
    """Redact an email address for logging."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class EmailService:
    """Renders templates, sends them and records every attempt in the email log.

    Sending never raises: provider and template failures come back as an
    unsuccessful ``EmailResult`` so the caller's primary operation can proceed.
    """

    def __init__(self, storage: Storage, settings: Settings | None = None, client: httpx.Client | None = None) -> None:
        settings = settings or get_settings()
        self.storage = storage
        self.api_key = settings.SENDGRID_API_KEY
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME
        self.base_url = settings.APP_BASE_URL.rstrip("/")
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def render(self, template: str, context: dict[str, Any]) -> tuple[str, str, str]:
        """Return (subject, html, text) for a template name."""
        if template not in SUBJECTS:
            raise TemplateNotFound(template)
        context = {"app_url": self.base_url, **context}
        subject = SUBJECTS[template].format(**context)
        html = _templates.get_template(f"{template}.html").render(**context)
        text = _templates.get_template(f"{template}.txt").render(**context)
        return subject, html, text

    def send(self, to: str, template: str, context: dict[str, Any]) -> EmailResult:
        """Render and deliver one email."""
        try:
            return self._send(to, template, context)
        except SQLAlchemyError as e:
            self.storage.db.rollback()
            logger.exception("Email log write failed for %s", redact_email(to))
            return EmailResult(success=False, error=str(e))

    def _send(self, to: str, template: str, context: dict[str, Any]) -> EmailResult:
        try:
            subject, html, text = self.render(template, context)
        except (TemplateNotFound, KeyError) as e:
            error = f"Unknown email template or missing field: {e}"
            logger.error(error)
            self.storage.create_email_log(to_email=to, subject="Unknown template", template=template, status="failed", error_message=error)
            return EmailResult(success=False, error=error)

        log = self.storage.create_email_log(to_email=to, subject=subject, template=template, status="pending")

        if not self.is_configured:
            logger.info("EMAIL (not sent, provider not configured) to=%s subject=%s", redact_email(to), subject)
            logger.debug("EMAIL body: %s", text)
            self.storage.update_email_log(log, status="failed", error_message="Email service not configured")
            return EmailResult(success=False, error="Email service not configured")

        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text},
                {"type": "text/html", "value": html},
            ],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            if self._client is not None:
                response = self._client.post(SENDGRID_URL, json=payload, headers=headers, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.post(SENDGRID_URL, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("SendGrid email error for %s: %s", redact_email(to), e)
            self.storage.update_email_log(log, status="failed", error_message=str(e))
            return EmailResult(success=False, error=str(e))

        message_id = response.headers.get("X-Message-Id")
        self.storage.update_email_log(log, status="sent", message_id=message_id, sent_at=utcnow())
        return EmailResult(success=True, message_id=message_id)

    # --- Convenience senders ---

    def send_welcome(self, to: str, first_name: str | None) -> EmailResult:
        return self.send(to, "welcome", {"first_name": first_name or "there"})

    def send_email_verification(self, to: str, first_name: str | None, token: str) -> EmailResult:
        url = f"{self.base_url}/verify-email?token={token}"
        return self.send(to, "email_verification", {"first_name": first_name or "there", "verification_url": url})

    def send_password_reset(self, to: str, first_name: str | None, token: str) -> EmailResult:
        url = f"{self.base_url}/reset-password?token={token}"
        return self.send(to, "password_reset", {"first_name": first_name or "there", "reset_url": url})

    def send_contact_response(self, to: str, name: str, original_subject: str, original_message: str) -> EmailResult:
        return self.send(
            to,
            "contact_response",
            {
                "name": name,
                "original_subject": original_subject,
                "original_message": original_message,
                "help_url": f"{self.base_url}/help",
            },
        )
