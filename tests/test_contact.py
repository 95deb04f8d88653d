"""Tests for the contact-support form."""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.contact import ContactMessage, EmailLog

CONTACT_BODY = {
    "name": "Priya",
    "email": "priya@example.com",
    "subject": "Billing question",
    "message": "How do I change my plan?",
}


class TestContact:
    def test_anonymous_submission(self, client: TestClient, db_session: Session):
        response = client.post("/api/contact", json=CONTACT_BODY)
        assert response.status_code == 201
        data = response.json()
        assert "24 hours" in data["message"]

        contact = db_session.get(ContactMessage, data["contactId"])
        assert contact.user_id is None
        assert contact.status == "open"
        assert contact.category == "general"

    def test_signed_in_user_is_attached(self, auth_client: TestClient, test_user, db_session: Session):
        response = auth_client.post("/api/contact", json=CONTACT_BODY)
        contact = db_session.get(ContactMessage, response.json()["contactId"])
        assert contact.user_id == test_user.id

    def test_auto_response_is_attempted(self, client: TestClient, db_session: Session):
        client.post("/api/contact", json=CONTACT_BODY)
        log = db_session.query(EmailLog).filter_by(to_email="priya@example.com").one()
        assert log.template == "contact_response"
        assert log.subject == "We received your message: Billing question"

    def test_missing_fields(self, client: TestClient):
        response = client.post("/api/contact", json={"name": "Priya"})
        assert response.status_code == 400
        fields = {d["field"] for d in response.json()["details"]}
        assert {"email", "subject", "message"} <= fields


class TestPlatform:
    def test_health(self, client: TestClient):
        assert client.get("/api/health").json()["status"] == "ok"

    def test_security_headers(self, client: TestClient):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "default-src 'self'" in response.headers["Content-Security-Policy"]

    def test_unknown_route_uses_error_body(self, client: TestClient):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
