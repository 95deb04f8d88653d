"""Tests for fixed-window rate limiting on auth and AI endpoints."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from app.rate_limit import limiter
from conftest import create_user, sign_in


@pytest.fixture(name="limited_client")
def limited_client_fixture(client: TestClient):
    """Test client with rate limiting switched on and empty counters."""
    limiter.reset()
    limiter.enabled = True
    yield client
    limiter.enabled = False
    limiter.reset()


def parse_reset_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestAuthRateLimits:
    def test_sixth_signin_in_window_is_rejected(self, limited_client: TestClient, test_user):
        for _ in range(5):
            assert sign_in(limited_client, password="Wr0ng!Pass").status_code == 401

        response = sign_in(limited_client)
        assert response.status_code == 429
        body = response.json()
        assert body["error"] == "Too many requests"
        assert "resetTime" in body

        reset_at = parse_reset_time(body["resetTime"])
        expected = datetime.now(UTC) + timedelta(minutes=15)
        assert abs((reset_at - expected).total_seconds()) < 60

    def test_forgot_password_allows_three_per_window(self, limited_client: TestClient):
        for _ in range(3):
            response = limited_client.post("/api/auth/forgot-password", json={"email": "x@example.com"})
            assert response.status_code == 200

        response = limited_client.post("/api/auth/forgot-password", json={"email": "x@example.com"})
        assert response.status_code == 429

    def test_limits_are_per_endpoint(self, limited_client: TestClient):
        for _ in range(3):
            limited_client.post("/api/auth/forgot-password", json={"email": "x@example.com"})

        response = limited_client.post("/api/auth/reset-password", json={"token": "bogus", "password": "N3w!Password"})
        assert response.status_code == 400


class TestAIRateLimit:
    def test_chat_summary_and_analysis_share_ten_per_hour(self, limited_client: TestClient, test_user):
        assert sign_in(limited_client).status_code == 200
        session_id = limited_client.post("/api/coaching-sessions", json={"coachType": "career"}).json()["id"]

        for _ in range(8):
            response = limited_client.post(f"/api/coaching-sessions/{session_id}/chat", json={"message": "Hello"})
            assert response.status_code == 200
        assert limited_client.post(f"/api/coaching-sessions/{session_id}/generate-summary").status_code == 200
        assert limited_client.post(f"/api/coaching-sessions/{session_id}/detailed-analysis").status_code == 200

        response = limited_client.post(f"/api/coaching-sessions/{session_id}/chat", json={"message": "Hello"})
        assert response.status_code == 429
        reset_at = parse_reset_time(response.json()["resetTime"])
        expected = datetime.now(UTC) + timedelta(hours=1)
        assert abs((reset_at - expected).total_seconds()) < 60

    def test_budget_is_per_user(self, limited_client: TestClient, test_user, auth_service):
        create_user(auth_service, email="second@example.com")

        sign_in(limited_client)
        first_session = limited_client.post("/api/coaching-sessions", json={"coachType": "life"}).json()["id"]
        for _ in range(10):
            limited_client.post(f"/api/coaching-sessions/{first_session}/chat", json={"message": "Hi"})
        assert limited_client.post(f"/api/coaching-sessions/{first_session}/chat", json={"message": "Hi"}).status_code == 429

        limited_client.cookies.clear()
        sign_in(limited_client, email="second@example.com")
        second_session = limited_client.post("/api/coaching-sessions", json={"coachType": "life"}).json()["id"]
        response = limited_client.post(f"/api/coaching-sessions/{second_session}/chat", json={"message": "Hi"})
        assert response.status_code == 200

    def test_eleventh_chat_in_an_hour_is_rejected(self, limited_client: TestClient, test_user):
        sign_in(limited_client)
        session_id = limited_client.post("/api/coaching-sessions", json={"coachType": "hipo"}).json()["id"]

        statuses = [
            limited_client.post(f"/api/coaching-sessions/{session_id}/chat", json={"message": "Hi"}).status_code
            for _ in range(11)
        ]
        assert statuses == [200] * 10 + [429]
