"""Tests for the login session store."""

from datetime import timedelta

from fastapi import Request

from app.dependencies import SESSION_COOKIE_NAME, get_optional_user
from app.models.user import User
from app.services.sessions import DEVICE_INFO_MAX_LENGTH, SessionStore
from app.storage import Storage
from conftest import FakeClock, create_user, sign_in


def make_store(storage: Storage, clock: FakeClock) -> SessionStore:
    return SessionStore(storage, lifetime=timedelta(days=7), remember_lifetime=timedelta(days=30), clock=clock)


class TestSessionStore:
    def test_validate_returns_user_and_touches_last_active(self, storage: Storage, clock: FakeClock, test_user):
        store = make_store(storage, clock)
        token = store.create(test_user.id, device_info="pytest", ip_address="127.0.0.1")

        clock.advance(hours=1)
        assert store.validate(token).id == test_user.id
        assert storage.get_user_session(token).last_active == clock.now

    def test_session_valid_until_exact_expiry(self, storage: Storage, clock: FakeClock, test_user):
        store = make_store(storage, clock)
        token = store.create(test_user.id)

        clock.advance(days=7)
        assert store.validate(token) is not None

        clock.advance(seconds=1)
        assert store.validate(token) is None
        assert storage.get_user_session(token) is None

    def test_remember_me_lasts_30_days(self, storage: Storage, clock: FakeClock, test_user):
        store = make_store(storage, clock)
        token = store.create(test_user.id, remember=True)

        clock.advance(days=29)
        assert store.validate(token) is not None
        clock.advance(days=1, seconds=1)
        assert store.validate(token) is None

    def test_unknown_token(self, storage: Storage, clock: FakeClock):
        assert make_store(storage, clock).validate("missing") is None

    def test_device_info_is_truncated(self, storage: Storage, clock: FakeClock, test_user):
        store = make_store(storage, clock)
        token = store.create(test_user.id, device_info="x" * 500)
        assert len(storage.get_user_session(token).device_info) == DEVICE_INFO_MAX_LENGTH

    def test_list_flags_current_session(self, storage: Storage, clock: FakeClock, test_user):
        store = make_store(storage, clock)
        first = store.create(test_user.id, device_info="Laptop")
        store.create(test_user.id, device_info="Phone")

        sessions = store.list_for_user(test_user.id, current_token=first)
        assert len(sessions) == 2
        assert [s.device_info for s in sessions if s.is_current] == ["Laptop"]

    def test_revoke_by_id_only_for_owner(self, storage: Storage, clock: FakeClock, auth_service, test_user):
        other = create_user(auth_service, email="other@example.com")
        store = make_store(storage, clock)
        store.create(test_user.id)
        session_id = store.list_for_user(test_user.id)[0].id

        assert store.revoke_by_id(other.id, session_id) is False
        assert store.revoke_by_id(test_user.id, session_id) is True
        assert store.list_for_user(test_user.id) == []

    def test_revoke_all(self, storage: Storage, clock: FakeClock, test_user):
        store = make_store(storage, clock)
        tokens = [store.create(test_user.id) for _ in range(3)]

        assert store.revoke_all(test_user.id) == 3
        assert all(store.validate(t) is None for t in tokens)


class TestSessionEndpoints:
    def test_sessions_require_verified_email(self, client, auth_service):
        create_user(auth_service, email="unverified@example.com", verified=False)
        sign_in(client, email="unverified@example.com")

        response = client.get("/api/auth/sessions")
        assert response.status_code == 403
        assert response.json()["code"] == "EMAIL_VERIFICATION_REQUIRED"

    def test_revoke_foreign_session_is_404(self, auth_client, auth_service, storage: Storage):
        other = create_user(auth_service, email="other@example.com")
        foreign = storage.create_user_session(other.id, "f" * 64, auth_service.clock() + timedelta(days=1))

        response = auth_client.delete(f"/api/auth/sessions/{foreign.id}")
        assert response.status_code == 404
        assert storage.get_user_session("f" * 64) is not None


class TestSessionResolution:
    def test_database_error_rolls_back_and_resolves_anonymous(self, auth_service, test_user, monkeypatch):
        db = auth_service.storage.db

        def broken_validate(token):
            db.add(User(email=test_user.email, password_hash="x"))
            db.flush()

        monkeypatch.setattr(auth_service, "validate_session", broken_validate)
        request = Request({"type": "http", "headers": [(b"cookie", f"{SESSION_COOKIE_NAME}=abc".encode())]})

        assert get_optional_user(request, auth_service) is None
        assert request.state.user is None
        assert auth_service.storage.get_user(test_user.id).email == "test@example.com"
