"""Pytest configuration and fixtures."""

import os

# Must be set before the app (and its cached settings) is imported
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = ""
os.environ["SENDGRID_API_KEY"] = ""

from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.clock import utcnow  # noqa: E402
from app.database import Base, get_db, import_models  # noqa: E402
from app.dependencies import get_clock  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.auth import AuthService  # noqa: E402
from app.services.llm import LLMError, get_llm_client  # noqa: E402
from app.storage import Storage  # noqa: E402

PASSWORD = "Str0ng!Pass"


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or utcnow()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeLLM:
    """Stand-in for LLMClient that returns canned replies and records prompts."""

    def __init__(self, replies: list[str] | None = None, configured: bool = True) -> None:
        self.replies = list(replies or [])
        self.configured = configured
        self.calls: list[dict] = []
        self.fail = False

    @property
    def is_configured(self) -> bool:
        return self.configured

    def complete(self, system_prompt: str, user_prompt: str, **kwargs) -> str:
        self.calls.append({"system": system_prompt, "user": user_prompt, **kwargs})
        if self.fail or not self.configured:
            raise LLMError("provider down")
        if self.replies:
            return self.replies.pop(0)
        return "Let's work on that together."


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    import_models()
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="storage")
def storage_fixture(db_session: Session) -> Storage:
    return Storage(db_session)


@pytest.fixture(name="clock")
def clock_fixture() -> FakeClock:
    return FakeClock()


@pytest.fixture(name="fake_llm")
def fake_llm_fixture() -> FakeLLM:
    return FakeLLM()


@pytest.fixture(name="auth_service")
def auth_service_fixture(storage: Storage, clock: FakeClock) -> AuthService:
    return AuthService(storage, clock=clock)


@pytest.fixture(name="client")
def client_fixture(db_session: Session, clock: FakeClock, fake_llm: FakeLLM):
    """Create a test client with overridden DB, clock and LLM dependencies and disabled rate limiting."""
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    limiter.reset()
    app.dependency_overrides.clear()


def create_user(
    auth_service: AuthService,
    email: str = "test@example.com",
    password: str = PASSWORD,
    verified: bool = True,
    first_name: str = "Test",
) -> User:
    """Create a user through the service, optionally verifying the email."""
    result = auth_service.sign_up(email, password, first_name, "User", True, True)
    if verified:
        auth_service.verify_email(result.verification_token)
    return auth_service.storage.get_user_by_email(email)


def sign_in(client: TestClient, email: str = "test@example.com", password: str = PASSWORD, **extra):
    return client.post("/api/auth/signin", json={"email": email, "password": password, **extra})


@pytest.fixture(name="test_user")
def test_user_fixture(auth_service: AuthService) -> User:
    """A verified user with the default password."""
    return create_user(auth_service)


@pytest.fixture(name="auth_client")
def auth_client_fixture(client: TestClient, test_user: User) -> TestClient:
    """Client carrying a session cookie for ``test_user``."""
    response = sign_in(client)
    assert response.status_code == 200
    return client
