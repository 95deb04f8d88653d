"""Request-scoped dependencies: services, session resolution and auth gates."""

import logging

from fastapi import Depends, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.clock import Clock, utcnow
from app.config import get_settings
from app.database import get_db
from app.errors import AuthenticationRequired, EmailVerificationRequired
from app.models.user import User
from app.services.auth import AuthService
from app.services.coaching import CoachingService
from app.services.email import EmailService
from app.services.llm import LLMClient, get_llm_client
from app.services.sessions import DEVICE_INFO_MAX_LENGTH
from app.storage import Storage

logger = logging.getLogger("hipo_coach")

settings = get_settings()
SESSION_COOKIE_NAME = settings.SESSION_COOKIE_NAME


# --- Services ---


def get_clock() -> Clock:
    return utcnow


def get_storage(db: Session = Depends(get_db)) -> Storage:
    return Storage(db)


def get_auth_service(storage: Storage = Depends(get_storage), clock: Clock = Depends(get_clock)) -> AuthService:
    return AuthService(storage, clock=clock)


def get_email_service(storage: Storage = Depends(get_storage)) -> EmailService:
    return EmailService(storage)


def get_coaching_service(
    storage: Storage = Depends(get_storage),
    llm: LLMClient = Depends(get_llm_client),
    clock: Clock = Depends(get_clock),
) -> CoachingService:
    return CoachingService(storage, llm, clock=clock)


# --- Session resolution and gates ---


def get_optional_user(request: Request, auth_service: AuthService = Depends(get_auth_service)) -> User | None:
    """Resolve the session cookie to a user, or None. Never raises."""
    request.state.user = None
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return None

    try:
        user = auth_service.validate_session(token)
    except SQLAlchemyError:
        auth_service.storage.db.rollback()
        logger.exception("Session validation error")
        return None

    request.state.user = user
    return user


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    """Require a signed-in, active user. Raises 401 otherwise."""
    if user is None:
        raise AuthenticationRequired()
    if not user.is_active:
        raise AuthenticationRequired("Account is deactivated")
    return user


def require_verified_user(user: User = Depends(get_current_user)) -> User:
    """Require a signed-in user whose email is verified. Raises 403 otherwise."""
    if not user.email_verified:
        raise EmailVerificationRequired(
            details=[{"field": "email", "message": "Please verify your email address to access this feature"}]
        )
    return user


# --- Request metadata and cookies ---


def get_device_info(request: Request) -> str:
    return (request.headers.get("User-Agent") or "Unknown device")[:DEVICE_INFO_MAX_LENGTH]


def get_client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def set_session_cookie(response: Response, token: str, remember_me: bool) -> None:
    """Set the session cookie for 7 days, or 30 with remember-me."""
    days = settings.REMEMBER_ME_DAYS if remember_me else settings.SESSION_DAYS
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        max_age=days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response) -> None:
    """Clear the session cookie."""
    response.delete_cookie(key=SESSION_COOKIE_NAME, httponly=True, samesite="lax", secure=settings.is_production)
