"""Authentication API endpoints."""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from app.config import get_settings
from app.dependencies import (
    SESSION_COOKIE_NAME,
    clear_session_cookie,
    get_auth_service,
    get_client_ip,
    get_current_user,
    get_device_info,
    get_email_service,
    require_verified_user,
    set_session_cookie,
)
from app.errors import NotFound
from app.models.user import User
from app.rate_limit import limiter
from app.schemas.auth import (
    ChangePasswordRequest,
    DeleteAccountResponse,
    ForgotPasswordRequest,
    MeResponse,
    ResetPasswordRequest,
    SessionListResponse,
    SessionResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    UserResponse,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from app.schemas.common import MessageResponse
from app.services.auth import AuthService
from app.services.email import EmailResult, EmailService

logger = logging.getLogger("hipo_coach")

router = APIRouter(prefix="/api/auth", tags=["Authentication"])

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent."


def _warn_undelivered(result: EmailResult, kind: str) -> None:
    if not result.success:
        logger.warning("%s email not delivered: %s", kind, result.error)


@router.post("/signup", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(lambda: get_settings().SIGNUP_RATE_LIMIT)
def sign_up(
    request: Request,
    body: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
    email_service: EmailService = Depends(get_email_service),
) -> SignUpResponse:
    """Create an account and send the welcome and verification emails."""
    result = auth_service.sign_up(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        terms_accepted=body.terms_accepted,
        privacy_accepted=body.privacy_accepted,
    )
    user = result.user

    _warn_undelivered(email_service.send_welcome(user.email, user.first_name), "Welcome")
    _warn_undelivered(
        email_service.send_email_verification(user.email, user.first_name, result.verification_token), "Verification"
    )

    return SignUpResponse(
        message="Account created successfully. Please check your email for verification.",
        user_id=user.id,
        email=user.email,
        email_verified=user.email_verified,
    )


@router.post("/signin", response_model=SignInResponse)
@limiter.limit(lambda: get_settings().SIGNIN_RATE_LIMIT)
def sign_in(
    request: Request,
    response: Response,
    body: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SignInResponse:
    """Authenticate and receive a session cookie."""
    result = auth_service.sign_in(
        email=body.email,
        password=body.password,
        remember_me=body.remember_me,
        device_info=get_device_info(request),
        ip_address=get_client_ip(request),
    )
    set_session_cookie(response, result.session_token, body.remember_me)
    return SignInResponse(message="Signed in successfully", user=UserResponse.model_validate(result.user))


@router.post("/signout", response_model=MessageResponse)
def sign_out(
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the current session and clear the cookie."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        auth_service.sign_out(token)
    clear_session_cookie(response)
    return MessageResponse(message="Signed out successfully")


@router.post("/verify-email", response_model=VerifyEmailResponse)
def verify_email(body: VerifyEmailRequest, auth_service: AuthService = Depends(get_auth_service)) -> VerifyEmailResponse:
    """Confirm an email address with the token sent at sign-up."""
    email = auth_service.verify_email(body.token)
    return VerifyEmailResponse(message="Email verified successfully", email=email)


@router.post("/forgot-password", response_model=MessageResponse)
@limiter.limit(lambda: get_settings().FORGOT_PASSWORD_RATE_LIMIT)
def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
    email_service: EmailService = Depends(get_email_service),
) -> MessageResponse:
    """Request a password reset. The response never reveals whether the email is registered."""
    token = auth_service.request_password_reset(body.email)

    if token:
        user = auth_service.storage.get_user_by_email(body.email)
        _warn_undelivered(email_service.send_password_reset(user.email, user.first_name, token), "Password reset")

    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
@limiter.limit(lambda: get_settings().RESET_PASSWORD_RATE_LIMIT)
def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Reset password using a valid token."""
    auth_service.reset_password(body.token, body.password)
    return MessageResponse(message="Password reset successfully")


@router.post("/change-password", response_model=MessageResponse)
@limiter.limit(lambda: get_settings().CHANGE_PASSWORD_RATE_LIMIT)
def change_password(
    request: Request,
    response: Response,
    body: ChangePasswordRequest,
    user: User = Depends(require_verified_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Change password and sign out of every session, including this one."""
    auth_service.change_password(user, body.current_password, body.new_password)
    clear_session_cookie(response)
    return MessageResponse(message="Password changed successfully. Please sign in again.")


@router.get("/me", response_model=MeResponse)
def me(user: User = Depends(get_current_user)) -> MeResponse:
    """Return the signed-in user."""
    return MeResponse(user=UserResponse.model_validate(user))


@router.get("/sessions", response_model=SessionListResponse)
def list_sessions(
    request: Request,
    user: User = Depends(require_verified_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> SessionListResponse:
    """List the user's active sessions, flagging the one making this request."""
    sessions = auth_service.list_sessions(user, request.cookies.get(SESSION_COOKIE_NAME))
    return SessionListResponse(sessions=[SessionResponse.model_validate(s) for s in sessions])


@router.delete("/sessions/{session_id}", response_model=MessageResponse)
def revoke_session(
    session_id: int,
    user: User = Depends(require_verified_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Sign out one of the user's devices."""
    if not auth_service.revoke_session(user, session_id):
        raise NotFound("Session not found")
    return MessageResponse(message="Session revoked successfully")


@router.delete("/account", response_model=DeleteAccountResponse)
@limiter.limit(lambda: get_settings().DELETE_ACCOUNT_RATE_LIMIT)
def delete_account(
    request: Request,
    response: Response,
    user: User = Depends(require_verified_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> DeleteAccountResponse:
    """Delete the account and all owned data, returning a copy of that data."""
    export_data = auth_service.delete_account(user)
    clear_session_cookie(response)
    return DeleteAccountResponse(message="Account deleted successfully", export_data=export_data)
