"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from typing import Any, Literal

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel, Password


class SignUpRequest(CamelModel):
    email: EmailStr
    password: Password
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    terms_accepted: Literal[True]
    privacy_accepted: Literal[True]


class SignUpResponse(CamelModel):
    message: str
    user_id: int
    email: str
    email_verified: bool


class SignInRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)
    remember_me: bool = False


class UserResponse(CamelModel):
    id: int
    email: str
    first_name: str | None
    last_name: str | None
    email_verified: bool
    current_role: str | None
    industry: str | None
    career_stage: str | None
    five_year_goal: str | None = None
    biggest_challenge: str | None = None
    work_environment: str | None = None
    primary_coaches: list[str] | None = None
    mfa_enabled: bool = False
    last_login_at: datetime | None = None


class SignInResponse(CamelModel):
    message: str
    user: UserResponse


class MeResponse(CamelModel):
    user: UserResponse


class VerifyEmailRequest(CamelModel):
    token: str = Field(min_length=1)


class VerifyEmailResponse(CamelModel):
    message: str
    email: str


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1)
    password: Password


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: Password


class SessionResponse(CamelModel):
    id: int
    device_info: str | None
    ip_address: str | None
    last_active: datetime
    created_at: datetime
    expires_at: datetime
    is_current: bool


class SessionListResponse(CamelModel):
    sessions: list[SessionResponse]


class DeleteAccountResponse(CamelModel):
    message: str
    export_data: dict[str, Any]
