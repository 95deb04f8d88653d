"""Application error taxonomy.

Services raise these; ``main.py`` renders them as ``{"error": ..., "details": ...}``.
"""

from datetime import datetime
from typing import Any


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP response."""

    status_code = 400
    message = "Request failed"
    code: str | None = None

    def __init__(self, message: str | None = None, details: list[dict[str, Any]] | None = None) -> None:
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        if self.code:
            body["code"] = self.code
        return body


class ValidationError(AppError):
    status_code = 400
    message = "Invalid input data"


class DuplicateAccount(AppError):
    status_code = 400
    message = "An account with this email already exists"


class InvalidCredentials(AppError):
    status_code = 401
    message = "Invalid email or password"


class AccountLocked(AppError):
    status_code = 401
    message = "Account is temporarily locked due to too many failed attempts"


class InvalidToken(AppError):
    status_code = 400
    message = "Invalid or expired token"


class AuthenticationRequired(AppError):
    status_code = 401
    message = "Authentication required"


class EmailVerificationRequired(AppError):
    status_code = 403
    message = "Email verification required"
    code = "EMAIL_VERIFICATION_REQUIRED"


class Forbidden(AppError):
    status_code = 403
    message = "Access denied"


class NotFound(AppError):
    status_code = 404
    message = "Not found"


class RateLimited(AppError):
    status_code = 429
    message = "Too many requests"

    def __init__(self, reset_time: datetime | None = None, message: str | None = None) -> None:
        super().__init__(message)
        self.reset_time = reset_time

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["message"] = "Rate limit exceeded. Please try again later."
        if self.reset_time is not None:
            body["resetTime"] = self.reset_time.isoformat().replace("+00:00", "Z")
        return body
