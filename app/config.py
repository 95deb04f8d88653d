"""Configuration settings for HiPo Coach."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./hipo_coach.db")

    # Passwords and tokens
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    EMAIL_TOKEN_EXPIRE_HOURS: int = int(os.getenv("EMAIL_TOKEN_EXPIRE_HOURS", "24"))
    RESET_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("RESET_TOKEN_EXPIRE_MINUTES", "60"))

    # Sessions
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "sessionToken")
    SESSION_DAYS: int = int(os.getenv("SESSION_DAYS", "7"))
    REMEMBER_ME_DAYS: int = int(os.getenv("REMEMBER_ME_DAYS", "30"))

    # Account lockout
    LOCKOUT_THRESHOLD: int = int(os.getenv("LOCKOUT_THRESHOLD", "5"))
    LOCKOUT_MINUTES: int = int(os.getenv("LOCKOUT_MINUTES", "30"))

    # Rate limiting (limits notation, fixed window)
    RATE_LIMIT_STORAGE_URI: str = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
    SIGNUP_RATE_LIMIT: str = os.getenv("SIGNUP_RATE_LIMIT", "10/15minutes")
    SIGNIN_RATE_LIMIT: str = os.getenv("SIGNIN_RATE_LIMIT", "5/15minutes")
    FORGOT_PASSWORD_RATE_LIMIT: str = os.getenv("FORGOT_PASSWORD_RATE_LIMIT", "3/15minutes")
    RESET_PASSWORD_RATE_LIMIT: str = os.getenv("RESET_PASSWORD_RATE_LIMIT", "5/15minutes")
    CHANGE_PASSWORD_RATE_LIMIT: str = os.getenv("CHANGE_PASSWORD_RATE_LIMIT", "3/15minutes")
    DELETE_ACCOUNT_RATE_LIMIT: str = os.getenv("DELETE_ACCOUNT_RATE_LIMIT", "1/hour")
    CONTACT_RATE_LIMIT: str = os.getenv("CONTACT_RATE_LIMIT", "5/15minutes")
    AI_RATE_LIMIT: str = os.getenv("AI_RATE_LIMIT", "10/hour")

    # LLM provider (any OpenAI-compatible chat completions endpoint)
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_BASE_URL: str | None = os.getenv("OPENAI_BASE_URL") or None
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))

    # Email
    SENDGRID_API_KEY: str = os.getenv("SENDGRID_API_KEY", "")
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "noreply@hipoaicoach.com")
    EMAIL_FROM_NAME: str = os.getenv("EMAIL_FROM_NAME", "HiPo AI Coach")
    EMAIL_TIMEOUT_SECONDS: float = float(os.getenv("EMAIL_TIMEOUT_SECONDS", "10"))
    APP_BASE_URL: str = os.getenv("APP_BASE_URL", "http://localhost:5000")

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    MAX_BODY_SIZE_MB: int = int(os.getenv("MAX_BODY_SIZE_MB", "10"))

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        warnings = []
        if not self.OPENAI_API_KEY:
            warnings.append("OPENAI_API_KEY is not set - coach replies will report that the AI is unavailable")
        if not self.SENDGRID_API_KEY:
            warnings.append("SENDGRID_API_KEY is not set - emails are logged instead of sent")
        if self.is_production and self.APP_BASE_URL.startswith("http://"):
            warnings.append("APP_BASE_URL should use https in production")
        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
