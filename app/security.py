"""Password hashing and opaque token generation."""

import secrets
from functools import lru_cache

import bcrypt

DEFAULT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt at a fixed cost factor."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a password against a bcrypt hash. A missing or malformed hash never matches."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@lru_cache
def dummy_password_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash of a throwaway password. Checked against when no account matches, so lookups cost the same."""
    return hash_password(generate_token(), rounds=rounds)


def generate_token() -> str:
    """256-bit random hex token used for sessions, email verification and password resets."""
    return secrets.token_hex(32)
