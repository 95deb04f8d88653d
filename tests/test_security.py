"""Tests for password hashing, tokens and password rules."""

import pytest

from app.schemas.common import check_password_strength
from app.security import generate_token, hash_password, verify_password


class TestPasswordHashing:
    def test_hash_round_trip(self):
        hashed = hash_password("Str0ng!Pass", rounds=4)
        assert hashed != "Str0ng!Pass"
        assert verify_password("Str0ng!Pass", hashed)
        assert not verify_password("Str0ng!Pas", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("Str0ng!Pass", rounds=4) != hash_password("Str0ng!Pass", rounds=4)

    def test_cost_factor_is_encoded(self):
        assert hash_password("Str0ng!Pass", rounds=5).startswith("$2b$05$")

    def test_missing_or_garbage_hash_never_matches(self):
        assert not verify_password("anything", None)
        assert not verify_password("anything", "")
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestTokens:
    def test_token_is_64_hex_chars(self):
        token = generate_token()
        assert len(token) == 64
        int(token, 16)

    def test_tokens_are_unique(self):
        assert len({generate_token() for _ in range(100)}) == 100


class TestPasswordStrength:
    def test_accepts_strong_password(self):
        assert check_password_strength("Str0ng!Pass") == "Str0ng!Pass"

    @pytest.mark.parametrize(
        "password",
        ["Sh0rt!", "alllower1!", "ALLUPPER1!", "NoDigits!!", "NoSpecial11"],
    )
    def test_rejects_weak_passwords(self, password):
        with pytest.raises(ValueError):
            check_password_strength(password)

    def test_rejects_passwords_bcrypt_would_truncate(self):
        with pytest.raises(ValueError, match="72 bytes"):
            check_password_strength("Aa1!" + "x" * 69)
