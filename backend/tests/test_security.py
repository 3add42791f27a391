"""
Food Ordering Backend — Security Helper Unit Tests
====================================================

What:  bcrypt hashing/verification and JWT issue/decode.
How:   Pure function tests; BCRYPT_ROUNDS=4 (set in conftest) keeps them fast.
"""

from datetime import timedelta

import pytest

from food_ordering.exceptions import AuthError, ValidationError
from food_ordering.security import (
    MAX_PASSWORD_BYTES,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
    verify_password_async,
    hash_password_async,
)


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("pw1")
        assert hashed != "pw1"
        assert "pw1" not in hashed

    def test_hash_uses_bcrypt_with_configured_rounds(self):
        hashed = hash_password("pw1")
        assert hashed.startswith("$2b$04$")
        assert len(hashed) == 60

    def test_same_password_gets_different_salts(self):
        assert hash_password("pw1") != hash_password("pw1")

    def test_verify_correct_password(self):
        hashed = hash_password("correct horse")
        assert verify_password("correct horse", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("correct horse")
        assert verify_password("correct horse!", hashed) is False
        assert verify_password("", hashed) is False

    def test_verify_unicode_password(self):
        hashed = hash_password("pässwörd-密码")
        assert verify_password("pässwörd-密码", hashed) is True
        assert verify_password("passwort-密码", hashed) is False

    def test_password_over_limit_rejected(self):
        with pytest.raises(ValidationError, match="at most"):
            hash_password("x" * (MAX_PASSWORD_BYTES + 1))

    def test_password_at_limit_accepted(self):
        password = "x" * MAX_PASSWORD_BYTES
        assert verify_password(password, hash_password(password)) is True

    def test_over_limit_password_never_verifies(self):
        # Would collide with the 72-byte prefix if it were truncated
        hashed = hash_password("x" * MAX_PASSWORD_BYTES)
        assert verify_password("x" * (MAX_PASSWORD_BYTES + 1), hashed) is False

    def test_verify_against_corrupt_hash(self):
        assert verify_password("pw1", "not-a-bcrypt-hash") is False

    @pytest.mark.asyncio
    async def test_async_wrappers_round_trip(self):
        hashed = await hash_password_async("pw1")
        assert await verify_password_async("pw1", hashed) is True
        assert await verify_password_async("pw2", hashed) is False


class TestAccessTokens:

    def test_round_trip(self):
        token = create_access_token("user-123", extra_claims={"role": "admin"})
        payload = decode_access_token(token)
        assert payload["sub"] == "user-123"
        assert payload["role"] == "admin"
        assert payload["exp"] > payload["iat"]

    def test_expired_token_rejected(self):
        token = create_access_token("user-123", expires_delta=timedelta(seconds=-5))
        with pytest.raises(AuthError) as exc_info:
            decode_access_token(token)
        assert exc_info.value.reason == AuthError.INVALID_TOKEN

    def test_tampered_token_rejected(self):
        token = create_access_token("user-123")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(AuthError):
            decode_access_token(tampered)

    def test_garbage_token_rejected(self):
        with pytest.raises(AuthError):
            decode_access_token("not.a.jwt")
