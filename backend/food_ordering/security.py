"""
Food Ordering Backend — Password Hashing and Access Tokens
============================================================

What:  bcrypt password hashing/verification and JWT issue/decode helpers.
Who:   CredentialStore (hashing) and the auth routes (tokens).

Password hashing:
    bcrypt with a per-hash random salt and a tunable cost factor
    (settings.bcrypt_rounds). The salt and cost are encoded in the hash
    string itself, so verification needs only the stored hash.

    bcrypt only reads the first 72 bytes of its input. Longer passwords are
    rejected instead of being truncated, so two different passwords can
    never share a hash.

    hash_password/verify_password are CPU-bound (tens of milliseconds).
    The async wrappers run them in Starlette's thread pool so a login does
    not stall every other request on the event loop.

Access tokens:
    HS256 JWT with `sub` (user id), `role` and `exp` claims.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt
from starlette.concurrency import run_in_threadpool

from food_ordering.config import settings
from food_ordering.exceptions import AuthError, ValidationError

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72

# Compared against when an email is unknown so both login failures cost one
# bcrypt verification. Generated lazily with the configured cost.
_dummy_hash: Optional[bytes] = None


def check_password_length(password: str) -> bytes:
    """Return the UTF-8 bytes of `password`; ValidationError past the bcrypt limit."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes long.",
            field="password",
        )
    return encoded


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Return a salted bcrypt hash of `password` as a str."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(check_password_length(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check `password` against a stored bcrypt hash.

    Returns False (never raises) for over-long passwords or a corrupt
    stored hash; callers only need a yes/no answer.
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        logger.error("Stored password hash is not a valid bcrypt hash")
        return False


def burn_verification(password: str) -> None:
    """Spend one bcrypt verification on a throwaway hash."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    bcrypt.checkpw(password.encode("utf-8")[:MAX_PASSWORD_BYTES], _dummy_hash)


async def hash_password_async(password: str) -> str:
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await run_in_threadpool(verify_password, password, password_hash)


async def burn_verification_async(password: str) -> None:
    await run_in_threadpool(burn_verification, password)


def create_access_token(
    subject: str,
    extra_claims: Optional[Dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed JWT for `subject` (the user id as a string).

    Args:
        subject:       value of the `sub` claim
        extra_claims:  additional claims (e.g. {"role": "admin"})
        expires_delta: lifetime; defaults to settings.access_token_expire_minutes
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode: Dict[str, Any] = dict(extra_claims or {})
    to_encode.update({"sub": subject, "iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        AuthError: token is malformed, expired, badly signed, or has no `sub`
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthError(
            reason=AuthError.INVALID_TOKEN,
            message="Could not validate credentials.",
            context={"jwt_error": type(e).__name__},
        )
    if not payload.get("sub"):
        raise AuthError(reason=AuthError.INVALID_TOKEN, message="Could not validate credentials.")
    return payload
