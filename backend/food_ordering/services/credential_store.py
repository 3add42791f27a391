"""
Food Ordering Backend — Credential Store
==========================================

What:  Owns User entities: registration, password verification, password
       changes and lookup by id.
Who:   Called by the auth route handlers; calls security helpers and the
       database session.

Flows:
    register:      validate → email taken? → username taken? → hash → insert
    authenticate:  validate → lookup by email → bcrypt compare
    set_password:  validate → lookup by id → hash → update

Hashing is an explicit step in register/set_password. Nothing re-hashes a
password as a side effect of saving a User.

Error Handling Strategy:
    Input problems raise ValidationError before the database is touched.
    The unique indexes on users.email / users.username are the final word on
    uniqueness: an IntegrityError on commit (two concurrent registrations)
    becomes ConflictError. Any other driver failure becomes InternalError.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from food_ordering.exceptions import (
    AuthError,
    ConflictError,
    FoodOrderingError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from food_ordering.models.user import User, UserRole, utcnow
from food_ordering.security import (
    burn_verification_async,
    check_password_length,
    hash_password_async,
    verify_password_async,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class CredentialStore:
    """
    Business logic for user credentials.

    Stateless: every method receives the request's AsyncSession.
    """

    async def register(
        self,
        db: AsyncSession,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> User:
        """
        Create a new user with a bcrypt-hashed password.

        Args:
            db: Async database session
            username: Display/login name, unique
            email: Login key, unique (stored lower-cased)
            password: Plaintext password, never persisted

        Returns:
            The persisted User (role = 'user')

        Raises:
            ValidationError: Any field empty, or password too long
            ConflictError: Email or username already registered
            InternalError: Database failure
        """
        if _is_blank(username) or _is_blank(email) or _is_blank(password):
            raise ValidationError(message="All fields are required.")
        check_password_length(password)

        username = username.strip()
        email = normalize_email(email)

        try:
            if await self._find_by_email(db, email) is not None:
                raise ConflictError(
                    message="User with this email already exists.", field="email"
                )
            existing = await db.execute(select(User.id).where(User.username == username))
            if existing.scalar_one_or_none() is not None:
                raise ConflictError(
                    message="User with this username already exists.", field="username"
                )

            password_hash = await hash_password_async(password)
            user = User(
                username=username,
                email=email,
                password_hash=password_hash,
                role=UserRole.USER.value,
            )
            db.add(user)
            await db.commit()

        except FoodOrderingError:
            raise
        except IntegrityError as e:
            await db.rollback()
            logger.warning("Concurrent registration conflict for %s: %s", email, type(e).__name__)
            raise ConflictError(
                message="User with this email or username already exists.",
                context={"original_error": type(e).__name__},
            )
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise InternalError(
                message="Server error during registration.",
                context={"original_error": type(e).__name__},
            )

        logger.info("User registered: %s (%s)", user.id, user.username)
        return user

    async def authenticate(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str],
    ) -> User:
        """
        Verify an email/password pair.

        Both failure kinds raise AuthError with the same user-facing message;
        `reason` tells them apart in the log. An unknown email still pays for
        one bcrypt comparison so response time does not reveal which accounts
        exist.

        Raises:
            ValidationError: email or password empty, or password too long
            AuthError: reason "not found" or "bad credentials"
            InternalError: Database failure
        """
        if _is_blank(email) or _is_blank(password):
            raise ValidationError(message="Please enter email and password.")
        # Rejected before the lookup so known and unknown emails answer alike
        check_password_length(password)

        email = normalize_email(email)
        try:
            user = await self._find_by_email(db, email)
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise InternalError(
                message="Server error during login.",
                context={"original_error": type(e).__name__},
            )

        if user is None:
            await burn_verification_async(password)
            logger.info("Login failed for %s: %s", email, AuthError.NOT_FOUND)
            raise AuthError(reason=AuthError.NOT_FOUND)

        if not await verify_password_async(password, user.password_hash):
            logger.info("Login failed for %s: %s", email, AuthError.BAD_CREDENTIALS)
            raise AuthError(reason=AuthError.BAD_CREDENTIALS)

        logger.info("User logged in: %s", user.id)
        return user

    async def set_password(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        password: Optional[str],
    ) -> User:
        """
        Replace a user's password with a freshly salted hash.

        Raises:
            ValidationError: password empty or too long
            NotFoundError: no user with that id
            InternalError: Database failure
        """
        if _is_blank(password):
            raise ValidationError(message="Password is required.", field="password")
        check_password_length(password)

        user = await self.get_by_id(db, user_id)
        try:
            user.password_hash = await hash_password_async(password)
            user.updated_at = utcnow()
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error updating password for %s: %s", user_id, str(e))
            raise InternalError(
                message="Server error updating password.",
                context={"user_id": str(user_id)},
            )

        logger.info("Password changed for user %s", user_id)
        return user

    async def get_by_id(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        """
        Fetch a user by id.

        Raises:
            NotFoundError: no user with that id
            InternalError: Database failure
        """
        try:
            result = await db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise InternalError(context={"user_id": str(user_id)})

        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    async def _find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()


credential_store = CredentialStore()
