"""
Food Ordering Backend — Auth Route Handlers
=============================================

What:  POST /api/register, POST /api/login and GET /api/me.
How:   Register/login each make one CredentialStore call. Login issues a
       signed access token; /api/me resolves that token back to a user.

Both login failure kinds (unknown email, wrong password) return the same
401 body. The store logs which one it was.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from food_ordering.database import get_db_session
from food_ordering.exceptions import AuthError, NotFoundError
from food_ordering.models.user import User, UserRole
from food_ordering.schemas.common import ErrorResponse
from food_ordering.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserProfileResponse,
)
from food_ordering.security import create_access_token, decode_access_token
from food_ordering.services.credential_store import credential_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError(reason=AuthError.INVALID_TOKEN, message="Not authenticated.")
    return authorization.split(" ", 1)[1].strip()


async def get_current_user(
    token: str = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the bearer token to a User; any failure is a 401."""
    payload = decode_access_token(token)
    try:
        user_id = uuid.UUID(str(payload["sub"]))
        return await credential_store.get_by_id(db, user_id)
    except (ValueError, NotFoundError) as e:
        logger.info("Token subject %r does not resolve to a user: %s", payload.get("sub"), type(e).__name__)
        raise AuthError(reason=AuthError.INVALID_TOKEN, message="Could not validate credentials.")


@router.post(
    "/register",
    status_code=201,
    response_model=RegisterResponse,
    responses={
        400: {"description": "Missing fields", "model": ErrorResponse},
        409: {"description": "Email or username already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> RegisterResponse:
    user = await credential_store.register(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return RegisterResponse(
        message="User registered successfully!",
        user_id=user.id,
        username=user.username,
        email=user.email,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Missing email or password", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Authenticate and receive an access token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    user = await credential_store.authenticate(db, email=payload.email, password=payload.password)
    token = create_access_token(str(user.id), extra_claims={"role": user.role})
    return LoginResponse(
        message="Logged in successfully!",
        token=token,
        user_id=user.id,
        username=user.username,
        email=user.email,
        role=UserRole(user.role),
    )


@router.get(
    "/me",
    response_model=UserProfileResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Profile of the authenticated user",
)
async def me(current_user: User = Depends(get_current_user)) -> UserProfileResponse:
    return UserProfileResponse(
        user_id=current_user.id,
        username=current_user.username,
        email=current_user.email,
        role=UserRole(current_user.role),
        created_at=current_user.created_at,
    )
