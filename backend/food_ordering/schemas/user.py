"""
Food Ordering Backend — User / Auth Schemas
=============================================

What:  Request and response contracts for /api/register, /api/login, /api/me.

No response model here has a password or password hash field; User rows are
never serialized directly.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from food_ordering.models.user import UserRole
from food_ordering.schemas.common import ApiModel


USERNAME_MAX_LENGTH = 64
EMAIL_MAX_LENGTH = 320


# Password length is checked in bytes by the credential store, not here
class RegisterRequest(ApiModel):
    username: Optional[str] = Field(default=None, max_length=USERNAME_MAX_LENGTH)
    email: Optional[str] = Field(default=None, max_length=EMAIL_MAX_LENGTH)
    password: Optional[str] = None


class LoginRequest(ApiModel):
    email: Optional[str] = Field(default=None, max_length=EMAIL_MAX_LENGTH)
    password: Optional[str] = None


class RegisterResponse(ApiModel):
    """Returned by POST /api/register with HTTP 201."""
    message: str = "User registered successfully!"
    user_id: uuid.UUID
    username: str
    email: str


class LoginResponse(ApiModel):
    """
    Returned by POST /api/login.

    `token` is a signed JWT to send back as `Authorization: Bearer <token>`.
    """
    message: str = "Logged in successfully!"
    token: str = Field(description="Signed access token (JWT)")
    token_type: str = "bearer"
    user_id: uuid.UUID
    username: str
    email: str
    role: UserRole


class UserProfileResponse(ApiModel):
    """Returned by GET /api/me."""
    user_id: uuid.UUID
    username: str
    email: str
    role: UserRole
    created_at: datetime
