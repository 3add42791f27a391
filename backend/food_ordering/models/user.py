"""
Food Ordering Backend — User SQLAlchemy Model
===============================================

What:  ORM model representing the `users` table.
Who:   Used by CredentialStore and by Alembic for schema management.

Table Design:
    - UUID primary key, generated in Python so it is known before flush
    - username / email: each backed by its own unique index; the store
      also checks them before insert, the index catches concurrent races
    - password_hash: bcrypt output ("$2b$<rounds>$<salt><hash>", 60 chars)
    - role: 'user' | 'admin', stored as a short string
    - created_at / updated_at: UTC, maintained by the ORM on write
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from food_ordering.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    A registered account.

    Lifecycle:
        1. Created by CredentialStore.register (role = 'user')
        2. password_hash replaced only by CredentialStore.set_password
        3. No update/delete through the HTTP API
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    # Stored lower-cased; the store normalizes before every lookup
    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
    )

    # Never the plaintext; excluded from every response schema
    password_hash: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
    )

    role: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=UserRole.USER.value,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    def __repr__(self) -> str:
        # password_hash deliberately left out
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
