"""Create users and menu_items tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Initial schema: `users` (unique email and username) and `menu_items`.
Rollback: downgrade() drops both tables (all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        # bcrypt hash, never the plaintext
        sa.Column("password_hash", sa.String(128), nullable=False),
        sa.Column(
            "role",
            sa.String(16),
            nullable=False,
            server_default=sa.text("'user'"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )
    # The unique indexes are what serialize concurrent duplicate registrations
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "menu_items",
        sa.Column("seq", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("image_url", sa.String(2048), nullable=True),
        sa.PrimaryKeyConstraint("seq"),
        sa.CheckConstraint("price >= 0", name="ck_menu_items_price_non_negative"),
    )
    op.create_index("ix_menu_items_id", "menu_items", ["id"], unique=True)
    op.create_index("ix_menu_items_category", "menu_items", ["category"])


def downgrade() -> None:
    op.drop_index("ix_menu_items_category", table_name="menu_items")
    op.drop_index("ix_menu_items_id", table_name="menu_items")
    op.drop_table("menu_items")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
