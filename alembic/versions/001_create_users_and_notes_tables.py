"""Create users and notes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-16 00:00:00.000000+00:00

What:  Creates the `users` and `notes` tables with their unique indexes.
How:   Portable column types (Uuid, JSON) so the same migration runs on
       PostgreSQL and SQLite.

Unique indexes:
    uq_users_username and uq_notes_title back the duplicate checks done in
    the services. A write that races past a check fails here instead.

Rollback: downgrade() drops both tables (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column(
            "password",
            sa.String(255),
            nullable=False,
            comment="Argon2 hash of the user's password",
        ),
        sa.Column("roles", sa.JSON(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_users_username", "users", ["username"], unique=True)

    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False),
        # No foreign key: ownership is checked by the application
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            comment="Owning user's id (application-enforced reference)",
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_notes_title", "notes", ["title"], unique=True)
    op.create_index("idx_notes_user_id", "notes", ["user_id"])


def downgrade() -> None:
    op.drop_index("idx_notes_user_id", table_name="notes")
    op.drop_index("uq_notes_title", table_name="notes")
    op.drop_table("notes")
    op.drop_index("uq_users_username", table_name="users")
    op.drop_table("users")
