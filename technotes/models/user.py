"""
TechNotes Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.
Who:   Used by UserRepository for CRUD operations and by Alembic for schema management.

Table Design:
    - UUID primary key generated in Python on insert
    - username: unique index backs the duplicate-username check
    - password: Argon2 hash, never the plaintext
    - roles: JSON array of role labels; the service guarantees it is non-empty
    - active: defaults to true
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, Boolean, DateTime, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from technotes.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    An account that can own notes.

    Lifecycle:
        1. Created by POST /users with a hashed password
        2. Updated in place by PATCH /users/{id} (password only when supplied)
        3. Physically deleted by DELETE /users/{id}, refused while notes reference it
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(String(100), nullable=False)

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Argon2 hash of the user's password",
    )

    roles: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=lambda: ["Employee"],
    )

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("uq_users_username", "username", unique=True),
    )

    def __repr__(self) -> str:
        # Password hash deliberately left out of the repr
        return f"<User(id={self.id}, username='{self.username}', active={self.active})>"
