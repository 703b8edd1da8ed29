"""
TechNotes Backend — Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteRepository for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key generated in Python on insert
    - user_id: owning user. No foreign-key constraint; the services check the
      owner exists at creation and refuse to delete a user who still owns notes
    - title: unique index backs the duplicate-title check
    - created_at / updated_at: maintained by the ORM on insert and update

    Index on user_id:
        Serves the "does this user own any note?" lookup run before every
        user deletion.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, String, Text, Uuid
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column

from technotes.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A note owned by exactly one user.

    Lifecycle:
        1. Created by POST /notes (completed = false)
        2. Title, text and completed replaced together by PATCH /notes
        3. Physically deleted by DELETE /notes
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Attribute is `user` to match the API field; the column is `user_id`
    # because USER is a reserved word in PostgreSQL.
    user: Mapped[uuid.UUID] = mapped_column(
        "user_id",
        Uuid,
        nullable=False,
        comment="Owning user's id (application-enforced reference)",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=sql_text("false"),
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
        Index("uq_notes_title", "title", unique=True),
        Index("idx_notes_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', completed={self.completed})>"
