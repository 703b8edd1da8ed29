"""Note persistence: lean snapshot type and the repository over the notes table."""

import uuid
from dataclasses import dataclass
from datetime import datetime

from technotes.models.note import Note
from technotes.repositories.base import SQLAlchemyRepository


@dataclass(frozen=True)
class NoteRecord:
    """Immutable snapshot of a notes row."""

    id: uuid.UUID
    user: uuid.UUID
    title: str
    text: str
    completed: bool
    created_at: datetime
    updated_at: datetime


class NoteRepository(SQLAlchemyRepository[Note, NoteRecord]):
    model = Note

    def to_record(self, instance: Note) -> NoteRecord:
        return NoteRecord(
            id=instance.id,
            user=instance.user,
            title=instance.title,
            text=instance.text,
            completed=instance.completed,
            created_at=instance.created_at,
            updated_at=instance.updated_at,
        )
