"""
TechNotes Backend — Note Service (Notes Handler Set)
======================================================

What:  Business rules for listing, creating, updating and deleting notes.
Why:   Keeps guard checks and uniqueness rules independent of HTTP concerns.
How:   Each operation is a linear chain of awaited repository calls: guard
       checks first, then at most one mutating call.
Who:   Built per request by `technotes.dependencies.get_note_service` and called
       by the /notes route handlers.

Dependencies (constructor-injected):
    notes: NoteRepository: the notes collection
    users: UserRepository: owner existence checks and list enrichment

Concurrency caveat:
    Uniqueness is checked before writing, with no lock in between. Two requests
    racing on the same title can both pass the check; the unique index on
    notes.title then rejects the second write, which surfaces here as
    IntegrityError and is reported as ConflictError like the pre-check.
"""

import logging
from dataclasses import asdict
from typing import Any, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from technotes.exceptions import (
    ConflictError,
    DatabaseError,
    EmptyResultError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from technotes.repositories.note_repository import NoteRepository
from technotes.repositories.user_repository import UserRepository
from technotes.schemas.common import MessageResponse
from technotes.schemas.note import NoteResponse, NoteUpdateResponse, NoteWithUsername

logger = logging.getLogger(__name__)

DUPLICATE_TITLE = "Note title already exists"
INVALID_NOTE_DATA = "Invalid note data"
NOTE_NOT_FOUND = "Note does not exist"


class NoteService:
    """
    Notes handler set.

    Responsibilities:
        - list_notes():  every note, enriched with its owner's username
        - create_note(): validate, check title and owner, persist
        - update_note(): validate, check existence and title, replace fields
        - delete_note(): validate, check existence, delete
    """

    def __init__(self, notes: NoteRepository, users: UserRepository):
        self.notes = notes
        self.users = users

    async def list_notes(self) -> List[NoteWithUsername]:
        """
        Return all notes with the owner's username attached.

        Owners are resolved one at a time, in list order. A note whose owner
        cannot be found is still returned, with username = None.

        Raises:
            EmptyResultError: there are no notes at all
            DatabaseError: the notes could not be read
        """
        try:
            notes = await self.notes.find_all()
        except SQLAlchemyError as e:
            raise DatabaseError(
                message="Failed to list notes",
                context={"error_type": type(e).__name__},
            ) from e
        if not notes:
            raise EmptyResultError(message="No notes found")

        enriched: List[NoteWithUsername] = []
        for note in notes:
            owner = await self.users.find_by_id(note.user)
            if owner is None:
                logger.warning("Note %s references missing user %s", note.id, note.user)
            enriched.append(
                NoteWithUsername(
                    **asdict(note),
                    username=owner.username if owner is not None else None,
                )
            )
        return enriched

    async def create_note(self, user: Any, title: Any, text: Any) -> MessageResponse:
        """
        Create a note owned by `user`.

        Guard order:
            1. user, title and text all present   → else ValidationError
            2. title not used by any note         → else ConflictError
            3. user resolves to an existing User  → else ValidationError

        Returns:
            MessageResponse("Note <title> created")

        Raises:
            ValidationError, ConflictError, PersistenceError
        """
        if not user or not title or not text:
            raise ValidationError(message="Please enter all fields")

        duplicate = await self.notes.find_one(title=title)
        if duplicate is not None:
            raise ConflictError(message=DUPLICATE_TITLE, field="title")

        owner = await self.users.find_by_id(user)
        if owner is None:
            raise ValidationError(message="User does not exist", field="user")

        try:
            note = await self.notes.create(user=owner.id, title=title, text=text)
        except IntegrityError as e:
            logger.info("Note create lost a race on title %r", title)
            raise ConflictError(message=DUPLICATE_TITLE, field="title") from e
        except SQLAlchemyError as e:
            logger.error("Note create rejected by store: %s", str(e))
            raise PersistenceError(
                message=INVALID_NOTE_DATA,
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %s created for user %s", note.id, owner.id)
        return MessageResponse(message=f"Note {title} created")

    async def update_note(
        self, id: Any, title: Any, text: Any, completed: Any
    ) -> NoteUpdateResponse:
        """
        Replace title, text and completed on an existing note.

        Renaming a note to its own current title is allowed; taking another
        note's title is a conflict.

        Raises:
            ValidationError: a field is missing, or completed is not a bool
            NotFoundError: no note has this id
            ConflictError: another note already has this title
            PersistenceError: the note vanished before the write
        """
        if not id or not title or not text or not isinstance(completed, bool):
            raise ValidationError(message="All fields are required")

        note = await self.notes.find_by_id(id, lean=False)
        if note is None:
            raise NotFoundError(message=NOTE_NOT_FOUND, resource="note", resource_id=str(id))

        duplicate = await self.notes.find_one(title=title)
        if duplicate is not None and duplicate.id != note.id:
            raise ConflictError(message=DUPLICATE_TITLE, field="title")

        try:
            updated = await self.notes.update_by_id(
                note.id, {"title": title, "text": text, "completed": completed}
            )
        except IntegrityError as e:
            raise ConflictError(message=DUPLICATE_TITLE, field="title") from e
        except SQLAlchemyError as e:
            logger.error("Note update rejected by store: %s", str(e))
            raise PersistenceError(message=INVALID_NOTE_DATA) from e

        if updated is None:
            raise PersistenceError(message=INVALID_NOTE_DATA, context={"note_id": str(id)})

        logger.info("Note %s updated", updated.id)
        return NoteUpdateResponse(
            message="Note updated",
            updated_note=NoteResponse.model_validate(updated),
        )

    async def delete_note(self, id: Any) -> MessageResponse:
        """
        Delete a note by id.

        Returns:
            MessageResponse("Note '<title>' with ID <id> deleted")
        """
        if not id:
            raise ValidationError(message="Note ID required", field="id")

        note = await self.notes.find_by_id(id, lean=False)
        if note is None:
            raise NotFoundError(message=NOTE_NOT_FOUND, resource="note", resource_id=str(id))

        deleted = await self.notes.delete(note)
        logger.info("Note %s deleted", deleted.id)
        return MessageResponse(message=f"Note '{deleted.title}' with ID {deleted.id} deleted")
