"""
TechNotes Backend — Request-Scoped Service Wiring
===================================================

What:  FastAPI dependencies that assemble a handler set for each request.
Why:   Services get their persistence collaborators through the constructor
       instead of reaching for module-level singletons, so tests can hand them
       mocks and each request works against its own session.
How:   get_db_session yields the request's AsyncSession; the factories below
       wrap it in repositories and build the service.

Usage in a route:
    @router.get("/notes")
    async def list_notes(service: NoteService = Depends(get_note_service)):
        return await service.list_notes()
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.database import get_db_session
from technotes.repositories.note_repository import NoteRepository
from technotes.repositories.user_repository import UserRepository
from technotes.security import PasswordHasher, get_password_hasher
from technotes.services.note_service import NoteService
from technotes.services.user_service import UserService


def get_note_service(db: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(notes=NoteRepository(db), users=UserRepository(db))


def get_user_service(
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(users=UserRepository(db), notes=NoteRepository(db), hasher=hasher)
