"""
TechNotes Backend — Repositories Package
==========================================

What:  Persistence collaborators used by the services layer.
How:   One repository per table, each bound to the request's AsyncSession.

Repository Inventory:
    - NoteRepository: notes table, lean NoteRecord snapshots
    - UserRepository: users table, lean UserRecord snapshots (no password)
"""

from technotes.repositories.base import SQLAlchemyRepository, parse_id
from technotes.repositories.note_repository import NoteRecord, NoteRepository
from technotes.repositories.user_repository import UserRecord, UserRepository

__all__ = [
    "NoteRecord",
    "NoteRepository",
    "SQLAlchemyRepository",
    "UserRecord",
    "UserRepository",
    "parse_id",
]
