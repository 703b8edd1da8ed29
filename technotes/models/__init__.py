"""ORM models. Importing this package registers every table on Base.metadata."""

from technotes.models.note import Note
from technotes.models.user import User

__all__ = ["Note", "User"]
