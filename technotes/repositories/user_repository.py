"""
User persistence.

Lean user records never carry the password hash. Code that needs the hash
(updating a password) works on the hydrated instance instead.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from technotes.models.user import User
from technotes.repositories.base import SQLAlchemyRepository


@dataclass(frozen=True)
class UserRecord:
    """Immutable snapshot of a users row, password excluded."""

    id: uuid.UUID
    username: str
    roles: Tuple[str, ...]
    active: bool
    created_at: datetime
    updated_at: datetime


class UserRepository(SQLAlchemyRepository[User, UserRecord]):
    model = User

    def to_record(self, instance: User) -> UserRecord:
        return UserRecord(
            id=instance.id,
            username=instance.username,
            roles=tuple(instance.roles or ()),
            active=instance.active,
            created_at=instance.created_at,
            updated_at=instance.updated_at,
        )
