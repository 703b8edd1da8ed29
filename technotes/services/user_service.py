"""
TechNotes Backend — User Service (Users Handler Set)
======================================================

What:  Business rules for listing, creating, updating and deleting users.
How:   Linear guard checks over the users and notes repositories, password
       hashing through an injected PasswordHasher.
Who:   Built per request by `technotes.dependencies.get_user_service`.

Referential integrity:
    Notes point at their owner without a foreign key. delete_user() refuses to
    remove a user while any note references it, so a note never outlives its
    owner through this API.

Password handling:
    Hashing is CPU-bound (Argon2), so it runs in Starlette's threadpool to keep
    the event loop free for other requests. Passwords are never logged.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

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
from technotes.schemas.user import UserResponse
from technotes.security import PasswordHasher

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
INVALID_USER_DATA = "Invalid user data"


def _valid_roles(roles: Any) -> bool:
    return isinstance(roles, (list, tuple)) and len(roles) > 0


class UserService:
    """
    Users handler set.

    Dependencies (constructor-injected):
        users:  UserRepository
        notes:  NoteRepository (deletion guard)
        hasher: PasswordHasher
    """

    def __init__(self, users: UserRepository, notes: NoteRepository, hasher: PasswordHasher):
        self.users = users
        self.notes = notes
        self.hasher = hasher

    async def list_users(self) -> List[UserResponse]:
        """
        Return every user, without password.

        Raises:
            EmptyResultError: there are no users
            DatabaseError: the users could not be read
        """
        try:
            users = await self.users.find_all()
        except SQLAlchemyError as e:
            raise DatabaseError(
                message="Failed to list users",
                context={"error_type": type(e).__name__},
            ) from e
        if not users:
            raise EmptyResultError(message="No users found")
        return [UserResponse.model_validate(user) for user in users]

    async def create_user(self, username: Any, password: Any, roles: Any) -> MessageResponse:
        """
        Create a user with a hashed password.

        Guard order:
            1. username, password present and roles a non-empty list
            2. username not taken

        Returns:
            MessageResponse("User <username> created")
        """
        if not username or not password or not _valid_roles(roles):
            raise ValidationError(message="Please enter all fields")

        duplicate = await self.users.find_one(username=username)
        if duplicate is not None:
            raise ConflictError(message="User already exists", field="username")

        hashed = await run_in_threadpool(self.hasher.hash, password)

        try:
            user = await self.users.create(
                username=username,
                password=hashed,
                roles=list(roles),
            )
        except IntegrityError as e:
            logger.info("User create lost a race on username %r", username)
            raise ConflictError(message="User already exists", field="username") from e
        except SQLAlchemyError as e:
            logger.error("User create rejected by store: %s", str(e))
            raise PersistenceError(
                message=INVALID_USER_DATA,
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("User %s created (%s)", user.id, username)
        return MessageResponse(message=f"User {username} created")

    async def update_user(
        self,
        id: Any,
        username: Any,
        roles: Any,
        active: Any,
        password: Optional[str] = None,
    ) -> MessageResponse:
        """
        Update a user's username, roles, active flag and, if given, password.

        Changing a username to the one it already has is allowed; taking
        another user's username is a conflict.

        Raises:
            ValidationError: a required field is missing or has the wrong type
            NotFoundError: no user has this id
            ConflictError: username belongs to a different user
        """
        if not id or not username or not _valid_roles(roles) or not isinstance(active, bool):
            raise ValidationError(message="All fields except password are required")

        user = await self.users.find_by_id(id, lean=False)
        if user is None:
            raise NotFoundError(message=USER_NOT_FOUND, resource="user", resource_id=str(id))

        duplicate = await self.users.find_one(username=username)
        if duplicate is not None and duplicate.id != user.id:
            raise ConflictError(message=f"User {username} already exists", field="username")

        user.username = username
        user.roles = list(roles)
        user.active = active
        if password:
            user.password = await run_in_threadpool(self.hasher.hash, password)

        try:
            updated = await self.users.save(user)
        except IntegrityError as e:
            raise ConflictError(message=f"User {username} already exists", field="username") from e
        except SQLAlchemyError as e:
            logger.error("User update rejected by store: %s", str(e))
            raise PersistenceError(message=INVALID_USER_DATA) from e

        logger.info(
            "User %s updated (password %s)",
            updated.id,
            "changed" if password else "unchanged",
        )
        return MessageResponse(message=f"User {updated.username} updated")

    async def delete_user(self, id: Any) -> MessageResponse:
        """
        Delete a user that owns no notes.

        Guard order:
            1. id present                          → else ValidationError
            2. no note references this user        → else ValidationError
            3. the user exists                     → else NotFoundError
        """
        if not id:
            raise ValidationError(message="ID is required", field="id")

        owned = await self.notes.find_one(user=id)
        if owned is not None:
            logger.info("Refusing to delete user %s: note %s still assigned", id, owned.id)
            raise ValidationError(message="User has assigned notes", context={"user_id": str(id)})

        user = await self.users.find_by_id(id, lean=False)
        if user is None:
            raise NotFoundError(message=USER_NOT_FOUND, resource="user", resource_id=str(id))

        deleted = await self.users.delete(user)
        logger.info("User %s deleted", deleted.id)
        return MessageResponse(message=f"Username {deleted.username} with ID {deleted.id} deleted")
