"""
TechNotes Backend — User Request/Response Schemas
===================================================

What:  Pydantic models defining the users API contract.

Security:
    UserResponse has no password field at all, so neither the hash nor any
    other credential can leak through a response, whatever the caller passes in.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, StrictBool, StrictStr


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserCreateRequest(BaseModel):
    """Body of POST /users."""
    username: Optional[StrictStr] = Field(default=None)
    password: Optional[StrictStr] = Field(default=None)
    roles: Optional[List[StrictStr]] = Field(
        default=None,
        description='Non-empty list of role labels, e.g. ["Employee"]',
    )


class UserUpdateRequest(BaseModel):
    """
    Body of PATCH /users/{id}.

    password is optional: when omitted or empty the stored hash is kept.
    id may be omitted, in which case the path segment is used.
    """
    id: Optional[StrictStr] = Field(default=None)
    username: Optional[StrictStr] = Field(default=None)
    roles: Optional[List[StrictStr]] = Field(default=None)
    active: Optional[StrictBool] = Field(default=None)
    password: Optional[StrictStr] = Field(default=None)


class UserDeleteRequest(BaseModel):
    """Body of DELETE /users/{id}."""
    id: Optional[StrictStr] = Field(default=None)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """
    What:  Public representation of a user.
    Who:   Returned as array items by GET /users.
    """
    id: uuid.UUID
    username: str
    roles: List[str]
    active: bool
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = {"from_attributes": True}
