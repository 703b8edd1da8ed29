"""
TechNotes Backend — Note Request/Response Schemas
===================================================

What:  Pydantic models defining the notes API contract.
How:   FastAPI validates request bodies against the *Request models and
       serializes responses through the *Response models (by alias, so
       timestamps go out as createdAt / updatedAt).

Why request fields are all Optional:
    Presence checks ("Please enter all fields", "All fields are required")
    are business rules owned by NoteService, which reports them as
    ValidationError with the endpoint's own message. The schemas only enforce
    types, strictly: "completed": "yes" is rejected rather than coerced to True.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictBool, StrictStr


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(BaseModel):
    """Body of POST /notes."""
    user: Optional[StrictStr] = Field(default=None, description="Owning user's id")
    title: Optional[StrictStr] = Field(default=None, description="Unique note title")
    text: Optional[StrictStr] = Field(default=None, description="Note body")


class NoteUpdateRequest(BaseModel):
    """Body of PATCH /notes. Every field is required; the update replaces all three values."""
    id: Optional[StrictStr] = Field(default=None, description="Id of the note to update")
    title: Optional[StrictStr] = Field(default=None)
    text: Optional[StrictStr] = Field(default=None)
    completed: Optional[StrictBool] = Field(default=None)


class NoteDeleteRequest(BaseModel):
    """Body of DELETE /notes."""
    id: Optional[StrictStr] = Field(default=None, description="Id of the note to delete")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a stored note.
    Who:   Embedded in PATCH /notes responses; base of the list item.
    """
    id: uuid.UUID = Field(description="Unique note identifier")
    user: uuid.UUID = Field(description="Owning user's id")
    title: str
    text: str
    completed: bool
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = {"from_attributes": True}


class NoteWithUsername(NoteResponse):
    """
    What:  A note enriched with its owner's username.
    Who:   Returned as array items by GET /notes.

    username is null when the owning user no longer resolves.
    """
    username: Optional[str] = Field(default=None, description="Owner's username")


class NoteUpdateResponse(BaseModel):
    """Returned by PATCH /notes: outcome message plus the record as stored."""
    message: str = Field(default="Note updated")
    updated_note: NoteResponse = Field(serialization_alias="updatedNote")
