"""
TechNotes Backend — Notes Route Handlers
==========================================

What:  GET, POST, PATCH and DELETE on /notes.
How:   Parses the body, delegates to NoteService, returns its response model.
       Failures are raised by the service and formatted by the global
       exception handlers in main.py.

Note that PATCH and DELETE carry the note id in the JSON body, not the path.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from technotes.dependencies import get_note_service
from technotes.schemas.common import ErrorResponse, MessageResponse
from technotes.schemas.note import (
    NoteCreateRequest,
    NoteDeleteRequest,
    NoteUpdateRequest,
    NoteUpdateResponse,
    NoteWithUsername,
)
from technotes.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteWithUsername],
    responses={
        400: {"description": "No notes found", "model": ErrorResponse},
    },
    summary="List all notes with their owner's username",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteWithUsername]:
    return await service.list_notes()


@router.post(
    "/notes",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing fields or unknown user", "model": ErrorResponse},
        409: {"description": "Duplicate note title", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreateRequest,
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    return await service.create_note(
        user=payload.user,
        title=payload.title,
        text=payload.text,
    )


@router.patch(
    "/notes",
    response_model=NoteUpdateResponse,
    responses={
        400: {"description": "Missing/invalid fields or note not found", "model": ErrorResponse},
        409: {"description": "Duplicate note title", "model": ErrorResponse},
    },
    summary="Replace a note's title, text and completed flag",
)
async def update_note(
    payload: NoteUpdateRequest,
    service: NoteService = Depends(get_note_service),
) -> NoteUpdateResponse:
    return await service.update_note(
        id=payload.id,
        title=payload.title,
        text=payload.text,
        completed=payload.completed,
    )


@router.delete(
    "/notes",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing id or note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    payload: NoteDeleteRequest,
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    return await service.delete_note(id=payload.id)
