"""
TechNotes Backend — Users Route Handlers
==========================================

What:  GET, POST on /users; PATCH, DELETE on /users/{user_id}.

Which id wins:
    PATCH and DELETE accept the id in the JSON body. When the body omits it,
    the path segment is used, so `DELETE /users/<id>` with no body works too.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends

from technotes.dependencies import get_user_service
from technotes.schemas.common import ErrorResponse, MessageResponse
from technotes.schemas.user import (
    UserCreateRequest,
    UserDeleteRequest,
    UserResponse,
    UserUpdateRequest,
)
from technotes.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.get(
    "/users",
    response_model=List[UserResponse],
    responses={
        400: {"description": "No users found", "model": ErrorResponse},
    },
    summary="List all users (passwords never included)",
)
async def list_users(
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    return await service.list_users()


@router.post(
    "/users",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing fields", "model": ErrorResponse},
        409: {"description": "Duplicate username", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    payload: UserCreateRequest,
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    return await service.create_user(
        username=payload.username,
        password=payload.password,
        roles=payload.roles,
    )


@router.patch(
    "/users/{user_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing/invalid fields or user not found", "model": ErrorResponse},
        409: {"description": "Duplicate username", "model": ErrorResponse},
    },
    summary="Update a user",
)
async def update_user(
    user_id: str,
    payload: UserUpdateRequest,
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    return await service.update_user(
        id=payload.id or user_id,
        username=payload.username,
        roles=payload.roles,
        active=payload.active,
        password=payload.password,
    )


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing id, user has notes, or user not found", "model": ErrorResponse},
    },
    summary="Delete a user that owns no notes",
)
async def delete_user(
    user_id: str,
    payload: Optional[UserDeleteRequest] = Body(default=None),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    body_id = payload.id if payload is not None else None
    return await service.delete_user(id=body_id or user_id)
