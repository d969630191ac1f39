# backend/app/routes/users.py
"""
User account routes.

Endpoints:
    GET    /users          → Every user except the caller (admin)
    PUT    /users          → Insert on first login, touch last login afterwards (auth)
    PATCH  /users/{id}     → Overwrite name/email/role/status/verified (admin)
    DELETE /users/{id}     → Delete a user (admin)
    GET    /user/role      → Role stored for the caller (auth)
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Path

from ..api.dependencies import CurrentCaller, get_user_service, require_admin
from ..auth import get_current_user_email
from ..core.constants import ULID_PATH_PATTERN
from ..core.exceptions import ForbiddenException
from ..schemas.common import DeleteResult, UpdateResult, UpsertResult
from ..schemas.user import RoleResponse, UserPatchRequest, UserResponse, UserUpsertRequest
from ..services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    caller: CurrentCaller = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    users = await asyncio.to_thread(user_service.list_all_except, caller.email)
    return [UserResponse.model_validate(u) for u in users]


@router.put("/users", response_model=UpsertResult)
async def upsert_user(
    payload: UserUpsertRequest,
    email: str = Depends(get_current_user_email),
    user_service: UserService = Depends(get_user_service),
) -> UpsertResult:
    """
    Record a sign-in.

    The body email must be the caller's verified email. First sign-ins
    report ``upsertedId``; later ones report a matched update.
    """
    if payload.email != email:
        raise ForbiddenException("Body email does not match the signed-in user")

    result = await asyncio.to_thread(
        user_service.upsert,
        email,
        name=payload.name,
        photo_url=payload.photo_url,
        role=payload.role,
    )
    if result.created:
        return UpsertResult(
            matched_count=0, modified_count=0, upserted_id=result.user.id, upserted_count=1
        )
    return UpsertResult(matched_count=1, modified_count=1)


@router.patch("/users/{user_id}", response_model=UpdateResult)
async def patch_user(
    payload: UserPatchRequest,
    user_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    _: CurrentCaller = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> UpdateResult:
    matched = await asyncio.to_thread(
        user_service.patch_profile,
        user_id,
        name=payload.name,
        email=payload.email,
        role=payload.role,
        status=payload.status,
        verified=payload.verified,
    )
    return UpdateResult.from_matched(matched)


@router.delete("/users/{user_id}", response_model=DeleteResult)
async def delete_user(
    user_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    _: CurrentCaller = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> DeleteResult:
    deleted = await asyncio.to_thread(user_service.delete, user_id)
    return DeleteResult(deleted_count=deleted)


@router.get("/user/role", response_model=RoleResponse)
async def get_user_role(
    email: str = Depends(get_current_user_email),
    user_service: UserService = Depends(get_user_service),
) -> RoleResponse:
    role = await asyncio.to_thread(user_service.get_role, email)
    return RoleResponse(role=role)
