# backend/app/routes/applications.py
"""
Tutor application routes.

Endpoints:
    POST   /applications                  → Apply (tutor)
    GET    /applications                  → All applications (student, admin)
    GET    /applications/{email}          → Applications of one tutor (that tutor or admin)
    PUT    /applications/{id}             → Edit while Pending (applying tutor or admin)
    PATCH  /applications/status/{id}      → Approve / reject (student, admin); PUT accepted
    DELETE /applications/{id}             → Withdraw (applying tutor or admin)
    GET    /my-ongoing-tuitions           → Applications of the caller
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Path

from ..api.dependencies import (
    CurrentCaller,
    get_application_service,
    get_current_caller,
    require_roles,
)
from ..core.constants import ULID_PATH_PATTERN
from ..core.enums import RoleName
from ..core.exceptions import ForbiddenException
from ..schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    ApplicationUpdate,
)
from ..schemas.common import DeleteResult, InsertResult, UpdateResult
from ..services.application_service import ApplicationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["applications"])

require_tutor = require_roles(RoleName.TUTOR)
require_reviewer = require_roles(RoleName.STUDENT, RoleName.ADMIN)


@router.post("/applications", response_model=InsertResult)
async def create_application(
    payload: ApplicationCreate,
    caller: CurrentCaller = Depends(require_tutor),
    application_service: ApplicationService = Depends(get_application_service),
) -> InsertResult:
    """Submit a Pending application on behalf of the calling tutor."""
    application_id = await asyncio.to_thread(
        application_service.create_application,
        tutor_email=caller.email,
        tutor_name=payload.tutor_name,
        tuition_id=payload.tuition_id,
        qualifications=payload.qualifications,
        experience=payload.experience,
        expected_salary=payload.expected_salary,
    )
    return InsertResult(inserted_id=application_id)


@router.get("/applications", response_model=List[ApplicationResponse])
async def list_applications(
    _: CurrentCaller = Depends(require_reviewer),
    application_service: ApplicationService = Depends(get_application_service),
) -> List[ApplicationResponse]:
    applications = await asyncio.to_thread(application_service.list_all)
    return [ApplicationResponse.model_validate(a) for a in applications]


@router.get("/applications/{email}", response_model=List[ApplicationResponse])
async def list_applications_by_tutor(
    email: str,
    caller: CurrentCaller = Depends(get_current_caller),
    application_service: ApplicationService = Depends(get_application_service),
) -> List[ApplicationResponse]:
    if email != caller.email and not caller.is_admin:
        raise ForbiddenException("You may only list your own applications")
    applications = await asyncio.to_thread(application_service.list_by_tutor_email, email)
    return [ApplicationResponse.model_validate(a) for a in applications]


@router.put("/applications/{application_id}", response_model=UpdateResult)
async def update_application(
    payload: ApplicationUpdate,
    application_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    caller: CurrentCaller = Depends(get_current_caller),
    application_service: ApplicationService = Depends(get_application_service),
) -> UpdateResult:
    """
    Edit qualifications, experience and expected salary.

    Returns matchedCount 0 when the application is no longer Pending.
    """
    matched = await asyncio.to_thread(
        application_service.update_if_pending,
        application_id,
        qualifications=payload.qualifications,
        experience=payload.experience,
        expected_salary=payload.expected_salary,
        caller_email=caller.email,
        caller_is_admin=caller.is_admin,
    )
    return UpdateResult.from_matched(matched)


@router.api_route(
    "/applications/status/{application_id}",
    methods=["PATCH", "PUT"],
    response_model=UpdateResult,
)
async def update_application_status(
    payload: ApplicationStatusUpdate,
    application_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    _: CurrentCaller = Depends(require_reviewer),
    application_service: ApplicationService = Depends(get_application_service),
) -> UpdateResult:
    matched = await asyncio.to_thread(
        application_service.update_status, application_id, payload.status
    )
    return UpdateResult.from_matched(matched)


@router.delete("/applications/{application_id}", response_model=DeleteResult)
async def delete_application(
    application_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    caller: CurrentCaller = Depends(get_current_caller),
    application_service: ApplicationService = Depends(get_application_service),
) -> DeleteResult:
    deleted = await asyncio.to_thread(
        application_service.delete_application,
        application_id,
        caller_email=caller.email,
        caller_is_admin=caller.is_admin,
    )
    return DeleteResult(deleted_count=deleted)


@router.get("/my-ongoing-tuitions", response_model=List[ApplicationResponse])
async def my_ongoing_tuitions(
    caller: CurrentCaller = Depends(get_current_caller),
    application_service: ApplicationService = Depends(get_application_service),
) -> List[ApplicationResponse]:
    applications = await asyncio.to_thread(application_service.list_by_tutor_email, caller.email)
    return [ApplicationResponse.model_validate(a) for a in applications]
