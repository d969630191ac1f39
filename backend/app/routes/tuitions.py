# backend/app/routes/tuitions.py
"""
Tuition posting routes.

Endpoints:
    POST   /tuitions                  → Create a posting (student, admin)
    GET    /tuitions                  → Public board: Approved postings only
    GET    /my-tuitions               → Postings created by the caller
    GET    /admin/tuitions            → Every posting, optional ?status= (admin)
    PUT    /tuitions/{id}             → Edit a posting (poster or admin)
    DELETE /tuitions/{id}             → Delete a posting (poster or admin)
    PATCH  /tuition/status/{id}       → Moderate a posting (admin)
    GET    /all-tuitions              → Search with ?search&filterClass&location&sort
    GET    /latest-tuitions           → Newest postings for the homepage
    GET    /tuitions-listing          → Paginated listing with ?page&size
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from ..api.dependencies import (
    CurrentCaller,
    get_current_caller,
    get_tuition_service,
    require_admin,
    require_roles,
)
from ..core.config import settings
from ..core.constants import DEFAULT_PAGE, MAX_PAGE, MAX_PAGE_SIZE, ULID_PATH_PATTERN
from ..core.enums import RoleName, TuitionStatus
from ..schemas.common import DeleteResult, InsertResult, UpdateResult
from ..schemas.tuition import (
    TuitionCreate,
    TuitionListingResponse,
    TuitionResponse,
    TuitionStatusUpdate,
    TuitionUpdate,
)
from ..services.tuition_service import TuitionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tuitions"])

require_poster = require_roles(RoleName.STUDENT, RoleName.ADMIN)


def parse_positive_int(raw: Optional[str], default: int, maximum: Optional[int] = None) -> int:
    """
    Query-string integer; absent, non-numeric or < 1 falls back to ``default``.

    Values above ``maximum`` are clamped to it.
    """
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    if value < 1:
        return default
    return min(value, maximum) if maximum is not None else value


@router.post("/tuitions", response_model=InsertResult, status_code=status.HTTP_200_OK)
async def create_tuition(
    payload: TuitionCreate,
    caller: CurrentCaller = Depends(require_poster),
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> InsertResult:
    """Create a Pending posting owned by the caller."""
    tuition_id = await asyncio.to_thread(
        tuition_service.create_posting,
        subject=payload.subject,
        class_level=payload.class_level,
        location=payload.location,
        budget=payload.budget,
        description=payload.description,
        posted_by_email=caller.email,
    )
    return InsertResult(inserted_id=tuition_id)


@router.get("/tuitions", response_model=List[TuitionResponse])
async def list_approved_tuitions(
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> List[TuitionResponse]:
    postings = await asyncio.to_thread(tuition_service.list_approved)
    return [TuitionResponse.model_validate(p) for p in postings]


@router.get("/my-tuitions", response_model=List[TuitionResponse])
async def list_my_tuitions(
    caller: CurrentCaller = Depends(get_current_caller),
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> List[TuitionResponse]:
    postings = await asyncio.to_thread(tuition_service.list_postings, posted_by_email=caller.email)
    return [TuitionResponse.model_validate(p) for p in postings]


@router.get("/admin/tuitions", response_model=List[TuitionResponse])
async def list_all_tuitions_for_admin(
    status_filter: Optional[TuitionStatus] = Query(None, alias="status"),
    _: CurrentCaller = Depends(require_admin),
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> List[TuitionResponse]:
    postings = await asyncio.to_thread(
        tuition_service.list_postings,
        status=status_filter.value if status_filter else None,
    )
    return [TuitionResponse.model_validate(p) for p in postings]


@router.put("/tuitions/{tuition_id}", response_model=UpdateResult)
async def update_tuition(
    payload: TuitionUpdate,
    tuition_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    caller: CurrentCaller = Depends(get_current_caller),
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> UpdateResult:
    matched = await asyncio.to_thread(
        tuition_service.update_posting,
        tuition_id,
        subject=payload.subject,
        class_level=payload.class_level,
        location=payload.location,
        budget=payload.budget,
        caller_email=caller.email,
        caller_is_admin=caller.is_admin,
    )
    return UpdateResult.from_matched(matched)


@router.delete("/tuitions/{tuition_id}", response_model=DeleteResult)
async def delete_tuition(
    tuition_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    caller: CurrentCaller = Depends(get_current_caller),
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> DeleteResult:
    deleted = await asyncio.to_thread(
        tuition_service.delete_posting,
        tuition_id,
        caller_email=caller.email,
        caller_is_admin=caller.is_admin,
    )
    return DeleteResult(deleted_count=deleted)


@router.patch("/tuition/status/{tuition_id}", response_model=UpdateResult)
async def update_tuition_status(
    payload: TuitionStatusUpdate,
    tuition_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    _: CurrentCaller = Depends(require_admin),
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> UpdateResult:
    matched = await asyncio.to_thread(tuition_service.update_status, tuition_id, payload.status)
    return UpdateResult.from_matched(matched)


@router.get("/all-tuitions", response_model=List[TuitionResponse])
async def search_tuitions(
    search: Optional[str] = Query(None, description="Case-insensitive subject substring"),
    filter_class: Optional[str] = Query(None, alias="filterClass"),
    location: Optional[str] = Query(None, description="Case-insensitive location substring"),
    sort: Optional[str] = Query(None, description="budgetLow | budgetHigh | newest"),
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> List[TuitionResponse]:
    postings = await asyncio.to_thread(
        tuition_service.search,
        subject=search,
        class_level=filter_class,
        location=location,
        sort=sort,
    )
    return [TuitionResponse.model_validate(p) for p in postings]


@router.get("/latest-tuitions", response_model=List[TuitionResponse])
async def latest_tuitions(
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> List[TuitionResponse]:
    postings = await asyncio.to_thread(tuition_service.list_latest)
    return [TuitionResponse.model_validate(p) for p in postings]


@router.get("/tuitions-listing", response_model=TuitionListingResponse)
async def tuitions_listing(
    page: Optional[str] = Query(None),
    size: Optional[str] = Query(None),
    tuition_service: TuitionService = Depends(get_tuition_service),
) -> TuitionListingResponse:
    """Newest-first page of postings with the unpaged total."""
    items, total = await asyncio.to_thread(
        tuition_service.list_paginated,
        parse_positive_int(page, DEFAULT_PAGE, MAX_PAGE),
        parse_positive_int(size, settings.default_page_size, MAX_PAGE_SIZE),
    )
    return TuitionListingResponse(
        result=[TuitionResponse.model_validate(p) for p in items],
        total_count=total,
    )
