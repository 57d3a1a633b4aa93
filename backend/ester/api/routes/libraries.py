"""Library Routes - HTTP surface for /api/libraries.

Invariants:
    - Request bodies validated by Pydantic (LibraryDTO) before reaching the handler
    - Handlers only build a LibraryResource, call one operation, and translate its outcome
    - Sort parameters are checked against SORTABLE_FIELDS before any query runs
    - Path ids outside the BIGINT range and out-of-range pages are 400s, never driver errors

Design Decisions:
    - LibraryResource built per request from the request-scoped AsyncSession
    - Pagination params parsed in a dependency so every list endpoint shares the rules
"""

import logging

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ester.api.responses import to_response
from ester.config import Settings, get_settings
from ester.core.domain_types import (
    LIBRARY_ENTITY_NAME, MAX_LIBRARY_ID, MIN_LIBRARY_ID, LibraryId,
)
from ester.core.pagination import Pageable, check_offset, parse_sort
from ester.infrastructure.database import get_db
from ester.schemas.library import SORTABLE_FIELDS, LibraryDTO
from ester.services.library_resource import LibraryResource
from ester.services.library_service import SqlAlchemyLibraryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/libraries", tags=["libraries"])


def get_library_resource(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> LibraryResource:
    return LibraryResource(
        SqlAlchemyLibraryService(db),
        application_name=settings.application_name,
        allow_put_create=settings.allow_put_create,
    )


def get_pageable(
    page: int = Query(0, ge=0),
    size: int | None = Query(None, ge=1),
    sort: list[str] | None = Query(None),
    settings: Settings = Depends(get_settings),
) -> Pageable:
    """Build a Pageable from ?page=&size=&sort= (sort repeatable)."""
    pageable = Pageable.of(
        page=page,
        size=size or settings.default_page_size,
        sort=parse_sort(sort or [], SORTABLE_FIELDS, LIBRARY_ENTITY_NAME),
        max_size=settings.max_page_size,
    )
    return check_offset(pageable, LIBRARY_ENTITY_NAME)


@router.post(
    "", response_model=LibraryDTO, status_code=status.HTTP_201_CREATED,
)
async def create_library(
    body: LibraryDTO, resource: LibraryResource = Depends(get_library_resource),
) -> Response:
    """Create a new library. 400 if the body already carries an id."""
    return to_response(await resource.create_library(body))


@router.put("", response_model=LibraryDTO)
async def update_library(
    body: LibraryDTO, resource: LibraryResource = Depends(get_library_resource),
) -> Response:
    """Update a library; a body without id is treated as a create."""
    return to_response(await resource.update_library(body))


@router.get("", response_model=list[LibraryDTO])
async def get_all_libraries(
    pageable: Pageable = Depends(get_pageable),
    resource: LibraryResource = Depends(get_library_resource),
) -> Response:
    """List libraries with X-Total-Count and Link pagination headers."""
    return to_response(await resource.get_all_libraries(pageable))


@router.get("/{library_id}", response_model=LibraryDTO)
async def get_library(
    library_id: int = Path(ge=MIN_LIBRARY_ID, le=MAX_LIBRARY_ID),
    resource: LibraryResource = Depends(get_library_resource),
) -> Response:
    return to_response(await resource.get_library(LibraryId(library_id)))


@router.delete("/{library_id}")
async def delete_library(
    library_id: int = Path(ge=MIN_LIBRARY_ID, le=MAX_LIBRARY_ID),
    resource: LibraryResource = Depends(get_library_resource),
) -> Response:
    return to_response(await resource.delete_library(LibraryId(library_id)))
