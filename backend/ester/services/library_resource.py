"""Library Resource - create/update/list/get/delete for Library, as tagged outcomes.

Invariants:
    - Holds a non-owning LibraryService reference injected at construction; no other state
    - Each operation makes at most one service call; service errors propagate untouched
    - Create with an id present -> 400 idexists, no service call
    - Update without an id -> Create (or 400 idnull when allow_put_create is off)
    - Get of an unknown id -> 404 with empty body
    - Delete is idempotent: 200 whether or not the id existed

Design Decisions:
    - Operations return ResourceOutcome instead of raising for expected client failures;
      the route layer turns outcomes into HTTP responses
    - Alert and pagination headers built by pure helpers in core/
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from ester.core.domain_types import LIBRARY_ENTITY_NAME, LibraryId
from ester.core.errors import ClientValidationError, EsterError, ResourceNotFoundError
from ester.core.header_util import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
    create_failure_alert,
)
from ester.core.pagination import Pageable, build_page
from ester.core.repository_protocols import LibraryService
from ester.infrastructure.observability import timed
from ester.schemas.library import LibraryDTO

logger = logging.getLogger(__name__)

LIBRARIES_PATH = "/api/libraries"


@dataclass(frozen=True)
class ResourceOutcome:
    """Status, body and headers of one handled request.

    body is None for empty responses. error is set when the outcome reports
    a client-side failure (400/404) rather than a success.
    """
    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    error: EsterError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LibraryResource:
    """REST operations for managing Library."""

    def __init__(
        self,
        service: LibraryService,
        application_name: str = "esterApp",
        allow_put_create: bool = True,
    ):
        self.service = service
        self.application_name = application_name
        self.allow_put_create = allow_put_create

    @timed("LibraryResource.create_library")
    async def create_library(self, library: LibraryDTO) -> ResourceOutcome:
        """POST /libraries: create a new library."""
        logger.debug(f"REST request to save Library: {library}")
        if library.id is not None:
            return self._reject(ClientValidationError(
                "A new library cannot already have an ID",
                LIBRARY_ENTITY_NAME, "idexists",
            ))
        result = await self.service.save(library)
        headers = {"Location": f"{LIBRARIES_PATH}/{result.id}"}
        headers.update(create_entity_creation_alert(
            self.application_name, LIBRARY_ENTITY_NAME, str(result.id),
        ))
        return ResourceOutcome(201, body=result, headers=headers)

    @timed("LibraryResource.update_library")
    async def update_library(self, library: LibraryDTO) -> ResourceOutcome:
        """PUT /libraries: update an existing library, or create one when no id is given."""
        logger.debug(f"REST request to update Library: {library}")
        if library.id is None:
            if not self.allow_put_create:
                return self._reject(ClientValidationError(
                    "Invalid id", LIBRARY_ENTITY_NAME, "idnull",
                ))
            return await self.create_library(library)
        result = await self.service.save(library)
        return ResourceOutcome(
            200,
            body=result,
            headers=create_entity_update_alert(
                self.application_name, LIBRARY_ENTITY_NAME, str(library.id),
            ),
        )

    @timed("LibraryResource.get_all_libraries")
    async def get_all_libraries(self, pageable: Pageable) -> ResourceOutcome:
        """GET /libraries: one page of libraries with pagination headers."""
        logger.debug("REST request to get a page of Libraries")
        page = await self.service.find_all(pageable)
        body, headers = build_page(
            page.content, page.total_elements, pageable, LIBRARIES_PATH,
        )
        return ResourceOutcome(200, body=body, headers=headers)

    @timed("LibraryResource.get_library")
    async def get_library(self, library_id: LibraryId) -> ResourceOutcome:
        """GET /libraries/{id}: the library, or 404."""
        logger.debug(f"REST request to get Library: {library_id}")
        library = await self.service.find_one(library_id)
        if library is None:
            return ResourceOutcome(
                404, error=ResourceNotFoundError(LIBRARY_ENTITY_NAME, str(library_id)),
            )
        return ResourceOutcome(200, body=library)

    @timed("LibraryResource.delete_library")
    async def delete_library(self, library_id: LibraryId) -> ResourceOutcome:
        """DELETE /libraries/{id}: remove the library if present."""
        logger.debug(f"REST request to delete Library: {library_id}")
        await self.service.delete(library_id)
        return ResourceOutcome(
            200,
            headers=create_entity_deletion_alert(
                self.application_name, LIBRARY_ENTITY_NAME, str(library_id),
            ),
        )

    def _reject(self, error: ClientValidationError) -> ResourceOutcome:
        logger.warning(
            f"Rejected {error.entity_name} request: {error.message}",
            extra={"entity": error.entity_name, "error_code": error.error_key},
        )
        return ResourceOutcome(
            error.http_status,
            body=error.to_response(),
            headers=create_failure_alert(
                self.application_name, error.entity_name, error.error_key,
            ),
            error=error,
        )
