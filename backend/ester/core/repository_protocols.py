"""Boundary Protocols - contracts between the resource layer and persistence.

Invariants:
    - The resource layer only sees the LibraryService protocol, never a session or ORM row
    - Implementations are provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, so test fakes need no inheritance
    - Async methods: implementations do IO
"""

from typing import Protocol

from ester.core.domain_types import LibraryId
from ester.core.pagination import Page, Pageable
from ester.schemas.library import LibraryDTO


class LibraryService(Protocol):
    """Contract for Library persistence, the sole owner of stored state and id assignment."""

    async def save(self, library: LibraryDTO) -> LibraryDTO:
        """Insert when id is None, otherwise upsert under the given id."""
        ...

    async def find_all(self, pageable: Pageable) -> Page:
        """Return one page of LibraryDTOs plus the total collection size."""
        ...

    async def find_one(self, library_id: LibraryId) -> LibraryDTO | None: ...

    async def delete(self, library_id: LibraryId) -> None:
        """Remove the Library if present. Deleting an absent id is not an error."""
        ...
