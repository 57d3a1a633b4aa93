"""Library Service - SQLAlchemy implementation of the LibraryService protocol.

Invariants:
    - save() with id None inserts and lets the database assign the id
    - save() with an id upserts under that id (session.merge), never reassigning it
    - On PostgreSQL an explicit-id save moves the id sequence past every stored id,
      so later inserts never collide with upserted rows
    - delete() on an absent id is a no-op
    - find_all() always orders deterministically (id ascending as tiebreaker)

Design Decisions:
    - One commit per mutating call: each REST request maps to one unit of work
    - Sort keys resolved against SORTABLE_FIELDS only, so user input never reaches SQL text
"""

import logging

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from ester.core.domain_types import LibraryId
from ester.core.pagination import Page, Pageable, SortOrder
from ester.models.library import Library
from ester.schemas.library import SORTABLE_FIELDS, LibraryDTO

logger = logging.getLogger(__name__)

_SYNC_ID_SEQUENCE = text(
    f"SELECT setval(pg_get_serial_sequence('{Library.__tablename__}', 'id'), "
    f"GREATEST((SELECT COALESCE(MAX(id), 1) FROM {Library.__tablename__}), "
    f"COALESCE(pg_sequence_last_value("
    f"pg_get_serial_sequence('{Library.__tablename__}', 'id')::regclass), 1)))"
)


class SqlAlchemyLibraryService:
    """Library persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, library: LibraryDTO) -> LibraryDTO:
        logger.debug(f"Request to save Library: {library}")
        fields = library.model_dump(exclude={"id"})
        if library.id is None:
            row = Library(**fields)
            self.db.add(row)
        else:
            row = await self.db.merge(Library(id=library.id, **fields))
            await self.db.flush()
            await self._sync_id_sequence()
        await self.db.commit()
        await self.db.refresh(row)
        return LibraryDTO.model_validate(row)

    async def _sync_id_sequence(self) -> None:
        """Advance the PostgreSQL id sequence past client-supplied ids."""
        if self.db.bind is None or self.db.bind.dialect.name != "postgresql":
            return
        await self.db.execute(_SYNC_ID_SEQUENCE)

    async def find_all(self, pageable: Pageable) -> Page:
        logger.debug("Request to get all Libraries")
        total = await self.db.scalar(select(func.count()).select_from(Library))
        query = (
            select(Library)
            .order_by(*_order_by(pageable.sort))
            .offset(pageable.offset)
            .limit(pageable.size)
        )
        result = await self.db.execute(query)
        return Page(
            content=[LibraryDTO.model_validate(r) for r in result.scalars().all()],
            total_elements=total or 0,
            pageable=pageable,
        )

    async def find_one(self, library_id: LibraryId) -> LibraryDTO | None:
        logger.debug(f"Request to get Library: {library_id}")
        row = await self.db.get(Library, library_id)
        return LibraryDTO.model_validate(row) if row else None

    async def delete(self, library_id: LibraryId) -> None:
        logger.debug(f"Request to delete Library: {library_id}")
        row = await self.db.get(Library, library_id)
        if row is None:
            return
        await self.db.delete(row)
        await self.db.commit()


def _order_by(sort: tuple[SortOrder, ...]) -> list:
    """Translate SortOrders to column clauses, always ending on id."""
    clauses = []
    keys = set()
    for order in sort:
        if order.key not in SORTABLE_FIELDS or order.key in keys:
            continue
        column = getattr(Library, order.key)
        clauses.append(column.asc() if order.ascending else column.desc())
        keys.add(order.key)
    if "id" not in keys:
        clauses.append(Library.id.asc())
    return clauses
