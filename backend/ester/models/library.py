"""Library ORM - persisted Library rows.

Invariants:
    - id is an autoincrement primary key assigned by the database on insert
    - name is non-nullable

Design Decisions:
    - BIGINT in PostgreSQL, INTEGER on SQLite (only INTEGER PRIMARY KEY autoincrements there)
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ester.db.base import Base

LibraryIdType = BigInteger().with_variant(Integer, "sqlite")


class Library(Base):
    __tablename__ = "library"

    id: Mapped[int] = mapped_column(
        LibraryIdType, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"Library(id={self.id!r}, name={self.name!r}, code={self.code!r})"
