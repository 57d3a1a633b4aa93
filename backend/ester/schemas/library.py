"""Library Schemas - Pydantic models for the /api/libraries boundary.

Invariants:
    - id is optional: absent on create, present on update/get/delete; BIGINT range
    - name: 1-255 chars, stripped, non-empty
    - from_attributes=True so ORM rows convert without hand-written mapping
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ester.core.domain_types import MAX_LIBRARY_ID, MIN_LIBRARY_ID


class LibraryDTO(BaseModel):
    """Wire representation of a Library."""
    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(None, ge=MIN_LIBRARY_ID, le=MAX_LIBRARY_ID)
    name: str = Field(min_length=1, max_length=255)
    code: str | None = Field(None, max_length=50)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


SORTABLE_FIELDS: frozenset[str] = frozenset({"id", "name", "code"})
