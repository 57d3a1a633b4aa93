"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - LibraryId wraps int: the server-assigned identifier of a persisted Library
    - Alert events and sort directions encoded as Enums (no raw string matching)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

LibraryId = NewType("LibraryId", int)

# Signed 64-bit range of the BIGINT id column
MIN_LIBRARY_ID = -(2**63)
MAX_LIBRARY_ID = 2**63 - 1

LIBRARY_ENTITY_NAME = "library"


# ─── Enums ───────────────────────────────────────────────────────

class AlertEvent(str, Enum):
    """Mutations announced to clients through the alert header."""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
