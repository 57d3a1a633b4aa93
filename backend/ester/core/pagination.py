"""Pagination - pageable request parameters, result pages, and pagination headers.

Invariants:
    - Pageable.page >= 0 and 1 <= Pageable.size <= max_size (oversized requests are clamped)
    - Page.content never holds more than pageable.size items
    - build_page() emits X-Total-Count equal to the total collection size
    - Link header always carries "last" and "first"; "next"/"prev" only when such a page exists
    - check_offset() rejects pages whose offset exceeds MAX_ROW_OFFSET (a signed 64-bit OFFSET)

Design Decisions:
    - Sort syntax mirrors the common "property[,property...][,asc|desc]" query form
    - Pure module: the service executes the query, this module only shapes inputs and outputs
"""

import math
from dataclasses import dataclass, field
from typing import Any, Sequence

from ester.core.domain_types import SortDirection
from ester.core.errors import ClientValidationError

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 2000
MAX_ROW_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class SortOrder:
    key: str
    direction: SortDirection = SortDirection.ASC

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASC


@dataclass(frozen=True)
class Pageable:
    """Page index, page size and sort order for a list query."""
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: tuple[SortOrder, ...] = ()

    @classmethod
    def of(
        cls,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
        sort: Sequence[SortOrder] = (),
        max_size: int = MAX_PAGE_SIZE,
    ) -> "Pageable":
        return cls(
            page=max(page, 0),
            size=min(max(size, 1), max_size),
            sort=tuple(sort),
        )

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page:
    """One slice of a collection plus the metadata needed to page through it."""
    content: list = field(default_factory=list)
    total_elements: int = 0
    pageable: Pageable = field(default_factory=Pageable)

    @property
    def number(self) -> int:
        return self.pageable.page

    @property
    def size(self) -> int:
        return self.pageable.size

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0


def parse_sort(
    values: Sequence[str], allowed: frozenset[str], entity_name: str,
) -> tuple[SortOrder, ...]:
    """Parse repeated ``sort`` query values into SortOrders.

    Each value is ``prop[,prop...][,asc|desc]``; the trailing direction applies
    to every property in that value. Raises ClientValidationError on unknown
    properties so a bad query string is a 400, not a database error.
    """
    orders: list[SortOrder] = []
    for raw in values:
        tokens = [t.strip() for t in raw.split(",") if t.strip()]
        if not tokens:
            continue
        direction = SortDirection.ASC
        if tokens[-1].lower() in (d.value for d in SortDirection):
            direction = SortDirection(tokens.pop().lower())
        if not tokens:
            raise ClientValidationError(
                f"Sort parameter '{raw}' names no property",
                entity_name, "sort.invalid",
            )
        for prop in tokens:
            if prop not in allowed:
                raise ClientValidationError(
                    f"Cannot sort by unknown property '{prop}'",
                    entity_name, "sort.invalid",
                )
            orders.append(SortOrder(prop, direction))
    return tuple(orders)


def check_offset(pageable: Pageable, entity_name: str) -> Pageable:
    """Reject pages whose row offset cannot be bound as a database OFFSET."""
    if pageable.offset > MAX_ROW_OFFSET:
        raise ClientValidationError(
            f"Page {pageable.page} of size {pageable.size} is out of range",
            entity_name, "page.invalid",
        )
    return pageable


def generate_uri(base_url: str, page: int, size: int) -> str:
    return f"{base_url}?page={page}&size={size}"


def generate_pagination_headers(page: Page, base_url: str) -> dict[str, str]:
    """X-Total-Count plus an RFC 5988 Link header for next/prev/last/first."""
    links = []
    if page.has_next:
        links.append(f'<{generate_uri(base_url, page.number + 1, page.size)}>; rel="next"')
    if page.has_previous:
        links.append(f'<{generate_uri(base_url, page.number - 1, page.size)}>; rel="prev"')
    last_page = max(page.total_pages - 1, 0)
    links.append(f'<{generate_uri(base_url, last_page, page.size)}>; rel="last"')
    links.append(f'<{generate_uri(base_url, 0, page.size)}>; rel="first"')
    return {
        "X-Total-Count": str(page.total_elements),
        "Link": ",".join(links),
    }


def build_page(
    items: Sequence[Any], total_count: int, pageable: Pageable, base_url: str,
) -> tuple[list, dict[str, str]]:
    """Shape a page of items into (response body, pagination headers)."""
    page = Page(
        content=list(items)[: pageable.size],
        total_elements=total_count,
        pageable=pageable,
    )
    return page.content, generate_pagination_headers(page, base_url)
