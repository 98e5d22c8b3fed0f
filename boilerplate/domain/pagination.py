"""Pagination and sort helpers shared by the service and API layers.

All functions are pure: they compute page windows, link ranges and sort
toggles from plain integers and strings.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


class SortField(str, enum.Enum):
    """Columns a user listing may be ordered by."""

    id = "id"
    name = "name"
    email = "email"

    @classmethod
    def parse(cls, value: str | None) -> "SortField":
        """Parse a query value, falling back to ``id`` on unrecognised input."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.id


class SortDirection(str, enum.Enum):
    asc = "asc"
    desc = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortDirection":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.asc

    def flipped(self) -> "SortDirection":
        return SortDirection.desc if self is SortDirection.asc else SortDirection.asc


def total_pages_for(total_rows: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return math.ceil(total_rows / page_size)


@dataclass
class Paged(Generic[T]):
    """A slice of rows plus the paging information needed to render it."""

    data: list[T] = field(default_factory=list)
    total_rows: int = 0
    current_page: int = 1
    page_size: int = 10
    order_by: SortField = SortField.id
    direction: SortDirection = SortDirection.asc

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_rows, self.page_size)


@dataclass(frozen=True, slots=True)
class PageWindow:
    total_pages: int
    current_page: int
    has_previous: bool
    has_next: bool
    previous_page: int | None
    next_page: int | None
    first_page: int | None
    last_page: int | None


def paginate(total_rows: int, page_size: int, current_page: int) -> PageWindow:
    """Compute navigation flags for ``current_page`` of a result set."""
    total_pages = total_pages_for(total_rows, page_size)
    has_previous = current_page > 1
    has_next = current_page < total_pages
    return PageWindow(
        total_pages=total_pages,
        current_page=current_page,
        has_previous=has_previous,
        has_next=has_next,
        previous_page=min(current_page - 1, total_pages) if has_previous and total_pages > 0 else None,
        next_page=current_page + 1 if has_next else None,
        first_page=1 if total_pages > 0 else None,
        last_page=total_pages if total_pages > 0 else None,
    )


def link_range(total_pages: int, current_page: int, max_links: int) -> tuple[int, int]:
    """
    Compute the inclusive (start, end) page numbers to render as links.

    - All pages when total_pages <= max_links
    - Otherwise a window of exactly max_links pages centred on current_page,
      shifted to stay within [1, total_pages]

    An empty result set yields (1, 0), i.e. ``range(start, end + 1)`` is empty.
    """
    if max_links <= 0:
        raise ValueError("max_links must be positive")
    if total_pages <= 0:
        return 1, 0
    if total_pages <= max_links:
        return 1, total_pages

    current_page = min(max(current_page, 1), total_pages)
    start = current_page - max_links // 2
    if start < 1:
        start = 1
    end = start + max_links - 1
    if end > total_pages:
        end = total_pages
        start = end - max_links + 1
    return start, end


def toggle_sort_direction(
    current_order: str | SortField,
    requested: str | SortField,
    current_direction: str | SortDirection,
) -> SortDirection:
    """Direction a sort link for ``requested`` should carry.

    Clicking the column already sorted on flips the direction; any other
    column starts ascending.
    """
    if SortField.parse(requested) is SortField.parse(current_order):
        return SortDirection.parse(current_direction).flipped()
    return SortDirection.asc
