from typing import Generic, TypeVar
from pydantic import BaseModel

from boilerplate.domain.pagination import SortDirection, SortField

T = TypeVar("T")


class PageLinks(BaseModel):
    """Paginator state: navigation flags plus the window of page links to render."""

    total_pages: int
    has_previous: bool
    has_next: bool
    previous_page: int | None = None
    next_page: int | None = None
    first_page: int | None = None
    last_page: int | None = None
    pages: list[int]


class SortLink(BaseModel):
    """Query parameters a column header link should carry."""

    order: SortField
    direction: SortDirection


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response schema."""

    data: list[T]
    total_rows: int
    current_page: int
    page_size: int
    total_pages: int
    order_by: SortField
    direction: SortDirection
    paginator: PageLinks
    sort_links: dict[str, SortLink]
