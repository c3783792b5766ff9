"""
Pagination types for queries.

Provides standardized pagination for list queries.

Example:
    pagination = Pagination(page=2, page_size=20)
    items, total = repository.find_page(user_id, pagination)
    return PaginatedResult(items=items, total_items=total, pagination=pagination)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from tenxcards.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from tenxcards.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Pagination:
    """
    Pagination parameters for list queries.

    Attributes:
        page: Current page number (1-indexed)
        page_size: Number of items per page
    """

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be at least 1", field="page")
        if self.page_size < 1:
            raise ValidationError("Page size must be at least 1", field="page_size")
        if self.page_size > MAX_PAGE_SIZE:
            raise ValidationError(f"Page size cannot exceed {MAX_PAGE_SIZE}", field="page_size")

    @property
    def offset(self) -> int:
        """Calculate the offset for database queries."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Return the limit for database queries."""
        return self.page_size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """
    Paginated result containing items and metadata.

    Attributes:
        items: List of items for the current page
        total_items: Total number of items across all pages
        pagination: The pagination parameters used
    """

    items: list[T]
    total_items: int
    pagination: Pagination

    @property
    def page(self) -> int:
        """Current page number."""
        return self.pagination.page

    @property
    def page_size(self) -> int:
        """Number of items per page."""
        return self.pagination.page_size

    @property
    def total_pages(self) -> int:
        """Total number of pages."""
        if self.total_items == 0:
            return 0
        return (self.total_items + self.pagination.page_size - 1) // self.pagination.page_size
