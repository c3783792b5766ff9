"""
Application common module.

Contains shared types for the application layer:
- Pagination: Page request parameters
- PaginatedResult: One page of items with totals
"""

from .pagination import PaginatedResult, Pagination

__all__ = [
    "PaginatedResult",
    "Pagination",
]
