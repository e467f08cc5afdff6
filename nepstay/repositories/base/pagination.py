"""
Offset pagination helpers.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, TypeVar

from nepstay.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE

T = TypeVar("T")


@dataclass
class PaginationRequest:
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass
class PageInfo:
    """Pagination metadata."""

    current_page: int
    per_page: int
    total_items: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def create(cls, page: int, per_page: int, total_items: int) -> "PageInfo":
        total_pages = math.ceil(total_items / per_page) if per_page else 0
        return cls(
            current_page=page,
            per_page=per_page,
            total_items=total_items,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.current_page,
            "limit": self.per_page,
            "total": self.total_items,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next,
            "hasPrevPage": self.has_previous,
        }


@dataclass
class PaginatedResult(Generic[T]):
    items: List[T] = field(default_factory=list)
    page_info: PageInfo = None

    @property
    def count(self) -> int:
        return len(self.items)
