"""
Pagination schemas.
"""

from __future__ import annotations

from pydantic import Field

from nepstay.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from nepstay.repositories.base.pagination import PageInfo, PaginationRequest
from nepstay.schemas.common.base import BaseFilterSchema, BaseSchema

__all__ = ["PaginationParams", "PaginationMeta"]


class PaginationParams(BaseFilterSchema):
    """Page request accepted on list endpoints."""

    page: int = Field(default=DEFAULT_PAGE, ge=1, description="Page number (1-indexed)")
    limit: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Items per page",
    )

    def to_request(self) -> PaginationRequest:
        return PaginationRequest(page=self.page, per_page=self.limit)


class PaginationMeta(BaseSchema):
    """Pagination block of list responses."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_page_info(cls, page_info: PageInfo) -> "PaginationMeta":
        return cls(
            page=page_info.current_page,
            limit=page_info.per_page,
            total=page_info.total_items,
            total_pages=page_info.total_pages,
            has_next_page=page_info.has_next,
            has_prev_page=page_info.has_previous,
        )
